"""Tests for the /api/versions endpoints."""

from tests.conftest import make_snippet_payload


def _create_snippet(client, **overrides) -> str:
    return client.post("/api/snippets", json=make_snippet_payload(**overrides)).json()["id"]


def _history(client, snippet_id: str) -> list[dict]:
    return client.get(f"/api/versions/snippet/{snippet_id}").json()


class TestVersions:

    def test_new_snippet_has_initial_version(self, client):
        snippet_id = _create_snippet(client)
        resp = client.get(f"/api/versions/snippet/{snippet_id}")
        assert resp.status_code == 200
        versions = resp.json()
        assert len(versions) == 1
        assert versions[0]["version_number"] == 1
        assert versions[0]["change_description"] == "initial version"

    def test_history_404_for_missing_snippet(self, client):
        resp = client.get("/api/versions/snippet/missing")
        assert resp.status_code == 404

    def test_manual_create_version(self, client):
        snippet_id = _create_snippet(client)
        resp = client.post(
            f"/api/versions/snippet/{snippet_id}",
            json={"change_description": "checkpoint"},
        )
        assert resp.status_code == 201
        assert resp.json()["version_number"] == 2
        assert resp.json()["change_description"] == "checkpoint"

    def test_manual_create_version_without_body(self, client):
        snippet_id = _create_snippet(client)
        resp = client.post(f"/api/versions/snippet/{snippet_id}")
        assert resp.status_code == 201
        assert resp.json()["change_description"] == "version update"

    def test_create_version_404_for_missing_snippet(self, client):
        resp = client.post("/api/versions/snippet/missing", json={})
        assert resp.status_code == 404

    def test_get_latest_version(self, client):
        snippet_id = _create_snippet(client)
        client.put(f"/api/snippets/{snippet_id}", json={"code": "v2"})

        resp = client.get(f"/api/versions/snippet/{snippet_id}/latest")
        assert resp.status_code == 200
        version = resp.json()
        assert version["version_number"] == 2
        assert version["code"] == "v2"
        assert version["snippet_id"] == snippet_id

    def test_get_version(self, client):
        snippet_id = _create_snippet(client)
        version_id = _history(client, snippet_id)[0]["id"]
        resp = client.get(f"/api/versions/{version_id}")
        assert resp.status_code == 200
        assert resp.json()["id"] == version_id

    def test_get_missing_version_404(self, client):
        resp = client.get("/api/versions/missing")
        assert resp.status_code == 404
        assert resp.json()["error"] == "VERSION_NOT_FOUND"


class TestRestore:

    def test_restore_round_trip(self, client):
        snippet_id = _create_snippet(client)
        v1_id = _history(client, snippet_id)[0]["id"]
        client.put(f"/api/snippets/{snippet_id}", json={"code": "a\nx\nc"})

        resp = client.post(f"/api/versions/snippet/{snippet_id}/restore/{v1_id}")
        assert resp.status_code == 200
        assert resp.json()["restored_version_id"] == v1_id

        versions = _history(client, snippet_id)
        assert [v["version_number"] for v in versions] == [4, 3, 2, 1]
        assert versions[0]["change_description"] == "restored to version 1"
        assert versions[1]["change_description"] == "backup before restoring to version 1"
        assert client.get(f"/api/snippets/{snippet_id}").json()["code"] == "a\nb\nc"

    def test_restore_unknown_version_404(self, client):
        snippet_id = _create_snippet(client)
        resp = client.post(f"/api/versions/snippet/{snippet_id}/restore/missing")
        assert resp.status_code == 404
        assert len(_history(client, snippet_id)) == 1

    def test_restore_version_of_other_snippet_404(self, client):
        first = _create_snippet(client)
        second = _create_snippet(client, title="Other")
        foreign_id = _history(client, second)[0]["id"]
        resp = client.post(f"/api/versions/snippet/{first}/restore/{foreign_id}")
        assert resp.status_code == 404


class TestCompare:

    def test_compare_versions(self, client):
        snippet_id = _create_snippet(client)
        client.put(f"/api/snippets/{snippet_id}", json={"code": "a\nx\nc"})
        v2, v1 = (v["id"] for v in _history(client, snippet_id))

        resp = client.get(f"/api/versions/compare/{v1}/{v2}")
        assert resp.status_code == 200
        body = resp.json()
        assert body["code_changed"] is True
        assert body["title_changed"] is False
        assert [d["diff_type"] for d in body["code_differences"]] == ["Unchanged", "Modified", "Unchanged"]
        assert body["code_differences"][1] == {
            "line_number": 2,
            "diff_type": "Modified",
            "from_content": "b",
            "to_content": "x",
        }

    def test_compare_across_snippets_400(self, client):
        a = _history(client, _create_snippet(client))[0]["id"]
        b = _history(client, _create_snippet(client, title="Other"))[0]["id"]
        resp = client.get(f"/api/versions/compare/{a}/{b}")
        assert resp.status_code == 400
        assert resp.json()["error"] == "CROSS_SNIPPET_COMPARISON"

    def test_compare_missing_version_404(self, client):
        a = _history(client, _create_snippet(client))[0]["id"]
        resp = client.get(f"/api/versions/compare/{a}/missing")
        assert resp.status_code == 404
        assert resp.json()["details"]["version_id"] == "missing"
