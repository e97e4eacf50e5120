"""Unit tests for the positional line diff."""

from snipvault.schemas.version import DiffType
from snipvault.services.diff_service import diff_lines, split_lines


class TestSplitLines:

    def test_empty_and_none_have_no_lines(self):
        assert split_lines("") == []
        assert split_lines(None) == []

    def test_crlf_treated_like_lf(self):
        assert split_lines("a\r\nb") == ["a", "b"]

    def test_trailing_newline_yields_empty_last_line(self):
        assert split_lines("a\n") == ["a", ""]


class TestDiffLines:

    def test_identical_texts_are_all_unchanged(self):
        text = "def f():\n    return 1\n"
        records = diff_lines(text, text)
        assert len(records) == 3
        assert all(r.diff_type == DiffType.UNCHANGED for r in records)
        assert all(r.from_content == r.to_content for r in records)

    def test_single_modified_line(self):
        records = diff_lines("a\nb\nc", "a\nx\nc")
        assert [(r.line_number, r.diff_type, r.from_content, r.to_content) for r in records] == [
            (1, DiffType.UNCHANGED, "a", "a"),
            (2, DiffType.MODIFIED, "b", "x"),
            (3, DiffType.UNCHANGED, "c", "c"),
        ]

    def test_longer_target_reports_added_lines(self):
        records = diff_lines("a", "a\nb\nc")
        assert [r.diff_type for r in records] == [DiffType.UNCHANGED, DiffType.ADDED, DiffType.ADDED]
        assert records[1].from_content is None
        assert records[1].to_content == "b"

    def test_longer_source_reports_removed_lines(self):
        records = diff_lines("a\nb\nc", "a")
        assert [r.diff_type for r in records] == [DiffType.UNCHANGED, DiffType.REMOVED, DiffType.REMOVED]
        assert records[2].from_content == "c"
        assert records[2].to_content is None

    def test_insert_in_middle_shifts_following_lines(self):
        # Positional comparison: no realignment after an insertion.
        records = diff_lines("a\nb\nc", "a\nnew\nb\nc")
        assert [r.diff_type for r in records] == [
            DiffType.UNCHANGED,
            DiffType.MODIFIED,
            DiffType.MODIFIED,
            DiffType.ADDED,
        ]

    def test_length_is_max_of_both_sides(self):
        for old, new in [("", "x"), ("x\ny", ""), ("1\n2\n3", "1\n2"), ("", "")]:
            expected = max(len(split_lines(old)), len(split_lines(new)))
            assert len(diff_lines(old, new)) == expected

    def test_line_numbers_strictly_increase_from_one(self):
        records = diff_lines("a\nb", "c\nd\ne\nf")
        assert [r.line_number for r in records] == [1, 2, 3, 4]

    def test_from_empty_is_all_added(self):
        records = diff_lines("", "x\ny")
        assert [r.diff_type for r in records] == [DiffType.ADDED, DiffType.ADDED]

    def test_diff_type_serializes_to_label(self):
        record = diff_lines("a", "b")[0]
        assert record.model_dump(mode="json")["diff_type"] == "Modified"
