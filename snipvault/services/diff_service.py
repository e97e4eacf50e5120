"""Line diff between two code texts: single pure function.

Comparison is positional: line i of one text is compared with line i of
the other. When one text is longer, its extra lines are reported as Added
(``to`` longer) or Removed (``from`` longer). There is no alignment step,
so inserting a line near the top marks every following line as Modified.

Swapping in an LCS-based diff only requires replacing ``diff_lines``; the
input and output shapes stay the same.
"""

from itertools import zip_longest
from typing import List, Optional

from ..schemas.version import CodeDiffLine, DiffType


def split_lines(text: Optional[str]) -> List[str]:
    """Split text on ``\\n``, dropping a trailing ``\\r`` per line.

    None and the empty string have zero lines.
    """
    if not text:
        return []
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def diff_lines(from_text: Optional[str], to_text: Optional[str]) -> List[CodeDiffLine]:
    """Compare two texts line by line.

    Returns one record per position, ordered by 1-based line number; the
    result has ``max(len(from_lines), len(to_lines))`` entries.
    """
    records: List[CodeDiffLine] = []
    pairs = zip_longest(split_lines(from_text), split_lines(to_text))
    for line_number, (old, new) in enumerate(pairs, start=1):
        if old is None:
            diff_type = DiffType.ADDED
        elif new is None:
            diff_type = DiffType.REMOVED
        elif old == new:
            diff_type = DiffType.UNCHANGED
        else:
            diff_type = DiffType.MODIFIED
        records.append(
            CodeDiffLine(
                line_number=line_number,
                diff_type=diff_type,
                from_content=old,
                to_content=new,
            )
        )
    return records
