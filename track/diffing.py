"""Line-based text diff producing added/removed/unchanged segments."""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from typing import Callable, Iterable, Literal

SegmentKind = Literal["added", "removed", "unchanged"]


@dataclass(frozen=True)
class Segment:
    """A run of consecutive lines sharing one diff status."""

    kind: SegmentKind
    value: str

    @property
    def added(self) -> bool:
        return self.kind == "added"

    @property
    def removed(self) -> bool:
        return self.kind == "removed"


DiffFn = Callable[[str, str], Iterable[Segment]]
"""Diff primitive: (old_text, new_text) -> segments in reading order."""


def diff_lines(old: str, new: str) -> list[Segment]:
    """Compare two texts line by line.

    Line endings stay attached to their lines, so joining every
    ``unchanged`` and ``removed`` value reproduces ``old`` and joining
    every ``unchanged`` and ``added`` value reproduces ``new``. A
    replaced block yields its removed segment before its added one.
    """
    old_lines = old.splitlines(keepends=True)
    new_lines = new.splitlines(keepends=True)
    matcher = difflib.SequenceMatcher(a=old_lines, b=new_lines, autojunk=False)

    segments: list[Segment] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            segments.append(Segment("unchanged", "".join(old_lines[i1:i2])))
            continue
        if tag in ("replace", "delete"):
            segments.append(Segment("removed", "".join(old_lines[i1:i2])))
        if tag in ("replace", "insert"):
            segments.append(Segment("added", "".join(new_lines[j1:j2])))
    return segments
