"""Ordered text edits over a document, applied in a single pass.

Edits are recorded against byte offsets of the original UTF-8 text and never
mutate it. Rendering walks the original once, emitting retained ranges and
inserted text, which also yields the position mapping for the source map.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass

from loguru import logger

from routemacro.core.models import SourceMap

from .source_map import Segment, encode_mappings


@dataclass(frozen=True)
class Retain:
    start: int
    end: int


@dataclass(frozen=True)
class Insert:
    text: str


def _utf16_width(char: str) -> int:
    return 2 if ord(char) > 0xFFFF else 1


class EditList:
    """Collects remove/insert edits over an original text.

    Offsets are byte offsets into ``original.encode("utf-8")``; overlapping
    removals are merged.
    """

    def __init__(self, original: str):
        self.original = original
        self._source = original.encode("utf-8")
        self._removed: list[tuple[int, int]] = []
        self._inserts: list[tuple[int, str]] = []

    def __len__(self) -> int:
        return len(self._source)

    def remove(self, start: int, end: int) -> EditList:
        """Remove the byte range ``[start, end)`` of the original text."""
        if start < 0 or end > len(self._source) or start > end:
            raise ValueError(
                f"Invalid range [{start}, {end}) for text of {len(self._source)} bytes"
            )
        if start < end:
            self._removed.append((start, end))
        return self

    def insert(self, position: int, text: str) -> EditList:
        """Insert ``text`` at a byte position of the original text.

        Insertions at the same position keep the order they were added in,
        and survive removal of the surrounding range.
        """
        if position < 0 or position > len(self._source):
            raise ValueError(
                f"Invalid position {position} for text of {len(self._source)} bytes"
            )
        self._inserts.append((position, text))
        return self

    def has_changed(self) -> bool:
        return bool(self._removed) or any(text for _, text in self._inserts)

    def operations(self) -> list[Retain | Insert]:
        """Return the ordered retain/insert operations producing the new text."""
        removals = self._merged_removals()
        bounds = sorted(
            {0, len(self._source)}
            | {start for start, _ in removals}
            | {end for _, end in removals}
            | {position for position, _ in self._inserts}
        )

        ops: list[Retain | Insert] = []
        for index, start in enumerate(bounds):
            ops.extend(
                Insert(text) for position, text in self._inserts if position == start and text
            )
            if index + 1 == len(bounds):
                break
            end = bounds[index + 1]
            if any(r_start <= start and end <= r_end for r_start, r_end in removals):
                continue
            if ops and isinstance(ops[-1], Retain) and ops[-1].end == start:
                ops[-1] = Retain(ops[-1].start, end)
            else:
                ops.append(Retain(start, end))
        return ops

    def _merged_removals(self) -> list[tuple[int, int]]:
        merged: list[tuple[int, int]] = []
        for start, end in sorted(self._removed):
            if merged and start <= merged[-1][1]:
                merged[-1] = (merged[-1][0], max(merged[-1][1], end))
            else:
                merged.append((start, end))
        return merged

    def to_string(self) -> str:
        parts: list[bytes] = []
        for op in self.operations():
            if isinstance(op, Insert):
                parts.append(op.text.encode("utf-8"))
            else:
                parts.append(self._source[op.start : op.end])
        return b"".join(parts).decode("utf-8")

    def generate_map(
        self,
        source: str,
        include_content: bool = True,
        hires: bool = True,
        file: str | None = None,
    ) -> SourceMap:
        """Build a source map from the new text back to the original.

        Columns are counted in UTF-16 code units. Inserted text is unmapped.

        Args:
            source: Name of the original source recorded in the map
            include_content: Embed the original text as ``sourcesContent``
            hires: Map every character instead of only chunk and line starts
            file: Optional name of the generated file
        """
        line_starts = [0]
        for index, byte in enumerate(self._source):
            if byte == 0x0A:
                line_starts.append(index + 1)

        lines: list[list[Segment]] = [[]]
        gen_column = 0

        for op in self.operations():
            if isinstance(op, Insert):
                for char in op.text:
                    if char == "\n":
                        lines.append([])
                        gen_column = 0
                    else:
                        gen_column += _utf16_width(char)
                continue

            orig_line = bisect_right(line_starts, op.start) - 1
            line_prefix = self._source[line_starts[orig_line] : op.start].decode("utf-8")
            orig_column = sum(_utf16_width(c) for c in line_prefix)

            at_line_start = True
            for char in self._source[op.start : op.end].decode("utf-8"):
                if char != "\n" and (at_line_start or hires):
                    lines[-1].append((gen_column, 0, orig_line, orig_column))
                at_line_start = False
                if char == "\n":
                    lines.append([])
                    gen_column = 0
                    orig_line += 1
                    orig_column = 0
                    at_line_start = True
                else:
                    width = _utf16_width(char)
                    gen_column += width
                    orig_column += width

        logger.debug(f"Generated source map for {source} ({len(lines)} lines)")
        return SourceMap(
            mappings=encode_mappings(lines),
            sources=(source,),
            sources_content=(self.original,) if include_content else (),
            file=file,
        )
