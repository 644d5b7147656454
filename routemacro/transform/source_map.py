"""Source map v3 encoding (base64 VLQ mappings)."""

from __future__ import annotations

_BASE64_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

VLQ_BASE_SHIFT = 5
VLQ_BASE = 1 << VLQ_BASE_SHIFT
VLQ_BASE_MASK = VLQ_BASE - 1
VLQ_CONTINUATION_BIT = VLQ_BASE

# (generated column, source index, original line, original column)
Segment = tuple[int, int, int, int]


def encode_vlq(value: int) -> str:
    """Encode a signed integer as a base64 VLQ string."""
    vlq = (-value << 1) + 1 if value < 0 else value << 1
    encoded = []
    while True:
        digit = vlq & VLQ_BASE_MASK
        vlq >>= VLQ_BASE_SHIFT
        if vlq > 0:
            digit |= VLQ_CONTINUATION_BIT
        encoded.append(_BASE64_CHARS[digit])
        if vlq == 0:
            return "".join(encoded)


def encode_mappings(lines: list[list[Segment]]) -> str:
    """Encode per-line segment lists into a ``mappings`` string.

    Generated columns are relative within a line; source index, original
    line and original column are relative across the whole map.
    """
    prev_source = 0
    prev_line = 0
    prev_column = 0
    encoded_lines: list[str] = []

    for segments in lines:
        prev_gen_column = 0
        encoded_segments: list[str] = []
        for gen_column, source, line, column in segments:
            encoded_segments.append(
                encode_vlq(gen_column - prev_gen_column)
                + encode_vlq(source - prev_source)
                + encode_vlq(line - prev_line)
                + encode_vlq(column - prev_column)
            )
            prev_gen_column = gen_column
            prev_source = source
            prev_line = line
            prev_column = column
        encoded_lines.append(",".join(encoded_segments))

    return ";".join(encoded_lines)
