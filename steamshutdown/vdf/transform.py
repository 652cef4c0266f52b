"""Rewrite manifest lines into JSON text.

The manifest format has neither ``:`` between a nested object's name and
its body nor ``,`` between members. Both are synthesized here in one
forward pass. Whether a member is the last one of its object is decided
only by looking at the following raw line: if that line ends with ``}``
the member closes its object and gets no separator. No nesting depth is
tracked.
"""

from typing import Optional, Sequence

from .lines import KeyValuePair, ObjectClose, ObjectOpen, classify_line, is_close_marker

MEMBER_SEPARATOR = ","
NAME_SEPARATOR = ": "


def _next_line(lines: Sequence[str], index: int) -> Optional[str]:
    if index + 1 < len(lines):
        return lines[index + 1]
    return None


def transform_lines(lines: Sequence[str]) -> str:
    """Convert the lines of a manifest file to a JSON document.

    The first line holds the name of the outer object and is skipped.

    Args:
        lines: All lines of the file, without line terminators

    Returns:
        JSON text (one output line per input line after the first)
    """
    out: list[str] = []

    for index in range(1, len(lines)):
        line = lines[index]
        following = _next_line(lines, index)
        shape = classify_line(line)

        if isinstance(shape, KeyValuePair):
            text = shape.key + NAME_SEPARATOR + shape.value
            if following is None or not is_close_marker(following):
                text += MEMBER_SEPARATOR
        elif isinstance(shape, ObjectClose):
            text = shape.text
            # consecutive closing braces and the end of input take no separator
            if following is not None and not is_close_marker(following):
                text += MEMBER_SEPARATOR
        elif isinstance(shape, ObjectOpen):
            text = shape.name + NAME_SEPARATOR.rstrip()
        else:
            text = shape.text

        out.append(text)

    return "\n".join(out) + "\n" if out else ""
