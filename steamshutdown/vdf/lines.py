"""Line classification for Steam manifest (.acf) files.

Every line after the first one of a manifest falls into one of four
shapes. The transformer only ever looks at these shapes, never at raw
nesting depth.

Grammar of a single line (EBNF, TAB = "\\t", QUOTE = '"'):

    key_value    = TAB, { TAB }, quoted, TAB, TAB, quoted ;
    object_close = TAB, { any }, "}" ;
    object_open  = TAB, { TAB }, quoted ;
    other        = { any } ;
    quoted       = QUOTE, any, { any }, QUOTE ;

The alternatives are tried in the order listed. ``key_value`` splits on
the right-most TAB TAB pair that leaves a valid quoted token on both
sides, and the value token may be empty (``""``).
"""

from dataclasses import dataclass
from typing import Union

TAB = "\t"
QUOTE = '"'
CLOSE_BRACE = "}"
_SEPARATOR = QUOTE + TAB + TAB + QUOTE


@dataclass(frozen=True)
class KeyValuePair:
    """A scalar member: ``<tabs>"key"<tab><tab>"value"``.

    ``key`` keeps its leading indentation and both tokens keep their
    quotes so they can be written out unchanged.
    """
    key: str
    value: str


@dataclass(frozen=True)
class ObjectOpen:
    """The name line of a nested object (its ``{`` follows on the next line)."""
    name: str


@dataclass(frozen=True)
class ObjectClose:
    """An indented ``}`` ending a nested object."""
    text: str


@dataclass(frozen=True)
class Other:
    """Anything else, mostly the ``{`` lines and the outer ``}``."""
    text: str


LineShape = Union[KeyValuePair, ObjectOpen, ObjectClose, Other]


def _split_indent(line: str) -> tuple[str, str]:
    body = line.lstrip(TAB)
    return line[:len(line) - len(body)], body


def _is_quoted(token: str, min_length: int) -> bool:
    return (
        len(token) >= min_length
        and token.startswith(QUOTE)
        and token.endswith(QUOTE)
    )


def _match_key_value(line: str) -> Union[KeyValuePair, None]:
    indent, body = _split_indent(line)
    if not indent:
        return None

    pos = body.rfind(_SEPARATOR)
    while pos != -1:
        key = body[:pos + 1]
        value = body[pos + 3:]
        # key needs at least one character between its quotes, value may be ""
        if _is_quoted(key, 3) and _is_quoted(value, 2):
            return KeyValuePair(key=indent + key, value=value)
        pos = body.rfind(_SEPARATOR, 0, pos)

    return None


def is_close_marker(line: str) -> bool:
    """True for any line ending with ``}``, indented or not."""
    return line.endswith(CLOSE_BRACE)


def classify_line(line: str) -> LineShape:
    """Classify one manifest line (without its line terminator).

    Args:
        line: Raw text of the line

    Returns:
        One of KeyValuePair, ObjectClose, ObjectOpen or Other
    """
    pair = _match_key_value(line)
    if pair is not None:
        return pair

    if line.startswith(TAB) and is_close_marker(line):
        return ObjectClose(text=line)

    indent, body = _split_indent(line)
    if indent and _is_quoted(body, 3):
        return ObjectOpen(name=line)

    return Other(text=line)
