"""Decode manifest text into a generic tree of values.

Pipeline: raw text -> lines -> JSON text (transform.py) -> ``dict``.
Any failure to obtain an object at the top level is reported as
MalformedManifest so callers can skip the file.
"""

import json
from typing import Any, Union

from .transform import transform_lines

# str and numbers at the leaves, dicts (insertion ordered) for objects
GenericValue = Union[str, int, float, dict[str, Any]]

NUL = "\0"


class ManifestError(Exception):
    """Base class for errors raised while reading a single manifest."""
    pass


class EmptyOrCorruptFile(ManifestError):
    """The file has no content or nothing but NUL bytes.

    Steam leaves such files behind when a download crashes; they are
    skipped without a warning.
    """
    pass


class MalformedManifest(ManifestError):
    """The file content could not be turned into an object tree."""
    pass


def split_lines(text: str) -> list[str]:
    """Split text on ``\\r\\n``, ``\\n`` or ``\\r`` like a line reader would.

    A terminator at the very end does not produce an extra empty line.
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    if not normalized:
        return []
    lines = normalized.split("\n")
    if normalized.endswith("\n"):
        lines.pop()
    return lines


def is_empty_or_corrupt(text: str) -> bool:
    """True if the text is empty or only NUL bytes.

    One trailing line terminator after the NUL bytes is allowed. Blank
    lines are not corrupt content; they fail decoding like any other
    malformed manifest.
    """
    for terminator in ("\r\n", "\n", "\r"):
        if text.endswith(terminator):
            text = text[:-len(terminator)]
            break
    return not text.strip(NUL)


def decode_json(json_text: str) -> dict[str, GenericValue]:
    """Parse transformer output, requiring an object at the top level.

    Raises:
        MalformedManifest: If the text is not valid JSON or not an object
    """
    try:
        tree = json.loads(json_text, strict=False)
    except json.JSONDecodeError as e:
        raise MalformedManifest(f"Invalid manifest structure: {e}") from e

    if not isinstance(tree, dict):
        raise MalformedManifest(
            f"Expected an object at the top level, got {type(tree).__name__}"
        )

    return tree


def decode_manifest(text: str) -> dict[str, GenericValue]:
    """Decode the full text of a manifest file.

    Args:
        text: File content

    Returns:
        The members of the outer object

    Raises:
        EmptyOrCorruptFile: If there is nothing but NUL bytes/whitespace
        MalformedManifest: If the content does not decode to an object
    """
    if is_empty_or_corrupt(text):
        raise EmptyOrCorruptFile("File is empty or contains only NUL bytes")

    return decode_json(transform_lines(split_lines(text)))
