"""Map a decoded manifest tree to an AppRecord.

Steam has written the same fields under different key spellings over
the years, so each field is looked up through an ordered list of
candidate keys and the first key present wins.
"""

import re
from typing import Any, Mapping, Optional, Sequence

from .app_record import AppRecord
from .decode import ManifestError

ID_KEYS = ("appid", "appID", "AppID")
NAME_KEYS = ("name", "installdir")
STATE_KEYS = ("StateFlags",)

# optional sign and ASCII digits, surrounding whitespace allowed
INTEGER_PATTERN = re.compile(r"\s*[+-]?[0-9]+\s*")


class MissingField(ManifestError):
    """A required field is absent or does not hold the expected type."""

    def __init__(self, field: str, keys: Sequence[str], reason: str = "missing"):
        self.field = field
        self.keys = tuple(keys)
        self.reason = reason
        super().__init__(f"Field '{field}' {reason} (looked up: {', '.join(self.keys)})")


def first_present(tree: Mapping[str, Any], keys: Sequence[str]) -> Optional[Any]:
    """Return the value of the first key in ``keys`` present in ``tree``.

    A key mapped to ``None`` counts as absent.
    """
    for key in keys:
        value = tree.get(key)
        if value is not None:
            return value
    return None


def _require_int(tree: Mapping[str, Any], field: str, keys: Sequence[str]) -> int:
    value = first_present(tree, keys)
    if value is None:
        raise MissingField(field, keys)

    if isinstance(value, bool):
        raise MissingField(field, keys, "is not numeric")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        if not INTEGER_PATTERN.fullmatch(value):
            raise MissingField(field, keys, f"is not numeric: {value!r}")
        return int(value)

    raise MissingField(field, keys, "is not numeric")


def _require_str(tree: Mapping[str, Any], field: str, keys: Sequence[str]) -> str:
    value = first_present(tree, keys)
    if value is None:
        raise MissingField(field, keys)
    if not isinstance(value, str):
        raise MissingField(field, keys, "is not a string")
    return value


def map_app_record(tree: Mapping[str, Any]) -> AppRecord:
    """Build an AppRecord from the members of a manifest's outer object.

    Raises:
        MissingField: If id, name or state cannot be resolved
    """
    return AppRecord(
        id=_require_int(tree, "id", ID_KEYS),
        name=_require_str(tree, "name", NAME_KEYS),
        state=_require_int(tree, "state", STATE_KEYS),
    )
