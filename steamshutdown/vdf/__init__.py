"""Reader for Steam's manifest (VDF/ACF) text format.

Modules:
    lines: Classify a manifest line into a structural shape
    transform: Rewrite classified lines into JSON text
    decode: Decode JSON text into a generic tree
    app_record: AppRecord and StateFlags bits
    mapper: Build an AppRecord from a decoded tree

Usage:
    from steamshutdown.vdf import decode_manifest, map_app_record

    record = map_app_record(decode_manifest(text))
"""

from .lines import (
    KeyValuePair,
    LineShape,
    ObjectClose,
    ObjectOpen,
    Other,
    classify_line,
    is_close_marker,
)
from .transform import transform_lines
from .decode import (
    EmptyOrCorruptFile,
    GenericValue,
    MalformedManifest,
    ManifestError,
    decode_json,
    decode_manifest,
    is_empty_or_corrupt,
    split_lines,
)
from .app_record import (
    AppRecord,
    AppState,
    DOWNLOADING_STATES,
    app_id_from_filename,
)
from .mapper import (
    ID_KEYS,
    NAME_KEYS,
    STATE_KEYS,
    MissingField,
    first_present,
    map_app_record,
)

__all__ = [
    # lines.py
    'KeyValuePair',
    'LineShape',
    'ObjectClose',
    'ObjectOpen',
    'Other',
    'classify_line',
    'is_close_marker',
    # transform.py
    'transform_lines',
    # decode.py
    'EmptyOrCorruptFile',
    'GenericValue',
    'MalformedManifest',
    'ManifestError',
    'decode_json',
    'decode_manifest',
    'is_empty_or_corrupt',
    'split_lines',
    # app_record.py
    'AppRecord',
    'AppState',
    'DOWNLOADING_STATES',
    'app_id_from_filename',
    # mapper.py
    'ID_KEYS',
    'NAME_KEYS',
    'STATE_KEYS',
    'MissingField',
    'first_present',
    'map_app_record',
]
