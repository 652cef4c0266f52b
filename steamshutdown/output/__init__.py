"""Output generation modules.

Modules:
    state: Generate, load and compare state.yaml snapshots
"""

from .state import (
    build_state,
    generate_state,
    load_state,
    compare_states,
    STEAMSHUTDOWN_VERSION,
)

__all__ = [
    "build_state",
    "generate_state",
    "load_state",
    "compare_states",
    "STEAMSHUTDOWN_VERSION",
]
