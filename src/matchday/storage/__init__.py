"""Persistence and transfer of the application state."""

from matchday.storage.json_store import (
    InMemoryStateStore,
    JsonStateStore,
    LoadedState,
    StateStore,
    decode_state,
    encode_state,
)
from matchday.storage.transfer import ImportResult, export_state, import_state

__all__ = [
    "ImportResult",
    "InMemoryStateStore",
    "JsonStateStore",
    "LoadedState",
    "StateStore",
    "decode_state",
    "encode_state",
    "export_state",
    "import_state",
]
