"""Career statistics projected from tournament history."""

from matchday.statistics.history import (
    derive_history,
    history_from_dict,
    history_key,
    history_to_dict,
    normalize_history,
)

__all__ = [
    "derive_history",
    "history_from_dict",
    "history_key",
    "history_to_dict",
    "normalize_history",
]
