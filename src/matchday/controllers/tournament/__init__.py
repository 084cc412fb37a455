"""Tournament controllers: progression, edit guard and result recording."""

from matchday.controllers.tournament.edit_guard import (
    ManualEditContext,
    get_stage_manual_edit_context,
    is_group_round_edit_allowed,
    is_manual_round_edit_allowed,
    is_match_edit_allowed,
)
from matchday.controllers.tournament.progression import (
    generate_fixtures,
    reset_tournament,
    run_format_progression,
)
from matchday.controllers.tournament.result_recorder import ResultRecorder

__all__ = [
    "ManualEditContext",
    "ResultRecorder",
    "generate_fixtures",
    "get_stage_manual_edit_context",
    "is_group_round_edit_allowed",
    "is_manual_round_edit_allowed",
    "is_match_edit_allowed",
    "reset_tournament",
    "run_format_progression",
]
