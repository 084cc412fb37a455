from matchday.models.enums import MatchStage, TournamentFormat, TournamentStatus
from matchday.models.history import (
    HeadToHeadRecord,
    ParticipantHistory,
    StagePerformance,
)
from matchday.models.tournament import (
    Group,
    Match,
    Participant,
    Side,
    Standing,
    Tournament,
    TournamentSettings,
)

__all__ = [
    "Group",
    "HeadToHeadRecord",
    "Match",
    "MatchStage",
    "Participant",
    "ParticipantHistory",
    "Side",
    "StagePerformance",
    "Standing",
    "Tournament",
    "TournamentFormat",
    "TournamentSettings",
    "TournamentStatus",
]
