from .group import Group
from .match import Match, Side
from .participant import Participant
from .standing import Standing
from .tournament import Tournament
from .tournament_settings import TournamentSettings

__all__ = [
    "Group",
    "Match",
    "Participant",
    "Side",
    "Standing",
    "Tournament",
    "TournamentSettings",
]
