"""Type hints used in Matchday."""

from typing import Callable, List, Literal, Tuple

# Wire values of the enums in matchday.models.enums
# Score of side A in an Elo update
EloScore = Literal[0, 0.5, 1]

# Stream of floats in [0, 1)
Rng = Callable[[], float]

# Participant ids of one pairing, home first
Pair = Tuple[str, str]
# All pairings of one round
RoundPairs = List[Pair]
# Every round of a round robin schedule
Schedule = List[RoundPairs]
