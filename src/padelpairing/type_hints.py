"""Type hints used in Padel Pairing."""

from typing import FrozenSet, Tuple

# Canonical unordered pair of player ids
PairKey = FrozenSet[str]

# Two players on the same side of the net
Team = Tuple["Player", "Player"]
# Positions into a 4-player group: (team1a, team1b, team2a, team2b)
SplitOrder = Tuple[int, int, int, int]

#  LocalWords:  PairKey SplitOrder
