"""Type hints used in Monster Pairing."""

from typing import Any, Dict, Iterable, List, Tuple, Union

# A pairing is two participants, or a single one receiving a bye
Pairing = Tuple["Participant", ...]
Pairings = List[Pairing]

# Previous matchups, as pairs of identifiers in either order
Matchup = Tuple[Union[str, "MonsterIdentifier"], Union[str, "MonsterIdentifier"]]
Matchups = Iterable[Matchup]

# Current scores by identifier string
ScoreTable = Dict[str, int]

# Standings record, see Participant.to_dict
StandingRecord = Dict[str, Any]

#  LocalWords:  Matchups
