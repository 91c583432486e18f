"""Type hints used in Kusayakyu."""

from typing import Any, Dict, Literal

# Tournament format literals
Format = Literal["normal", "taiko"]

# Taiko phase literals
PhaseName = Literal["setup", "preliminary", "final"]

# Camp key literals
CampKey = Literal["A", "B"]

# Role literals, best rank first
RoleName = Literal["captain", "vice_captain", "second", "lead"]

# Head-to-head outcome from the first team's point of view
HeadToHeadResult = Literal["win", "lose", "draw", "none"]

# Winner of a taiko tournament
CampWinner = Literal["A", "B", "draw"]

# A score as it arrives from a form: already an int, or raw text
ScoreInput = Any

# JSON-compatible snapshot document
Document = Dict[str, Any]

# Team id -> role assigned at the end of the preliminaries
RoleAssignment = Dict[int, RoleName]

#  LocalWords:  taiko
