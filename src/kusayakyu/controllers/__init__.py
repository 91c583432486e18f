"""Tournament controllers: scheduling, scoring and standings."""

# Kusayakyu
# Copyright (C) 2025  Kusayakyu developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from kusayakyu.controllers.normal import NormalController
from kusayakyu.controllers.result_recorder import ResultRecorder
from kusayakyu.controllers.schedule import generate_round_robin, number_of_matches
from kusayakyu.controllers.standings import (
    compute_standings,
    crosstable,
    head_to_head,
)
from kusayakyu.controllers.taiko import (
    FinalStage,
    PreliminaryStage,
    SetupStage,
    TaikoController,
    assign_roles,
    build_final_matches,
)

__all__ = [
    "FinalStage",
    "NormalController",
    "PreliminaryStage",
    "ResultRecorder",
    "SetupStage",
    "TaikoController",
    "assign_roles",
    "build_final_matches",
    "compute_standings",
    "crosstable",
    "generate_round_robin",
    "head_to_head",
    "number_of_matches",
]
