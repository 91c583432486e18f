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

# --- Constants ---
APP_NAME = "Kusayakyu"
SAVE_FILE_EXTENSION = ".json"

# Match outcome points
WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0

# Minimum roster size for a round-robin
MIN_TEAMS_FOR_SCHEDULE = 2

# Tournament formats
FORMAT_NORMAL = "normal"
FORMAT_TAIKO = "taiko"
TOURNAMENT_FORMATS = (FORMAT_NORMAL, FORMAT_TAIKO)

# Taiko phases, in the only order they may be entered
PHASE_SETUP = "setup"
PHASE_PRELIMINARY = "preliminary"
PHASE_FINAL = "final"
PHASE_ORDER = (PHASE_SETUP, PHASE_PRELIMINARY, PHASE_FINAL)

# Taiko camps
CAMP_A = "A"
CAMP_B = "B"
CAMP_KEYS = (CAMP_A, CAMP_B)
DEFAULT_CAMP_NAMES = {CAMP_A: "東軍", CAMP_B: "西軍"}

# Taiko roles, ranked best first
ROLE_CAPTAIN = "captain"
ROLE_VICE_CAPTAIN = "vice_captain"
ROLE_SECOND = "second"
ROLE_LEAD = "lead"
ROLE_ORDER = (ROLE_CAPTAIN, ROLE_VICE_CAPTAIN, ROLE_SECOND, ROLE_LEAD)

ROLE_NAMES = {
    ROLE_CAPTAIN: "大将",
    ROLE_VICE_CAPTAIN: "副将",
    ROLE_SECOND: "次鋒",
    ROLE_LEAD: "先鋒",
}

# Head-to-head outcomes from one team's point of view
RESULT_WIN = "win"
RESULT_LOSE = "lose"
RESULT_DRAW = "draw"
RESULT_NONE = "none"

# Camp result winners
WINNER_DRAW = "draw"

UNKNOWN_TEAM_NAME = "不明"
DEFAULT_TOURNAMENT_NAME = "Untitled Tournament"

# Persistence
SNAPSHOT_VERSION = 2
STORAGE_KEY = "baseballTournaments"
LEGACY_STORAGE_KEY = "baseballTournament"
STORE_FILE_NAME = "storage.json"
EXPORT_FILE_PREFIX = "baseball-tournament-"

# Logging
LOG_FILE_NAME = "kusayakyu.log"
DEFAULT_LOG_LEVEL = "INFO"
