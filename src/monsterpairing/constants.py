# Monster Pairing
# Copyright (C) 2025  Monster Pairing developers
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

# Match outcome scores (3-1-0 system)
WIN_SCORE = 3
DRAW_SCORE = 1
LOSS_SCORE = 0

# Outcome tags (for serialization and submissions)
OUTCOME_WIN = "win"
OUTCOME_LOSS = "loss"
OUTCOME_DRAW = "draw"

# Identifier rules
IDENTIFIER_PATTERN = r"^[a-zA-Z0-9\-_]+$"
MONSTER_ID_MAX_LENGTH = 50
TOURNAMENT_ID_MIN_LENGTH = 3
TOURNAMENT_ID_MAX_LENGTH = 100
TOURNAMENT_ID_PREFIX = "tournament"

# Tournament formats
FORMAT_SWISS = "swiss-tournament"
SUPPORTED_FORMATS = (FORMAT_SWISS,)

# Playoff types
PLAYOFF_SINGLE_ELIMINATION = "single-elimination"
PLAYOFF_DOUBLE_ELIMINATION = "double-elimination"
SUPPORTED_PLAYOFFS = (PLAYOFF_SINGLE_ELIMINATION, PLAYOFF_DOUBLE_ELIMINATION)

# Playoff defaults
DEFAULT_PLAYOFF_CUTOFF = 8
MIN_PLAYOFF_CUTOFF = 2
MIN_DOUBLE_ELIMINATION_SIZE = 4

# Logging
LOG_LEVEL_ENV_VAR = "MONSTERPAIRING_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
