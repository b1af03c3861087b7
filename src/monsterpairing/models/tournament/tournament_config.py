"""TournamentConfig data class."""

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

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from monsterpairing.constants import (
    FORMAT_SWISS,
    MIN_DOUBLE_ELIMINATION_SIZE,
    PLAYOFF_DOUBLE_ELIMINATION,
    SUPPORTED_FORMATS,
    SUPPORTED_PLAYOFFS,
)
from monsterpairing.exceptions import InvalidConfigurationException
from monsterpairing.utils import setup_logger
from monsterpairing.utils.validation import validate_playoff_cutoff_strict

logger = setup_logger(__name__)


@dataclass
class TournamentConfig:
    """Tournament format settings.

    Attributes
    ----------
    format : str
        Main stage format. Only "swiss-tournament" is supported.
    playoff : str or None
        Playoff bracket type run after the Swiss rounds:
        "single-elimination", "double-elimination" or None for no playoff.
    playoff_cutoff : int or None
        Number of top participants seeded into the playoff bracket.
        Required (>= 2, power of two) when a playoff is set.
    playoff_reset : bool
        Whether a double-elimination grand final can be reset.
    """

    format: str = FORMAT_SWISS
    playoff: Optional[str] = None
    playoff_cutoff: Optional[int] = None
    playoff_reset: bool = True

    def __post_init__(self) -> None:
        self.validate()

    @property
    def has_playoff(self) -> bool:
        return self.playoff is not None

    def validate(self) -> None:
        """Check the settings.

        Raises:
            InvalidConfigurationException: If any setting is invalid
        """
        if self.format not in SUPPORTED_FORMATS:
            raise InvalidConfigurationException(
                f"Unsupported tournament format: {self.format}"
            )
        if self.playoff is None:
            return
        if self.playoff not in SUPPORTED_PLAYOFFS:
            raise InvalidConfigurationException(
                f"Unsupported playoff type: {self.playoff}"
            )
        validate_playoff_cutoff_strict(self.playoff_cutoff)
        if (
            self.playoff == PLAYOFF_DOUBLE_ELIMINATION
            and self.playoff_cutoff < MIN_DOUBLE_ELIMINATION_SIZE
        ):
            raise InvalidConfigurationException(
                f"double-elimination needs a playoff-cutoff of at least "
                f"{MIN_DOUBLE_ELIMINATION_SIZE}, got {self.playoff_cutoff}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        data: Dict[str, Any] = {"format": self.format}
        if self.playoff is not None:
            data["playoff"] = self.playoff
            data["playoff-cutoff"] = self.playoff_cutoff
            data["playoff-reset"] = self.playoff_reset
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        cutoff = data.get("playoff-cutoff")
        if cutoff is not None:
            try:
                cutoff = int(cutoff)
            except (TypeError, ValueError):
                raise InvalidConfigurationException(
                    f"playoff-cutoff must be an integer, got {cutoff!r}"
                ) from None
        return cls(
            format=data.get("format", FORMAT_SWISS),
            playoff=data.get("playoff"),
            playoff_cutoff=cutoff,
            playoff_reset=bool(data.get("playoff-reset", True)),
        )


def load_tournament_config(path: Union[str, Path], key: str) -> TournamentConfig:
    """Load a named tournament format from a YAML file.

    The file maps format keys to settings, e.g.::

        swiss-top8:
          format: swiss-tournament
          playoff: single-elimination
          playoff-cutoff: 8

    Args:
        path: Path to the YAML file
        key: Name of the format entry

    Returns:
        The validated configuration

    Raises:
        InvalidConfigurationException: If the file cannot be read, the key is
            missing or the settings are invalid
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Could not read tournament formats from {path}: {e}")
        raise InvalidConfigurationException(
            f"Could not read tournament formats from {path}: {e}"
        ) from e

    if not isinstance(data, dict) or key not in data:
        raise InvalidConfigurationException(
            f"Tournament format '{key}' not found in {path}"
        )
    entry = data[key]
    if not isinstance(entry, dict):
        raise InvalidConfigurationException(
            f"Tournament format '{key}' in {path} must be a mapping"
        )

    config = TournamentConfig.from_dict(entry)
    logger.info(f"Loaded tournament format '{key}' from {path}")
    return config
