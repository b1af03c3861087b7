"""Exceptions for use in Monster Pairing"""

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


# ========== Base Application Exception ==========


class MonsterPairingException(Exception):
    """Base exception for all Monster Pairing errors.

    All custom exceptions in the package inherit from this class, through one
    of the three category bases below: validation, state or consistency.
    """

    pass


# ========== Validation Exceptions ==========


class ValidationException(MonsterPairingException):
    """Base exception for invalid input supplied by the caller."""

    pass


class InvalidIdentifierException(ValidationException):
    """Raised when a monster or tournament identifier is malformed."""

    pass


class InvalidParticipantCountException(ValidationException):
    """Raised when a tournament or bracket gets an unusable number of participants."""

    pass


class InvalidMatchException(ValidationException):
    """Raised when a match is built from the same participant twice or a negative round."""

    pass


class InvalidResultException(ValidationException):
    """Raised when an outcome is unknown or the winner is inconsistent with it."""

    pass


class InvalidConfigurationException(ValidationException):
    """Raised when tournament configuration data is invalid or missing."""

    pass


class TournamentNotFoundException(ValidationException):
    """Raised when a requested tournament does not exist."""

    pass


class ParticipantNotFoundException(ValidationException):
    """Raised when a participant is not part of the tournament."""

    pass


# ========== State Exceptions ==========


class StateException(MonsterPairingException):
    """Base exception for operations called while a precondition is not met."""

    pass


class DuplicateResultException(StateException):
    """Raised when attempting to record a result that already exists."""

    pass


class MatchNotCompleteException(StateException):
    """Raised when the winner of a match is requested before it has a result."""

    pass


class IncompleteRoundException(StateException):
    """Raised when advancing while some match of the round has no result."""

    pass


class TournamentStateException(StateException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class BracketStateException(StateException):
    """Raised when a bracket is in an invalid state for the requested operation."""

    pass


class DrawNotAllowedException(BracketStateException):
    """Raised when an elimination match finished as a draw."""

    pass


# ========== Consistency Exceptions ==========


class ConsistencyException(MonsterPairingException):
    """Base exception for broken internal invariants."""

    pass


class ScoreInvariantException(ConsistencyException):
    """Raised when a participant's score no longer matches its record."""

    pass
