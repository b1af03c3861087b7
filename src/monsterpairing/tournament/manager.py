"""Tournament lifecycle management.

The manager is the entry point used by callers: it creates tournaments,
hands out each round's pairings, records results and byes, advances rounds
and, when the format defines one, runs the playoff bracket seeded from the
final Swiss standings.
"""

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

import threading
from typing import Dict, Iterable, List, Optional, Union

from monsterpairing.bracket.base import Bracket
from monsterpairing.bracket.factory import PlayoffBracketFactory
from monsterpairing.controllers.tournament.result_recorder import (
    ParticipantRef,
    ResultRecorder,
)
from monsterpairing.exceptions import (
    BracketStateException,
    IncompleteRoundException,
    InvalidParticipantCountException,
    TournamentNotFoundException,
    TournamentStateException,
)
from monsterpairing.models.identifiers import (
    MonsterIdentifier,
    TournamentIdentifier,
    as_tournament_id,
)
from monsterpairing.models.tournament.match import Match
from monsterpairing.models.tournament.match_result import Outcome
from monsterpairing.models.tournament.participant import Participant
from monsterpairing.models.tournament.round_data import RoundData
from monsterpairing.models.tournament.tournament_config import TournamentConfig
from monsterpairing.pairing.swiss import SwissPairingEngine
from monsterpairing.tournament.repository import (
    InMemoryTournamentRepository,
    TournamentRepository,
)
from monsterpairing.tournament.tournament import Tournament
from monsterpairing.type_hints import Pairings, StandingRecord
from monsterpairing.utils import setup_logger

logger = setup_logger(__name__)

TournamentRef = Union[str, TournamentIdentifier]


class TournamentManager:
    """Orchestrates Swiss tournaments and their playoffs.

    This class coordinates:
    - TournamentRepository: stores tournaments
    - SwissPairingEngine: round count and pairings, via each tournament's
      RoundManager
    - ResultRecorder: validation and recording of results and byes
    - PlayoffBracketFactory: the bracket seeded once the Swiss rounds end

    Operations on one tournament are serialized with a per-tournament lock.
    Playoff brackets are kept in memory only.
    """

    def __init__(
        self,
        repository: Optional[TournamentRepository] = None,
        engine: Optional[SwissPairingEngine] = None,
        config: Optional[TournamentConfig] = None,
        bracket_factory: Optional[PlayoffBracketFactory] = None,
    ) -> None:
        """Initialize the manager.

        Args:
            repository: Tournament storage, in memory if omitted
            engine: Swiss pairing engine
            config: Default format for new tournaments, plain Swiss if omitted
            bracket_factory: Builds playoff brackets
        """
        self.repository = repository or InMemoryTournamentRepository()
        self.engine = engine or SwissPairingEngine()
        self.config = config or TournamentConfig()
        self.bracket_factory = bracket_factory or PlayoffBracketFactory()
        self.result_recorder = ResultRecorder()

        self._brackets: Dict[str, Bracket] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, tournament_id: str) -> threading.RLock:
        with self._locks_guard:
            return self._locks.setdefault(tournament_id, threading.RLock())

    # ========== Tournament Lifecycle ==========

    def create_tournament(
        self,
        participant_ids: Iterable[Union[str, MonsterIdentifier]],
        user_email: str,
        config: Optional[TournamentConfig] = None,
    ) -> Tournament:
        """Create and store a new tournament.

        Args:
            participant_ids: Identifiers of the competing monsters
            user_email: Contact of the user creating the tournament
            config: Format settings, the manager's default if omitted

        Returns:
            The new tournament. With a single participant it is complete
            right away.

        Raises:
            InvalidParticipantCountException: If no participants are given,
                an identifier is repeated or the field is smaller than the
                playoff cutoff
            InvalidIdentifierException: If an identifier is malformed
        """
        config = config or self.config
        participants = [Participant(pid) for pid in participant_ids]

        if not participants:
            logger.error("Rejected tournament without participants")
            raise InvalidParticipantCountException(
                "Tournament must have at least one participant"
            )

        ids = [p.id for p in participants]
        duplicates = sorted({pid for pid in ids if ids.count(pid) > 1})
        if duplicates:
            logger.error(f"Rejected tournament with duplicate participants: {duplicates}")
            raise InvalidParticipantCountException(
                f"Duplicate participants: {', '.join(duplicates)}"
            )

        if config.has_playoff and len(participants) < config.playoff_cutoff:
            logger.error(
                f"Rejected tournament: {len(participants)} participants for a "
                f"top-{config.playoff_cutoff} playoff"
            )
            raise InvalidParticipantCountException(
                f"{config.playoff} playoff needs at least {config.playoff_cutoff} "
                f"participants, got {len(participants)}"
            )

        tournament = Tournament(
            identifier=TournamentIdentifier.generate(),
            user_email=user_email,
            participants=participants,
            total_rounds=self.engine.calculate_total_rounds(len(participants)),
            config=config,
            engine=self.engine,
        )
        self.repository.save(tournament)

        logger.info(
            f"Created tournament {tournament.id} for {user_email}: "
            f"{len(participants)} participants, {tournament.total_rounds} rounds"
        )
        return tournament

    def get_tournament(self, tournament_id: TournamentRef) -> Tournament:
        """Get a tournament by identifier.

        Raises:
            TournamentNotFoundException: If the tournament does not exist
            InvalidIdentifierException: If the identifier is malformed
        """
        identifier = as_tournament_id(tournament_id)
        tournament = self.repository.find_by_id(identifier)
        if tournament is None:
            raise TournamentNotFoundException(f"Tournament not found: {identifier}")
        return tournament

    def get_user_tournaments(self, user_email: str) -> List[Tournament]:
        """All tournaments created by a user."""
        return self.repository.find_by_user_email(user_email)

    def delete_tournament(self, tournament_id: TournamentRef) -> None:
        """Delete a tournament and drop its playoff bracket.

        Raises:
            TournamentNotFoundException: If the tournament does not exist
        """
        tournament = self.get_tournament(tournament_id)
        with self._lock_for(tournament.id):
            self.repository.delete(tournament.identifier)
            self._brackets.pop(tournament.id, None)
        with self._locks_guard:
            self._locks.pop(tournament.id, None)
        logger.info(f"Deleted tournament {tournament.id}")

    # ========== Swiss Rounds ==========

    def _current_round(self, tournament: Tournament) -> RoundData:
        return tournament.round_manager.get_or_create_round(
            tournament.current_round, tournament.participants, tournament.scores()
        )

    def get_current_round_pairings(self, tournament_id: TournamentRef) -> Pairings:
        """Pairings of the round being played.

        The pairings are generated the first time they are requested and stay
        fixed for the rest of the round. A participant without an opponent is
        returned last as a one-element tuple.

        Returns:
            List of participant tuples, empty once the tournament is complete
        """
        tournament = self.get_tournament(tournament_id)
        with self._lock_for(tournament.id):
            if tournament.is_complete():
                return []
            self._current_round(tournament)
            return tournament.round_manager.get_pairings(
                tournament.current_round, tournament.participants_by_id
            )

    def record_match_result(
        self,
        tournament_id: TournamentRef,
        participant1: ParticipantRef,
        participant2: ParticipantRef,
        outcome: Union[str, Outcome],
        winner: Optional[ParticipantRef] = None,
    ) -> Match:
        """Record the result of a current-round match.

        Args:
            tournament_id: The tournament
            participant1: First participant
            participant2: Second participant
            outcome: "win", "loss" or "draw"
            winner: Winning participant, None for draws

        Returns:
            The match holding the result

        Raises:
            TournamentNotFoundException: If the tournament does not exist
            TournamentStateException: If the tournament is already complete
            ParticipantNotFoundException: If a participant is unknown
            InvalidResultException: If the outcome or winner is invalid
            DuplicateResultException: If the pair already has a result this round
        """
        tournament = self.get_tournament(tournament_id)
        with self._lock_for(tournament.id):
            if tournament.is_complete():
                raise TournamentStateException(
                    f"Tournament {tournament.id} is complete; no results to record"
                )
            round_data = self._current_round(tournament)
            match = self.result_recorder.record_match_result(
                round_data,
                tournament.participants_by_id,
                participant1,
                participant2,
                outcome,
                winner,
                tournament.round_manager.pairing_history,
            )
            self.repository.save(tournament)
            return match

    def record_bye(
        self, tournament_id: TournamentRef, participant: ParticipantRef
    ) -> Participant:
        """Credit a bye (worth a win) to a participant in the current round."""
        tournament = self.get_tournament(tournament_id)
        with self._lock_for(tournament.id):
            if tournament.is_complete():
                raise TournamentStateException(
                    f"Tournament {tournament.id} is complete; no byes to record"
                )
            round_data = self._current_round(tournament)
            bye_participant = self.result_recorder.record_bye(
                round_data, tournament.participants_by_id, participant
            )
            self.repository.save(tournament)
            return bye_participant

    def is_current_round_complete(self, tournament_id: TournamentRef) -> bool:
        """Do all paired matches of the current round have a result?

        Byes are not required. A complete tournament counts as complete.
        """
        tournament = self.get_tournament(tournament_id)
        with self._lock_for(tournament.id):
            if tournament.is_complete():
                return True
            return not self._current_round(tournament).pending_pairings()

    def advance_to_next_round(self, tournament_id: TournamentRef) -> None:
        """Close the current round and move to the next.

        When the last Swiss round is closed and the format defines a playoff,
        the bracket is seeded from the final standings.

        Raises:
            TournamentStateException: If the tournament is already complete
            IncompleteRoundException: If a paired match has no result
        """
        tournament = self.get_tournament(tournament_id)
        with self._lock_for(tournament.id):
            if tournament.is_complete():
                logger.error(f"Cannot advance {tournament.id}: already complete")
                raise TournamentStateException(
                    "Cannot advance round: tournament is already complete"
                )

            round_data = self._current_round(tournament)
            pending = round_data.pending_pairings()
            if pending:
                logger.error(
                    f"Cannot advance {tournament.id}: {len(pending)} match(es) "
                    "without result"
                )
                raise IncompleteRoundException(
                    "Cannot advance round: not all matches in current round are "
                    f"complete ({', '.join(f'{a} vs {b}' for a, b in pending)})"
                )

            tournament.round_manager.mark_round_completed(tournament.current_round)
            tournament.advance_round()
            self.repository.save(tournament)

            if tournament.is_complete() and tournament.config.has_playoff:
                self._initialize_bracket(tournament)

    # ========== Standings ==========

    def get_current_standings(self, tournament_id: TournamentRef) -> List[StandingRecord]:
        """Standings records ordered by score, wins, then fewest losses."""
        tournament = self.get_tournament(tournament_id)
        with self._lock_for(tournament.id):
            return [p.to_dict() for p in tournament.get_standings()]

    def get_final_standings(self, tournament_id: TournamentRef) -> List[StandingRecord]:
        """Standings of a completed tournament.

        Raises:
            TournamentStateException: If the tournament is not complete yet
        """
        tournament = self.get_tournament(tournament_id)
        with self._lock_for(tournament.id):
            if not tournament.is_complete():
                raise TournamentStateException("Tournament is not complete yet")
            return [p.to_dict() for p in tournament.get_standings()]

    # ========== Playoff ==========

    def _initialize_bracket(self, tournament: Tournament) -> Bracket:
        if tournament.id in self._brackets:
            return self._brackets[tournament.id]

        config = tournament.config
        # the playoff keeps its own records; Swiss stats stay untouched
        ranked = [Participant(p.monster) for p in tournament.get_standings()]
        bracket = self.bracket_factory.create_from_ranking(
            ranked, config.playoff_cutoff, config.playoff, config.playoff_reset
        )
        self._brackets[tournament.id] = bracket
        logger.info(
            f"Tournament {tournament.id}: {config.playoff} playoff seeded with "
            f"top {config.playoff_cutoff}"
        )
        return bracket

    def get_bracket(self, tournament_id: TournamentRef) -> Optional[Bracket]:
        """The playoff bracket, or None if none has been seeded."""
        tournament = self.get_tournament(tournament_id)
        return self._brackets.get(tournament.id)

    def _require_bracket(self, tournament: Tournament) -> Bracket:
        bracket = self._brackets.get(tournament.id)
        if bracket is None:
            raise BracketStateException(
                f"Bracket not initialized for tournament {tournament.id}"
            )
        return bracket

    def record_bracket_result(
        self,
        tournament_id: TournamentRef,
        participant1: ParticipantRef,
        participant2: ParticipantRef,
        winner: ParticipantRef,
    ) -> Match:
        """Record the winner of an active playoff match.

        Raises:
            BracketStateException: If no bracket has been seeded
            InvalidMatchException: If no active match has these participants
        """
        tournament = self.get_tournament(tournament_id)
        with self._lock_for(tournament.id):
            bracket = self._require_bracket(tournament)
            return bracket.record_result(participant1, participant2, winner)

    def get_next_bracket_match(self, tournament_id: TournamentRef) -> Optional[Match]:
        """First active playoff match still waiting for a result, if any."""
        tournament = self.get_tournament(tournament_id)
        with self._lock_for(tournament.id):
            bracket = self._brackets.get(tournament.id)
            if bracket is None:
                return None
            return next(
                (m for m in bracket.get_current_round_matches() if not m.is_complete()),
                None,
            )

    def advance_bracket(self, tournament_id: TournamentRef) -> None:
        """Advance the playoff bracket to its next round."""
        tournament = self.get_tournament(tournament_id)
        with self._lock_for(tournament.id):
            bracket = self._require_bracket(tournament)
            bracket.advance_round()
            if bracket.is_complete():
                logger.info(
                    f"Tournament {tournament.id}: playoff won by "
                    f"{bracket.get_winner().id}"
                )

    def is_bracket_complete(self, tournament_id: TournamentRef) -> bool:
        """Has the playoff produced a winner? False when there is no bracket."""
        bracket = self.get_bracket(tournament_id)
        return bracket is not None and bracket.is_complete()

    def get_champion(self, tournament_id: TournamentRef) -> Optional[Participant]:
        """Overall winner of the tournament.

        With a playoff this is the bracket winner, without one it is the top
        of the final standings. None while either is still undecided.
        """
        tournament = self.get_tournament(tournament_id)
        with self._lock_for(tournament.id):
            if not tournament.is_complete():
                return None
            if tournament.config.has_playoff:
                bracket = self._brackets.get(tournament.id)
                return bracket.get_winner() if bracket is not None else None
            return tournament.get_standings()[0]
