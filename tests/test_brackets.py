import pytest

from monsterpairing.bracket import (
    BracketPhase,
    DoubleEliminationBracket,
    SingleEliminationBracket,
    bracket_order,
    first_round_pairs,
)
from monsterpairing.exceptions import (
    BracketStateException,
    DrawNotAllowedException,
    IncompleteRoundException,
    InvalidMatchException,
    InvalidParticipantCountException,
)
from monsterpairing.models.tournament import MatchResult, Participant


def _seeds(count):
    return [Participant(f"seed{i}") for i in range(1, count + 1)]


def _ids(matches):
    return [(m.participant1.id, m.participant2.id) for m in matches]


def _play_round(bracket, pick=lambda match: match.participant1):
    for match in bracket.get_current_round_matches():
        bracket.record_result(match.participant1, match.participant2, pick(match))
    bracket.advance_round()


def _run(bracket, pick=lambda match: match.participant1):
    labels = []
    while not bracket.is_complete():
        labels.append(bracket.round_label)
        _play_round(bracket, pick)
    return labels


# ========== Seeding ==========


def test_bracket_order():
    assert bracket_order(2) == [1, 2]
    assert bracket_order(4) == [1, 4, 3, 2]
    assert bracket_order(8) == [1, 8, 5, 4, 3, 6, 7, 2]
    assert bracket_order(16) == [1, 16, 9, 8, 5, 12, 13, 4, 3, 14, 11, 6, 7, 10, 15, 2]


def test_first_round_pairs():
    assert first_round_pairs(2) == [(1, 2)]
    assert first_round_pairs(4) == [(1, 4), (2, 3)]
    assert first_round_pairs(8) == [(1, 8), (4, 5), (3, 6), (2, 7)]
    assert first_round_pairs(16)[:4] == [(1, 16), (8, 9), (5, 12), (4, 13)]


def test_first_round_pairs_pad_to_power_of_two():
    # seeds 1-3 get byes in a field of 5
    assert first_round_pairs(5) == [(1, 8), (4, 5), (3, 6), (2, 7)]


@pytest.mark.parametrize("size", [16, 32])
def test_top_two_seeds_in_opposite_halves(size):
    order = bracket_order(size)
    assert order.index(1) < size // 2 <= order.index(2)
    assert sorted(order) == list(range(1, size + 1))


def test_bracket_order_rejects_other_sizes():
    with pytest.raises(InvalidParticipantCountException):
        bracket_order(6)
    with pytest.raises(InvalidParticipantCountException):
        first_round_pairs(1)


# ========== Single elimination ==========


def test_single_elimination_first_round_for_eight():
    bracket = SingleEliminationBracket(_seeds(8))
    assert _ids(bracket.get_current_round_matches()) == [
        ("seed1", "seed8"),
        ("seed4", "seed5"),
        ("seed3", "seed6"),
        ("seed2", "seed7"),
    ]
    assert bracket.round_label == "R1"


def test_single_elimination_favourites_win():
    bracket = SingleEliminationBracket(_seeds(8))
    labels = _run(bracket)

    assert labels == ["R1", "R2", "R3"]
    assert bracket.is_complete()
    assert bracket.get_winner().id == "seed1"
    assert [len(matches) for matches in bracket.rounds] == [4, 2, 1]
    assert _ids(bracket.rounds[1]) == [("seed1", "seed4"), ("seed3", "seed2")]
    assert bracket.get_current_round_matches() == []
    assert bracket.round_label == "Complete"


def test_single_elimination_underdogs_win():
    bracket = SingleEliminationBracket(_seeds(4))
    _run(bracket, pick=lambda match: match.participant2)
    # 4 beats 1, 3 beats 2, then 3 beats 4
    assert bracket.get_winner().id == "seed3"


def test_single_elimination_two_participants():
    bracket = SingleEliminationBracket(_seeds(2))
    assert bracket.get_winner() is None
    _play_round(bracket)
    assert bracket.get_winner().id == "seed1"


def test_single_elimination_byes_for_top_seeds():
    bracket = SingleEliminationBracket(_seeds(6))
    assert [p.id for p in bracket.get_byes()] == ["seed1", "seed2"]
    assert _ids(bracket.get_current_round_matches()) == [
        ("seed4", "seed5"),
        ("seed3", "seed6"),
    ]

    _play_round(bracket)
    assert _ids(bracket.get_current_round_matches()) == [
        ("seed1", "seed4"),
        ("seed3", "seed2"),
    ]
    _run(bracket)
    assert bracket.get_winner().id == "seed1"


def test_single_elimination_needs_two_unique_participants():
    with pytest.raises(InvalidParticipantCountException):
        SingleEliminationBracket(_seeds(1))
    with pytest.raises(InvalidParticipantCountException):
        SingleEliminationBracket([Participant("a"), Participant("a")])


def test_single_elimination_cannot_advance_incomplete_round():
    bracket = SingleEliminationBracket(_seeds(4))
    first = bracket.get_current_round_matches()[0]
    bracket.record_result(first.participant1, first.participant2, first.participant1)
    with pytest.raises(IncompleteRoundException):
        bracket.advance_round()


def test_single_elimination_rejects_draws():
    bracket = SingleEliminationBracket(_seeds(2))
    bracket.get_current_round_matches()[0].record_result(MatchResult.draw())
    with pytest.raises(DrawNotAllowedException):
        bracket.advance_round()


def test_single_elimination_cannot_advance_when_complete():
    bracket = SingleEliminationBracket(_seeds(2))
    _run(bracket)
    with pytest.raises(BracketStateException):
        bracket.advance_round()


def test_record_result_by_identifier():
    bracket = SingleEliminationBracket(_seeds(4))
    match = bracket.record_result("seed4", "seed1", "seed4")
    assert match.winner.id == "seed4"

    with pytest.raises(InvalidMatchException):
        bracket.record_result("seed1", "seed2", "seed1")
    with pytest.raises(InvalidMatchException):
        bracket.record_result("seed2", "seed3", "seed1")


# ========== Double elimination ==========


def test_double_elimination_phases_for_eight():
    bracket = DoubleEliminationBracket(_seeds(8))
    assert bracket.phase is BracketPhase.WINNERS_ROUND
    labels = _run(bracket)

    assert labels == [
        "WB-R1",
        "LB-R1",
        "WB-R2",
        "LB-R2",
        "LB-R3",
        "WB-Final",
        "LB-Final",
        "GF-1",
    ]
    assert [len(matches) for matches in bracket.rounds] == [4, 2, 2, 2, 1, 1, 1, 1]
    assert bracket.get_winner().id == "seed1"
    assert bracket.phase is BracketPhase.COMPLETE
    assert bracket.phase_label == "Complete"


def test_double_elimination_losers_bracket_pairings():
    bracket = DoubleEliminationBracket(_seeds(8))
    _play_round(bracket)
    # WB-R1 losers in bracket order: 8, 5, 6, 7
    assert _ids(bracket.get_current_round_matches()) == [
        ("seed8", "seed5"),
        ("seed6", "seed7"),
    ]
    _play_round(bracket)
    assert bracket.phase_label == "WB-R2"
    assert _ids(bracket.get_current_round_matches()) == [
        ("seed1", "seed4"),
        ("seed3", "seed2"),
    ]
    _play_round(bracket)
    # LB-R1 winners meet the WB-R2 losers
    assert _ids(bracket.get_current_round_matches()) == [
        ("seed8", "seed4"),
        ("seed6", "seed2"),
    ]


def test_double_elimination_round_numbers_are_sequential():
    bracket = DoubleEliminationBracket(_seeds(8))
    _run(bracket)
    for step, matches in enumerate(bracket.rounds, start=1):
        assert {m.round_number for m in matches} == {step}


def test_grand_final_reset_when_losers_champion_wins():
    bracket = DoubleEliminationBracket(_seeds(8))
    while bracket.phase is not BracketPhase.GRAND_FINAL:
        _play_round(bracket)

    grand_final = bracket.get_current_round_matches()[0]
    assert grand_final.participant1 == bracket.wb_champion
    assert grand_final.participant2 == bracket.lb_champion

    _play_round(bracket, pick=lambda match: match.participant2)
    assert bracket.phase is BracketPhase.GRAND_FINAL_RESET
    assert bracket.phase_label == "GF-Reset"
    assert len(bracket.get_current_round_matches()) == 1
    assert not bracket.is_complete()

    _play_round(bracket)
    assert bracket.get_winner() == bracket.wb_champion


def test_grand_final_without_reset_ends_on_losers_champion_win():
    bracket = DoubleEliminationBracket(_seeds(8), enable_reset=False)
    while bracket.phase is not BracketPhase.GRAND_FINAL:
        _play_round(bracket)

    _play_round(bracket, pick=lambda match: match.participant2)
    assert bracket.is_complete()
    assert bracket.get_winner() == bracket.lb_champion
    assert all(len(matches) == 1 for matches in bracket.rounds[-4:])
    assert len(bracket.rounds) == 8


def test_double_elimination_for_four():
    bracket = DoubleEliminationBracket(_seeds(4))
    assert _run(bracket) == ["WB-R1", "LB-R1", "WB-Final", "LB-Final", "GF-1"]
    assert bracket.get_winner().id == "seed1"
    assert bracket.lb_champion.id == "seed4"


def test_double_elimination_for_sixteen():
    bracket = DoubleEliminationBracket(_seeds(16))
    labels = _run(bracket)

    assert labels == [
        "WB-R1",
        "LB-R1",
        "WB-R2",
        "LB-R2",
        "LB-R3",
        "WB-R3",
        "LB-R4",
        "LB-R5",
        "WB-Final",
        "LB-Final",
        "GF-1",
    ]
    # every participant but the champion loses twice; champion never
    assert sum(len(matches) for matches in bracket.rounds) == 2 * 16 - 2
    assert bracket.get_winner().id == "seed1"


def test_every_loser_eliminated_after_two_losses():
    bracket = DoubleEliminationBracket(_seeds(8))
    _run(bracket, pick=lambda match: match.participant2)

    losses = {}
    for matches in bracket.rounds:
        for match in matches:
            losses[match.loser.id] = losses.get(match.loser.id, 0) + 1
    champion = bracket.get_winner().id
    assert losses.get(champion, 0) <= 1
    assert all(count == 2 for pid, count in losses.items() if pid != champion)


@pytest.mark.parametrize("count", [2, 6, 12])
def test_double_elimination_rejects_invalid_sizes(count):
    with pytest.raises(InvalidParticipantCountException):
        DoubleEliminationBracket(_seeds(count))


def test_double_elimination_rejects_draws():
    bracket = DoubleEliminationBracket(_seeds(4))
    for match in bracket.get_current_round_matches():
        match.record_result(MatchResult.draw())
    with pytest.raises(DrawNotAllowedException):
        bracket.advance_round()


def test_double_elimination_to_dict():
    bracket = DoubleEliminationBracket(_seeds(4), enable_reset=False)
    data = bracket.to_dict()
    assert data["round"] == "WB-R1"
    assert data["enable_reset"] is False
    assert data["winner_id"] is None
    assert len(data["current_matches"]) == 2
