import pytest

from monsterpairing.models.tournament import PairingHistory, Participant
from monsterpairing.pairing import (
    SwissPairingEngine,
    calculate_standings,
    calculate_total_rounds,
    score_for_outcome,
    sort_standings_by_tie_breaker,
)


def _participants(*names):
    return [Participant(name) for name in names]


def _ids(pairings):
    return [tuple(p.id for p in pairing) for pairing in pairings]


@pytest.mark.parametrize(
    "count,rounds",
    [(0, 0), (1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (8, 3), (9, 4), (32, 5), (33, 6)],
)
def test_total_rounds(count, rounds):
    assert calculate_total_rounds(count) == rounds
    assert SwissPairingEngine().calculate_total_rounds(count) == rounds


def test_empty_and_single_fields():
    engine = SwissPairingEngine()
    assert engine.generate_pairings([], [], {}) == []

    solo = Participant("pikachu")
    assert engine.generate_pairings([solo], [], {}) == [(solo,)]


def test_first_round_keeps_input_order_without_standings():
    engine = SwissPairingEngine()
    players = _participants("d", "c", "b", "a")
    assert _ids(engine.generate_pairings(players, [], {})) == [("d", "c"), ("b", "a")]


def test_pairs_by_score_then_identifier():
    engine = SwissPairingEngine()
    players = _participants("a", "b", "c", "d")
    standings = {"a": 0, "b": 3, "c": 3, "d": 1}
    assert _ids(engine.generate_pairings(players, [], standings)) == [
        ("b", "c"),
        ("d", "a"),
    ]


def test_avoids_repeat_by_searching_forward():
    engine = SwissPairingEngine()
    players = _participants("a", "b", "c", "d")
    standings = {"a": 3, "b": 3, "c": 0, "d": 0}
    pairings = engine.generate_pairings(players, [("b", "a"), ("c", "d")], standings)
    assert _ids(pairings) == [("a", "c"), ("b", "d")]


def test_accepts_repeat_when_no_fresh_opponent_is_left():
    engine = SwissPairingEngine()
    players = _participants("a", "b")
    history = PairingHistory.from_matchups([("a", "b")])
    assert _ids(engine.generate_pairings(players, history, {"a": 3, "b": 0})) == [
        ("a", "b")
    ]


def test_greedy_pass_does_not_backtrack():
    engine = SwissPairingEngine()
    players = _participants("a", "b", "c", "d")
    # a takes c; b and d already met, and are all that is left
    history = [("a", "b"), ("b", "d")]
    pairings = engine.generate_pairings(players, history, {})
    assert _ids(pairings) == [("a", "c"), ("b", "d")]


def test_odd_field_leaves_last_ranked_unpaired():
    engine = SwissPairingEngine()
    players = _participants("a", "b", "c", "d", "e")
    standings = {"a": 0, "b": 6, "c": 3, "d": 3, "e": 1}
    pairings = engine.generate_pairings(players, [], standings)
    assert _ids(pairings) == [("b", "c"), ("d", "e"), ("a",)]


def test_every_participant_appears_once():
    engine = SwissPairingEngine()
    players = _participants(*"abcdefghi")
    history = [("a", "b"), ("c", "d"), ("e", "f"), ("g", "h")]
    pairings = engine.generate_pairings(players, history, {p.id: 0 for p in players})

    seen = [p.id for pairing in pairings for p in pairing]
    assert sorted(seen) == sorted(p.id for p in players)
    assert sum(1 for pairing in pairings if len(pairing) == 1) == 1
    for pairing in pairings:
        if len(pairing) == 2:
            assert frozenset(p.id for p in pairing) not in {
                frozenset(pair) for pair in history
            }


def test_score_for_outcome():
    assert score_for_outcome("win") == 3
    assert score_for_outcome("draw") == 1
    assert score_for_outcome("loss") == 0


def test_calculate_standings_from_results():
    standings = calculate_standings(
        ["a", "b", "c", Participant("d")],
        [("a", "b", "win"), ("c", "d", "draw"), ("b", "c", "loss")],
    )
    assert standings == {"a": 3, "b": 0, "c": 4, "d": 1}


def test_sort_standings_by_tie_breaker():
    standings = {"b": 3, "a": 3, "c": 6, "d": 0}
    assert sort_standings_by_tie_breaker(standings) == [
        ("c", 6),
        ("a", 3),
        ("b", 3),
        ("d", 0),
    ]
    assert sort_standings_by_tie_breaker(standings, ["d", "e", "b"]) == [
        ("b", 3),
        ("d", 0),
        ("e", 0),
    ]
