import json

import pytest

from monsterpairing.models.identifiers import MonsterIdentifier
from monsterpairing.models.tournament import Participant
from monsterpairing.strategies import (
    STRATEGIES,
    PrefersHigherSeedStrategy,
    PrefersHigherStatStrategy,
    PrefersLowerLexicalStrategy,
    RandomStrategy,
)
from monsterpairing.testing.rtg import (
    MonsterFactory,
    RandomTournamentGenerator,
    ResultPattern,
    RTGConfig,
    StatDistribution,
    create_double_elimination_tournament,
    create_single_elimination_tournament,
    create_small_tournament,
)

# ========== Strategies ==========


def test_lexical_strategy_ignores_case():
    strategy = PrefersLowerLexicalStrategy()
    assert strategy.choose_winner("Pikachu", "eevee") == "eevee"
    assert strategy.choose_winner(Participant("abra"), Participant("Zubat")).id == "abra"
    assert strategy.name == "PrefersLowerLexicalStrategy"


def test_seed_strategy_prefers_first_side():
    strategy = PrefersHigherSeedStrategy()
    assert strategy.choose_winner("zubat", "abra") == "zubat"


def test_stat_strategy():
    strategy = PrefersHigherStatStrategy({"onix": 35, "snorlax": 160})
    assert strategy.choose_winner("onix", "snorlax") == "snorlax"
    # unknown identifiers count as 0, ties go alphabetically
    assert strategy.choose_winner("mew", "abra") == "abra"

    by_length = PrefersHigherStatStrategy(len)
    assert by_length.choose_winner(MonsterIdentifier("eevee"), MonsterIdentifier("onix")) == (
        MonsterIdentifier("eevee")
    )


def test_random_strategy_is_reproducible():
    picks = [RandomStrategy(7).choose_winner("a", "b") for _ in range(3)]
    assert len(set(picks)) == 1
    assert set(STRATEGIES) == {"lexical", "seed", "random"}


# ========== Monster factory ==========


@pytest.mark.parametrize("distribution", list(StatDistribution))
def test_monster_stats_stay_in_range(distribution):
    config = RTGConfig(num_participants=20, stat_distribution=distribution, seed=3)
    monsters = MonsterFactory(config).create_monsters()

    assert len(monsters) == 20
    assert "bulbasaur-2" in monsters
    assert all(20 <= stat <= 160 for stat in monsters.values())


# ========== Generator ==========


def test_small_tournament_runs_to_completion():
    data = create_small_tournament(num_participants=7, seed=11).generate_complete_tournament()

    assert data["total_rounds"] == 3
    assert len(data["rounds"]) == 3
    assert all(r["bye_participant_id"] is not None for r in data["rounds"])
    assert data["playoff"] is None
    assert data["champion"] == data["standings"][0]["participant_id"]

    total_wins = sum(row["wins"] for row in data["standings"])
    total_losses = sum(row["losses"] for row in data["standings"])
    # each bye is a win without a matching loss
    assert total_wins - total_losses == 3


def test_seeded_generation_is_reproducible():
    first = create_small_tournament(8, seed=5).generate_complete_tournament()
    second = create_small_tournament(8, seed=5).generate_complete_tournament()
    assert first["standings"] == second["standings"]
    assert first["rounds"] == second["rounds"]


def test_single_elimination_playoff_generation():
    data = create_single_elimination_tournament(12, cutoff=4, seed=1).generate_complete_tournament()
    playoff = data["playoff"]

    assert playoff["type"] == "single-elimination"
    assert playoff["seeds"] == [row["participant_id"] for row in data["standings"][:4]]
    assert [r["round"] for r in playoff["rounds"]] == ["R1", "R2"]
    assert data["champion"] == playoff["winner"]


@pytest.mark.parametrize("reset", [True, False])
def test_double_elimination_playoff_generation(reset):
    generator = create_double_elimination_tournament(16, cutoff=8, reset=reset, seed=9)
    data = generator.generate_complete_tournament()
    labels = [r["round"] for r in data["playoff"]["rounds"]]

    assert labels[:8] == [
        "WB-R1",
        "LB-R1",
        "WB-R2",
        "LB-R2",
        "LB-R3",
        "WB-Final",
        "LB-Final",
        "GF-1",
    ]
    assert len(labels) in (8, 9)
    if not reset:
        assert "GF-Reset" not in labels
    assert data["champion"] == data["playoff"]["winner"]


def test_lexical_pattern_crowns_alphabetical_first():
    config = RTGConfig(
        num_participants=8,
        result_pattern=ResultPattern.LEXICAL,
        draw_percentage=0,
        playoff="single-elimination",
        playoff_cutoff=8,
        seed=2,
    )
    data = RandomTournamentGenerator(config).generate_complete_tournament()
    assert data["champion"] == min(data["stats"])


def test_export_json_format():
    generator = create_double_elimination_tournament(8, cutoff=4, seed=4)
    data = generator.generate_complete_tournament()
    exported = json.loads(generator.export_json_format(data))

    assert exported["tournament_config"]["playoff"] == "double-elimination"
    assert exported["tournament_config"]["playoff_cutoff"] == 4
    assert exported["champion"] == data["champion"]
    assert len(exported["rounds"]) == data["total_rounds"]
    assert exported["standings"] == data["standings"]
