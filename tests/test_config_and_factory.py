import pytest

from monsterpairing.bracket import (
    DoubleEliminationBracket,
    PlayoffBracketFactory,
    SingleEliminationBracket,
)
from monsterpairing.exceptions import (
    InvalidConfigurationException,
    InvalidParticipantCountException,
)
from monsterpairing.models.tournament import (
    Participant,
    TournamentConfig,
    load_tournament_config,
)


# ========== TournamentConfig ==========


def test_default_config_is_plain_swiss():
    config = TournamentConfig()
    assert config.format == "swiss-tournament"
    assert not config.has_playoff
    assert config.to_dict() == {"format": "swiss-tournament"}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"format": "round-robin"},
        {"playoff": "triple-elimination", "playoff_cutoff": 8},
        {"playoff": "single-elimination"},
        {"playoff": "single-elimination", "playoff_cutoff": 1},
        {"playoff": "single-elimination", "playoff_cutoff": 6},
        {"playoff": "double-elimination", "playoff_cutoff": 2},
    ],
)
def test_invalid_configs_are_rejected(kwargs):
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig(**kwargs)


def test_config_dict_uses_hyphenated_keys():
    config = TournamentConfig(
        playoff="double-elimination", playoff_cutoff=8, playoff_reset=False
    )
    data = config.to_dict()
    assert data == {
        "format": "swiss-tournament",
        "playoff": "double-elimination",
        "playoff-cutoff": 8,
        "playoff-reset": False,
    }
    assert TournamentConfig.from_dict(data) == config


FORMATS_YAML = """\
swiss:
  format: swiss-tournament

favorite-pokemon:
  format: swiss-tournament
  playoff: double-elimination
  playoff-cutoff: 16
  playoff-reset: false

swiss-top8:
  format: swiss-tournament
  playoff: single-elimination
  playoff-cutoff: "8"
"""


def test_load_config_from_yaml(tmp_path):
    path = tmp_path / "formats.yaml"
    path.write_text(FORMATS_YAML, encoding="utf-8")

    assert not load_tournament_config(path, "swiss").has_playoff

    favorite = load_tournament_config(path, "favorite-pokemon")
    assert favorite.playoff == "double-elimination"
    assert favorite.playoff_cutoff == 16
    assert favorite.playoff_reset is False

    top8 = load_tournament_config(str(path), "swiss-top8")
    assert top8.playoff == "single-elimination"
    assert top8.playoff_cutoff == 8
    assert top8.playoff_reset is True


def test_load_config_errors(tmp_path):
    path = tmp_path / "formats.yaml"
    path.write_text(
        "bad:\n  playoff: single-elimination\n  playoff-cutoff: x\n"
        "listed:\n  - swiss-tournament\n",
        encoding="utf-8",
    )

    with pytest.raises(InvalidConfigurationException):
        load_tournament_config(path, "missing")
    with pytest.raises(InvalidConfigurationException):
        load_tournament_config(path, "bad")
    with pytest.raises(InvalidConfigurationException):
        load_tournament_config(path, "listed")
    with pytest.raises(InvalidConfigurationException):
        load_tournament_config(tmp_path / "nope.yaml", "bad")

    broken = tmp_path / "broken.yaml"
    broken.write_text("swiss: [unclosed\n", encoding="utf-8")
    with pytest.raises(InvalidConfigurationException):
        load_tournament_config(broken, "swiss")

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(InvalidConfigurationException):
        load_tournament_config(empty, "swiss")


# ========== PlayoffBracketFactory ==========


def test_create_from_standings_seeds_by_score_then_identifier():
    factory = PlayoffBracketFactory()
    participants = [Participant(name) for name in "abcdef"]
    standings = {"a": 3, "b": 9, "c": 6, "d": 6, "e": 0, "f": 9}

    bracket = factory.create_from_standings(
        participants, standings, 4, "single-elimination"
    )

    assert isinstance(bracket, SingleEliminationBracket)
    assert [p.id for p in bracket.participants] == ["b", "f", "c", "d"]
    assert bracket.participants[0] is participants[1]
    matches = bracket.get_current_round_matches()
    assert [(m.participant1.id, m.participant2.id) for m in matches] == [
        ("b", "d"),
        ("f", "c"),
    ]


def test_create_from_standings_accepts_plain_identifiers():
    factory = PlayoffBracketFactory()
    bracket = factory.create_from_standings(
        ["x", "y"], {"x": 1, "y": 3, "z": 6}, 2, "single-elimination"
    )
    assert [p.id for p in bracket.participants] == ["z", "y"]


def test_create_double_elimination_with_reset_flag():
    factory = PlayoffBracketFactory()
    ranked = [Participant(f"m{i}") for i in range(8)]
    bracket = factory.create_from_ranking(ranked, 8, "double-elimination", reset=False)
    assert isinstance(bracket, DoubleEliminationBracket)
    assert bracket.enable_reset is False


def test_factory_errors():
    factory = PlayoffBracketFactory()
    ranked = [Participant(f"m{i}") for i in range(4)]

    with pytest.raises(InvalidConfigurationException):
        factory.create_from_ranking(ranked, 1, "single-elimination")
    with pytest.raises(InvalidConfigurationException):
        factory.create_from_ranking(ranked, 4, "round-robin")
    with pytest.raises(InvalidParticipantCountException):
        factory.create_from_ranking(ranked, 8, "single-elimination")
