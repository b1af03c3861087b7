import json

from monsterpairing.testing.__main__ import (
    COMMANDS,
    create_completer,
    create_main_parser,
    run_standard_mode,
)


def test_completer_knows_every_command():
    completer = create_completer()
    for command in COMMANDS:
        assert command in completer.options
        assert f"/{command}" in completer.options


def test_generate_defaults():
    args = create_main_parser().parse_args(["generate"])
    assert args.participants == 16
    assert args.distribution == "normal"
    assert args.pattern == "realistic"
    assert args.playoff is None
    assert args.no_reset is False


def test_generate_writes_json(tmp_path, capsys):
    output = tmp_path / "tournament.json"
    code = run_standard_mode(
        [
            "generate",
            "--participants",
            "8",
            "--playoff",
            "double-elimination",
            "--cutoff",
            "4",
            "--seed",
            "3",
            "--output",
            str(output),
        ]
    )

    assert code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["playoff"]["type"] == "double-elimination"
    assert "Champion: " + data["champion"] in capsys.readouterr().out


def test_generate_reports_engine_errors(capsys):
    code = run_standard_mode(
        ["generate", "--participants", "4", "--playoff", "single-elimination"]
    )
    assert code == 1
    assert "Error:" in capsys.readouterr().out


def test_seeding_command(capsys):
    assert run_standard_mode(["seeding", "--size", "6"]) == 0
    out = capsys.readouterr().out
    assert "1 bye" in out
    assert "4 vs 5" in out
