import argparse
import json

import pytest

from matchday.cli import create_parser, main, parse_participant, positive_int


def _run(state_file, *args):
    return main(["--state-file", str(state_file), *args])


def _load(state_file):
    return json.loads(state_file.read_text(encoding="utf-8"))


def _create_cup(state_file, *extra):
    return _run(
        state_file,
        "create",
        "Spring Cup",
        "--format",
        "knockout",
        "-p",
        "Ada:70",
        "-p",
        "Bob:55",
        "-p",
        "Cy",
        "-p",
        "Dee:40",
        "--seed",
        "3",
        *extra,
    )


def test_parse_participant_with_and_without_rating():
    assert parse_participant("Ada:72").rating == 72
    plain = parse_participant("  Bob ")
    assert plain.name == "Bob"
    assert plain.rating == 50
    assert parse_participant("Dr. Who:  140").rating == 100
    with pytest.raises(argparse.ArgumentTypeError):
        parse_participant("Ada:strong")


def test_positive_int_rejects_zero():
    assert positive_int("4") == 4
    with pytest.raises(argparse.ArgumentTypeError):
        positive_int("0")


def test_format_is_case_insensitive():
    args = create_parser().parse_args(["create", "X", "--format", "swiss"])
    assert args.format == "SWISS"


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_create_and_list(tmp_path, capsys):
    state_file = tmp_path / "state.json"
    assert _create_cup(state_file) == 0
    assert "Created Spring Cup" in capsys.readouterr().out

    payload = _load(state_file)
    tournament = payload["tournaments"][0]
    assert tournament["format"] == "KNOCKOUT"
    assert [p["name"] for p in tournament["participants"]] == ["Ada", "Bob", "Cy", "Dee"]
    assert tournament["settings"]["randomSeed"] == 3
    assert payload["currentTournamentId"] == tournament["id"]

    assert _run(state_file, "list") == 0
    assert "* " in capsys.readouterr().out


def test_full_run_prints_champion(tmp_path, capsys):
    state_file = tmp_path / "state.json"
    _create_cup(state_file)
    assert _run(state_file, "fixtures") == 0
    assert _run(state_file, "simulate-all", "-t", "spring cup") == 0
    out = capsys.readouterr().out
    assert "Champion:" in out
    assert "Runner-up:" in out
    assert _load(state_file)["tournaments"][0]["status"] == "COMPLETED"

    assert _run(state_file, "history") == 0
    assert "Ada" in capsys.readouterr().out


def test_manual_result_and_lock(tmp_path, capsys):
    state_file = tmp_path / "state.json"
    _create_cup(state_file)
    _run(state_file, "fixtures")
    match = _load(state_file)["tournaments"][0]["matches"][0]
    winner = match["playerA"]

    assert _run(state_file, "result", match["id"], winner) == 0
    stored = _load(state_file)["tournaments"][0]["matches"][0]
    assert stored["winner"] == winner

    assert _run(state_file, "result", match["id"], winner) == 1
    assert "not recorded" in capsys.readouterr().out


def test_unknown_tournament_fails(tmp_path):
    state_file = tmp_path / "state.json"
    assert _run(state_file, "show") == 1
    _create_cup(state_file)
    assert _run(state_file, "show", "-t", "nope") == 1


def test_rating_reset_and_delete(tmp_path):
    state_file = tmp_path / "state.json"
    _create_cup(state_file)
    _run(state_file, "fixtures")

    assert _run(state_file, "rating", "ada", "95") == 0
    participants = _load(state_file)["tournaments"][0]["participants"]
    assert participants[0]["rating"] == 95

    assert _run(state_file, "reset") == 0
    tournament = _load(state_file)["tournaments"][0]
    assert tournament["matches"] == []
    assert tournament["status"] == "NOT_STARTED"

    assert _run(state_file, "delete", "Spring Cup") == 0
    assert _load(state_file)["tournaments"] == []


def test_export_import_and_clear(tmp_path, capsys):
    state_file = tmp_path / "state.json"
    export_file = tmp_path / "export.json"
    _create_cup(state_file)
    assert _run(state_file, "export", str(export_file)) == 0
    assert "exportedAt" in _load(export_file)

    assert _run(state_file, "clear") == 0
    assert _load(state_file)["tournaments"] == []

    assert _run(state_file, "import", str(export_file)) == 0
    assert len(_load(state_file)["tournaments"]) == 1

    bad_file = tmp_path / "bad.json"
    bad_file.write_text('{"tournaments": 3}', encoding="utf-8")
    assert _run(state_file, "import", str(bad_file)) == 1
    assert "Import failed" in capsys.readouterr().out
    assert len(_load(state_file)["tournaments"]) == 1
