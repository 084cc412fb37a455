import json

import pytest

from matchday.constants import SCHEMA_VERSION
from matchday.models.enums import MatchStage, TournamentFormat, TournamentStatus
from matchday.models.tournament import (
    Group,
    Match,
    Participant,
    Side,
    Tournament,
    TournamentSettings,
)
from matchday.statistics import derive_history
from matchday.storage import (
    InMemoryStateStore,
    JsonStateStore,
    decode_state,
    encode_state,
    export_state,
    import_state,
)
from matchday.tournament.simulation import simulate_match_result
from matchday.utils.validation import validate_transfer_payload


def _tournament():
    return Tournament(
        id="t1",
        name="Spring Cup",
        format=TournamentFormat.GROUP_KO,
        participants=(
            Participant(id="a", name="Ada", rating=61.5),
            Participant(id="b", name="Bob", rating=40),
        ),
        matches=(
            Match(
                "m1",
                Side.of("a"),
                Side.of("b"),
                1,
                MatchStage.GROUP,
                played=True,
                winner="a",
                group_id="A",
            ),
            Match("m2", Side.of("a"), Side.bye(), 2, MatchStage.KNOCKOUT),
        ),
        settings=TournamentSettings(random_seed=9, allow_draws=True),
        status=TournamentStatus.IN_PROGRESS,
        groups=(Group("A", ("a", "b")),),
    )


def test_encode_decode_preserves_tournaments():
    tournament = _tournament()
    payload = encode_state([tournament], derive_history([tournament]), "t1")
    assert payload["schemaVersion"] == SCHEMA_VERSION
    assert payload["tournaments"][0]["matches"][1]["playerB"] == "BYE"

    loaded = decode_state(json.loads(json.dumps(payload)))
    assert loaded.tournaments == [tournament]
    assert loaded.current_tournament_id == "t1"
    assert loaded.participant_history["ada"].wins == 1


def test_missing_schema_version_takes_current():
    data = _tournament().to_dict()
    del data["schemaVersion"]
    assert Tournament.from_dict(data).schema_version == SCHEMA_VERSION


def test_json_store_round_trip(tmp_path):
    store = JsonStateStore(tmp_path / "nested" / "state.json")
    assert store.save_state([_tournament()], {}, "t1") is True
    loaded = store.load_state()
    assert loaded.tournaments == [_tournament()]
    assert loaded.current_tournament_id == "t1"
    assert not list((tmp_path / "nested").glob("*.tmp"))


def test_missing_file_loads_empty(tmp_path):
    loaded = JsonStateStore(tmp_path / "absent.json").load_state()
    assert loaded.tournaments == []
    assert loaded.current_tournament_id is None


@pytest.mark.parametrize(
    "content",
    ["{not json", "[1, 2]", '{"tournaments": [{"id": "t1"}]}'],
)
def test_unusable_file_loads_empty(tmp_path, content):
    path = tmp_path / "state.json"
    path.write_text(content, encoding="utf-8")
    loaded = JsonStateStore(path).load_state()
    assert loaded.tournaments == []


def test_unwritable_location_reports_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    store = JsonStateStore(blocker / "state.json")
    assert store.save_state([_tournament()], {}, None) is False


def test_in_memory_store_counts_saves():
    store = InMemoryStateStore()
    assert store.load_state().tournaments == []
    store.save_state([_tournament()], {}, "t1")
    assert store.save_count == 1
    assert store.load_state().tournaments == [_tournament()]


def test_export_is_importable():
    tournament = _tournament()
    payload = export_state([tournament], {}, "t1")
    assert "exportedAt" in payload

    result = import_state(json.loads(json.dumps(payload)))
    assert result.ok
    assert result.error is None
    assert result.state.tournaments == [tournament]
    assert result.state.participant_history["ada"].wins == 1


def test_import_keeps_stored_history_without_tournaments():
    payload = {
        "tournaments": [],
        "participantHistory": {"ada": {"name": "Ada", "played": 4, "wins": 3}},
    }
    result = import_state(payload)
    assert result.ok
    assert result.state.participant_history["ada"].wins == 3


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {},
        {"tournaments": {}},
        {"tournaments": [], "participantHistory": []},
        {"tournaments": [], "currentTournamentId": 5},
        {"tournaments": [], "schemaVersion": "1"},
        {"tournaments": [], "schemaVersion": True},
        {"tournaments": [], "exportedAt": "yesterday"},
        {"tournaments": [], "exportedAt": 1700000000},
    ],
)
def test_malformed_transfer_is_rejected(payload):
    assert not validate_transfer_payload(payload)
    result = import_state(payload)
    assert not result.ok
    assert result.error
    assert result.state is None


def test_malformed_tournament_content_is_rejected():
    result = import_state({"tournaments": [{"id": "t1", "format": "CHESS"}]})
    assert not result.ok
    assert "Malformed" in result.error


def _exported_with_rating(rating):
    payload = export_state([_tournament()], {}, "t1")
    payload["tournaments"][0]["participants"][0]["rating"] = rating
    return json.loads(json.dumps(payload))


def test_imported_numeric_string_rating_is_coerced():
    result = import_state(_exported_with_rating("70"))
    assert result.ok
    tournament = result.state.tournaments[0]
    assert tournament.get_participant("a").rating == 70

    outcome = simulate_match_result(tournament, tournament.matches[0])
    assert outcome.played


def test_import_with_non_numeric_rating_is_rejected():
    result = import_state(_exported_with_rating("strong"))
    assert not result.ok
    assert "Rating must be a number" in result.error
    assert result.state is None


def test_import_with_reserved_bye_id_is_rejected():
    payload = export_state([_tournament()], {}, "t1")
    payload["tournaments"][0]["participants"][1]["id"] = "BYE"
    result = import_state(payload)
    assert not result.ok
    assert "reserved" in result.error


def test_state_file_with_bad_rating_loads_empty(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps(_exported_with_rating("strong")), encoding="utf-8")
    assert JsonStateStore(path).load_state().tournaments == []
