from matchday.models.enums import MatchStage, TournamentFormat, TournamentStatus
from matchday.models.tournament import (
    Match,
    Participant,
    Side,
    Standing,
    Tournament,
    TournamentSettings,
)


def test_bye_is_a_distinct_side():
    assert Side.bye().is_bye
    assert not Side.of("BYE-player").is_bye
    assert Side.from_wire("BYE") == Side.bye()
    assert Side.of("p1").to_wire() == "p1"
    assert str(Side.bye()) == "BYE"


def test_match_helpers():
    match = Match(
        "m1", Side.of("a"), Side.of("b"), 1, MatchStage.LEAGUE, played=True, winner="b"
    )
    assert match.participant_ids == ["a", "b"]
    assert match.involves("a")
    assert match.opponent_of("a") == Side.of("b")
    assert match.loser() == "a"
    assert not match.is_draw
    assert not match.has_bye


def test_draw_and_bye_matches_have_no_loser():
    draw = Match("m1", Side.of("a"), Side.of("b"), 1, MatchStage.SWISS, played=True)
    assert draw.is_draw
    assert draw.loser() is None
    bye = Match(
        "m2", Side.of("a"), Side.bye(), 1, MatchStage.SWISS, played=True, winner="a"
    )
    assert bye.has_bye
    assert bye.participant_ids == ["a"]
    assert bye.loser() is None


def test_match_dict_omits_empty_optionals():
    data = Match("m1", Side.of("a"), Side.bye(), 3, MatchStage.KNOCKOUT).to_dict()
    assert data == {
        "id": "m1",
        "playerA": "a",
        "playerB": "BYE",
        "played": False,
        "round": 3,
        "stage": "KNOCKOUT",
    }


def test_settings_defaults_fill_missing_keys():
    settings = TournamentSettings.from_dict({"randomSeed": "12", "allowDraws": True})
    assert settings.random_seed == 12
    assert settings.allow_draws
    assert settings.rounds == 5
    assert settings.group_count == 2
    assert settings.advance_per_group == 2
    assert "randomSeed" not in TournamentSettings().to_dict()


def test_tournament_lookups_and_round_trip():
    tournament = Tournament(
        id="t1",
        name="Derby",
        format=TournamentFormat.LEAGUE,
        participants=(Participant("a", "Ada"), Participant("b", "Bob", 64)),
        matches=(Match("m1", Side.of("a"), Side.of("b"), 1, MatchStage.LEAGUE),),
        status=TournamentStatus.IN_PROGRESS,
        standings={"a": Standing(), "b": Standing(played=1)},
    )
    assert tournament.get_participant("b").rating == 64
    assert tournament.get_participant("x") is None
    assert tournament.get_match("m1").round == 1
    assert tournament.has_unplayed
    assert Tournament.from_dict(tournament.to_dict()) == tournament


def test_blank_name_falls_back_on_load():
    data = {"id": "t9", "name": "", "format": "SWISS"}
    tournament = Tournament.from_dict(data)
    assert tournament.name == "Untitled Tournament"
    assert tournament.status == TournamentStatus.NOT_STARTED
    assert tournament.matches == ()


def test_participant_name_key():
    assert Participant("p1", "  Ada Lovelace ").name_key == "ada lovelace"


def test_explicit_zero_settings_round_trip():
    settings = TournamentSettings(rounds=0, advance_per_group=0)
    assert TournamentSettings.from_dict(settings.to_dict()) == settings


def test_participant_rating_is_coerced_on_load():
    participant = Participant.from_dict({"id": "a", "name": "Ada", "rating": "72.5"})
    assert participant.rating == 72.5
    assert Participant.from_dict({"id": "b", "name": "Bob"}).rating == 50
