from matchday.controllers.tournament import (
    get_stage_manual_edit_context,
    is_group_round_edit_allowed,
    is_manual_round_edit_allowed,
    is_match_edit_allowed,
)
from matchday.models.enums import MatchStage, TournamentFormat, TournamentStatus
from matchday.models.tournament import Match, Side, Tournament


def _match(round_number, played, stage=MatchStage.KNOCKOUT, suffix=""):
    return Match(
        id=f"{round_number}-{'p' if played else 'u'}{suffix}",
        player_a=Side.of("a"),
        player_b=Side.of("b"),
        round=round_number,
        stage=stage,
        played=played,
        winner="a" if played else None,
    )


def test_previous_round_editable_until_current_round_starts():
    stage = [
        _match(1, True),
        _match(1, True, suffix="2"),
        _match(2, False),
        _match(2, False, suffix="2"),
    ]
    context = get_stage_manual_edit_context(stage)
    assert context.allowed_round == 2
    assert not context.current_round_started
    assert is_manual_round_edit_allowed(stage, 2)
    assert is_manual_round_edit_allowed(stage, 1)
    assert not is_manual_round_edit_allowed(stage, 0)


def test_previous_round_locked_once_current_round_started():
    stage = [
        _match(1, True),
        _match(1, True, suffix="2"),
        _match(2, True),
        _match(2, False),
    ]
    context = get_stage_manual_edit_context(stage)
    assert context.allowed_round == 2
    assert context.current_round_started
    assert is_manual_round_edit_allowed(stage, 2)
    assert not is_manual_round_edit_allowed(stage, 1)


def test_fully_played_stage_allows_latest_round():
    stage = [_match(1, True), _match(2, True), _match(3, True)]
    context = get_stage_manual_edit_context(stage)
    assert context.allowed_round == 3
    assert context.current_round_started
    assert is_manual_round_edit_allowed(stage, 3)
    assert not is_manual_round_edit_allowed(stage, 2)


def test_empty_stage_context():
    context = get_stage_manual_edit_context([])
    assert context.allowed_round == 0
    assert not context.current_round_started


def _group_stage():
    return [_match(r, True, stage=MatchStage.GROUP) for r in (1, 2, 3)]


def test_group_rounds_free_before_knockout_exists():
    assert is_group_round_edit_allowed(_group_stage(), [], 1)
    assert is_group_round_edit_allowed(_group_stage(), [], 3)


def test_last_group_round_editable_while_knockout_unstarted():
    knockout = [_match(4, False), _match(4, False, suffix="2")]
    assert is_group_round_edit_allowed(_group_stage(), knockout, 3)
    assert not is_group_round_edit_allowed(_group_stage(), knockout, 2)


def test_group_locked_once_knockout_started():
    knockout = [_match(4, True), _match(4, False, suffix="2")]
    assert not is_group_round_edit_allowed(_group_stage(), knockout, 3)


def _tournament(format_, matches):
    return Tournament(
        id="t1",
        name="Edit",
        format=format_,
        matches=tuple(matches),
        status=TournamentStatus.IN_PROGRESS,
    )


def test_league_results_always_editable():
    matches = [_match(r, True, stage=MatchStage.LEAGUE) for r in (1, 2, 3)]
    tournament = _tournament(TournamentFormat.LEAGUE, matches)
    assert all(is_match_edit_allowed(tournament, m) for m in matches)


def test_match_dispatch_uses_stage_rules():
    group = _group_stage()
    knockout = [_match(4, True), _match(4, False, suffix="2")]
    tournament = _tournament(TournamentFormat.GROUP_KO, group + knockout)
    assert not is_match_edit_allowed(tournament, group[-1])
    assert is_match_edit_allowed(tournament, knockout[1])
