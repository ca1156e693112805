from datetime import datetime, timezone

import pytest

from game_engine import (
    GameEngine, InvalidScorePayload, UnknownAction, clamp_limit, start_of_utc_week,
    validate_score_payload,
)
from setup_sqlite import create_database


def score_body(**overrides):
    body = {
        'displayName': 'Shredder',
        'score': 12000,
        'runSeed': 'abc',
        'day': 21,
        'totalDays': 21,
        'completed': True,
        'cash': 9000,
        'reputation': 60,
    }
    body.update(overrides)
    return body


@pytest.fixture
def engine(tmp_path):
    db_path = tmp_path / 'fretwars.db'
    assert create_database(db_path, quiet=True)
    return GameEngine(db_path)


def test_new_run_is_saved(engine):
    state = engine.new_run('slot', run_seed='seed-1')
    assert engine.load_game('slot') == state
    assert engine.load_game('missing') is None


def test_perform_applies_and_saves(engine):
    engine.new_run('slot', run_seed='seed-1')
    state = engine.perform('slot', 'end_day')
    assert state.day == 2
    assert engine.load_game('slot') == state


def test_perform_creates_a_run_when_needed(engine):
    state = engine.perform('fresh', 'tool', tool='price_guide')
    assert state.tools.price_guide
    assert engine.load_game('fresh').tools.price_guide


def test_unknown_action(engine):
    with pytest.raises(UnknownAction):
        engine.perform('slot', 'teleport')


def test_world_auction_bid_through_engine(engine):
    engine.new_run('slot', run_seed='seed-1')
    state = engine.perform('slot', 'auction_bid', max_bid=500)
    assert state.messages[-1].text == "That lead has gone cold."


def test_list_saves(engine):
    engine.new_run('one')
    engine.new_run('two')
    assert {row['save_key'] for row in engine.list_saves()} == {'one', 'two'}


def test_submit_score_computes_eligibility(engine):
    assert engine.submit_score(score_body())['eligible'] is True
    assert engine.submit_score(score_body(totalDays=30, day=30))['eligible'] is False
    assert engine.submit_score(score_body(completed=False))['eligible'] is False


def test_invalid_scores_are_rejected(engine):
    with pytest.raises(InvalidScorePayload) as err:
        engine.submit_score(score_body(score=-5, day='x'))
    assert len(err.value.issues) == 2

    with pytest.raises(InvalidScorePayload):
        engine.submit_score('not json')
    with pytest.raises(InvalidScorePayload):
        engine.submit_score(score_body(displayName='x' * 40))
    with pytest.raises(InvalidScorePayload):
        engine.submit_score(score_body(email='nope'))


def test_display_name_defaults_to_anonymous():
    assert validate_score_payload(score_body(displayName='  '))['displayName'] == 'Anonymous'
    assert validate_score_payload(score_body(displayName=None))['displayName'] == 'Anonymous'


def test_leaderboard_ranks_eligible_scores_only(engine):
    engine.submit_score(score_body(displayName='low', score=100))
    engine.submit_score(score_body(displayName='high', score=900))
    engine.submit_score(score_body(displayName='casual', score=5000, completed=False))

    rows = engine.get_leaderboard('all-time')['rows']
    assert [row['display_name'] for row in rows] == ['high', 'low']
    assert 'email' not in rows[0]


def test_email_only_stored_with_opt_in(engine):
    engine.submit_score(score_body(displayName='quiet', email='a@b.co', emailOptIn=False))
    engine.submit_score(score_body(displayName='loud', email='c@d.co', emailOptIn=True))
    with engine.get_db() as conn:
        stored = {row['display_name']: row['email'] for row in conn.execute("SELECT display_name, email FROM scores")}
    assert stored == {'quiet': None, 'loud': 'c@d.co'}


def test_weekly_leaderboard_skips_old_scores(engine):
    engine.submit_score(score_body(displayName='this week', score=100))
    with engine.get_db() as conn:
        conn.execute("""
            INSERT INTO scores (created_at, display_name, score, day, total_days, completed, eligible)
            VALUES ('2000-01-03T10:00:00.000Z', 'ancient', 99999, 21, 21, 1, 1)
        """)

    all_time = [row['display_name'] for row in engine.get_leaderboard('all-time')['rows']]
    weekly = engine.get_leaderboard('weekly')
    assert all_time == ['ancient', 'this week']
    assert [row['display_name'] for row in weekly['rows']] == ['this week']
    assert weekly['since'].endswith('T00:00:00.000Z')


def test_leaderboard_limit(engine):
    for n in range(5):
        engine.submit_score(score_body(score=n))
    assert len(engine.get_leaderboard('all-time', limit=2)['rows']) == 2
    assert clamp_limit(None) == 50
    assert clamp_limit('abc') == 50
    assert clamp_limit(500) == 200
    assert clamp_limit(-3) == 1


def test_start_of_utc_week_is_monday_midnight():
    thursday = datetime(2026, 10, 22, 15, 30, tzinfo=timezone.utc)
    assert start_of_utc_week(thursday) == datetime(2026, 10, 19, tzinfo=timezone.utc)
