from dataclasses import replace

from conftest import TEST_SEED, make_owned
from duel_engine import (
    CHALLENGERS_BY_ID, _round_options, choose_option, create_duel, decline_duel, gear_bonus,
    submit_timing, timing_scale, toggle_wager,
)
from game_models import PerformanceItem
from seeded_rng import stream_for


def duel_state(state, tag='duel'):
    return replace(state, pending_duel=create_duel(state, stream_for(TEST_SEED, tag)))


def play_out(state, accuracy=1.0):
    rounds = 0
    while state.pending_duel is not None:
        option = state.pending_duel.options[0]
        state = choose_option(state, option.id)
        state = submit_timing(state, accuracy)
        rounds += 1
    return state, rounds


def test_new_duel_starts_without_a_wager(state):
    duel = duel_state(state).pending_duel
    assert not duel.wager_accepted
    assert duel.round == 1
    assert duel.phase == 'pick'
    assert len(duel.options) == 3
    assert duel.challenger_id in CHALLENGERS_BY_ID


def test_wager_toggles_only_before_the_first_pick(state):
    state = duel_state(state)
    on = toggle_wager(state)
    assert on.pending_duel.wager_accepted
    off = toggle_wager(on)
    assert not off.pending_duel.wager_accepted

    picked = choose_option(on, on.pending_duel.options[0].id)
    assert toggle_wager(picked).pending_duel.wager_accepted


def test_unknown_option_is_rejected(state):
    state = duel_state(state)
    result = choose_option(state, 'kazoo_solo')
    assert result.pending_duel.phase == 'pick'


def test_timing_needs_a_pick_first(state):
    state = duel_state(state)
    assert submit_timing(state, 0.5).pending_duel == state.pending_duel


def test_duel_runs_its_rounds_then_settles(state):
    state = duel_state(state)
    challenger = CHALLENGERS_BY_ID[state.pending_duel.challenger_id]
    result, rounds = play_out(state)
    assert rounds == challenger['total_rounds']
    assert result.pending_duel is None


def test_lost_wager_never_overdraws(state):
    state = toggle_wager(duel_state(replace(state, reputation=0)))
    result, _ = play_out(state, accuracy=0.0)
    assert result.cash >= 0


def test_boost_is_consumed(state):
    boost = PerformanceItem(id='lucky_pick', name='Lucky Pick', description='', price=40, player_bonus=4)
    state = replace(duel_state(state), performance_items=(boost,))
    option = state.pending_duel.options[0]

    picked = choose_option(state, option.id, 'lucky_pick')
    assert picked.pending_duel.selected_boost_id == 'lucky_pick'
    scored = submit_timing(picked, 0.8)
    assert scored.performance_items == ()


def test_boost_must_be_owned(state):
    state = duel_state(state)
    result = choose_option(state, state.pending_duel.options[0].id, 'stage_fog')
    assert result.pending_duel.phase == 'pick'


def test_signature_move_appears_from_round_two():
    challenger = CHALLENGERS_BY_ID['session_ace']
    first = _round_options(stream_for('seed', 'a'), challenger, 1)
    later = _round_options(stream_for('seed', 'b'), challenger, 2)
    assert challenger['signature']['id'] not in [o.id for o in first]
    assert challenger['signature']['id'] in [o.id for o in later]
    assert len(later) == 3


def test_decline_only_in_round_one(state):
    state = duel_state(state)
    declined = decline_duel(state)
    assert declined.pending_duel is None
    assert declined.reputation == state.reputation - 1

    late = replace(state, pending_duel=replace(state.pending_duel, round=2))
    assert decline_duel(late).pending_duel is not None


def test_gear_bonus_and_timing_scale(state):
    assert gear_bonus(state) == 0
    rig = (make_owned(id='g', category='Guitar'), make_owned(id='a', category='Amp'))
    assert gear_bonus(replace(state, inventory=rig)) == 10
    assert timing_scale(1, 1) == 12
    assert timing_scale(3, 3) == 24


def test_non_finite_accuracy_scores_as_a_miss(state):
    state = duel_state(state)
    missed, _ = play_out(state, accuracy=0.0)
    for bad in (float('nan'), float('inf')):
        result, _ = play_out(state, accuracy=bad)
        assert result.cash == missed.cash
        assert result.reputation == missed.reputation
        assert [m.text for m in result.messages] == [m.text for m in missed.messages]
