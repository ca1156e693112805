from dataclasses import replace

from conftest import make_owned
from market_engine import sell_price
from scoring import (
    calculate_score, inventory_value, is_eligible, leaderboard_payload, record_sale, run_summary,
    share_text,
)


def test_score_is_cash_plus_inventory_plus_reputation(state):
    item = make_owned(base_price=200)
    loaded = replace(state, cash=1000, reputation=60, inventory=(item,))
    expected = 1000 + sell_price(item, loaded.market, 60) + 60 * 50
    assert calculate_score(loaded) == expected
    assert inventory_value(loaded) == sell_price(item, loaded.market, 60)


def test_best_flip_only_moves_up(state):
    big = make_owned(id='big', name='Big Flip', purchase_price=100)
    small = make_owned(id='small', name='Small Flip', purchase_price=100)
    loss = make_owned(id='loss', name='Loss', purchase_price=1000)
    state = replace(state, inventory=(big, small, loss))

    state = record_sale(state, big, 600)
    assert state.best_flip.name == 'Big Flip' and state.best_flip.profit == 500

    state = record_sale(state, small, 300)
    assert state.best_flip.name == 'Big Flip'

    state = record_sale(state, loss, 10)
    assert state.best_flip.profit == 500
    assert state.inventory == ()


def test_losing_sale_never_sets_best_flip(state):
    loss = make_owned(purchase_price=1000)
    sold = record_sale(replace(state, inventory=(loss,)), loss, 100)
    assert sold.best_flip is None
    assert sold.cash == state.cash + 100


def test_rarest_sold_needs_strictly_higher_rank(state):
    rare = make_owned(id='rare', name='Rare One', rarity='rare')
    other_rare = make_owned(id='rare2', name='Other Rare', rarity='rare')
    common = make_owned(id='common', name='Common One', rarity='common')
    state = replace(state, inventory=(rare, other_rare, common))

    state = record_sale(state, rare, 100)
    state = record_sale(state, other_rare, 100)
    state = record_sale(state, common, 100)
    assert state.rarest_sold.name == 'Rare One'


def test_recent_flip_days_are_capped(state):
    items = tuple(make_owned(id=f'i{n}') for n in range(8))
    state = replace(state, inventory=items)
    for item in items:
        state = record_sale(state, item, 60)
    assert len(state.recent_flip_days) == 6


def test_leaderboard_payload_defaults(state):
    payload = leaderboard_payload(state, display_name='   ')
    assert payload['displayName'] == 'Anonymous'
    assert payload['totalDays'] == 21
    assert payload['completed'] is False
    assert 'email' not in payload

    long_name = leaderboard_payload(state, display_name='x' * 50, email='a@b.co', email_opt_in=True)
    assert len(long_name['displayName']) == 32
    assert long_name['emailOptIn'] is True


def test_only_completed_standard_runs_are_eligible(state):
    finished = replace(state, day=21, is_game_over=True)
    assert is_eligible(leaderboard_payload(finished))
    assert not is_eligible(leaderboard_payload(replace(finished, is_game_over=False)))
    assert not is_eligible(leaderboard_payload(replace(finished, total_days=30, day=30)))


def test_summary_and_share_text(state):
    summary = run_summary(state)
    assert summary['score'] == calculate_score(state)
    assert summary['best_flip'] is None
    assert state.run_seed in share_text(state)
