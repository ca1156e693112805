from dataclasses import replace

import pytest

from conftest import make_listing, make_owned
from game_models import RepairScareEncounter, Tools
from market_engine import auth_cost, insurance_cost, luthier_cost, sell_price
from player_actions import (
    ask_for_proof, authenticate_item, buy_item, buy_performance_item, buy_tool,
    list_for_auction, send_to_luthier, sell_item, upgrade_bag,
)

SAFE_LISTING = make_listing(id='strat', scam_risk=0.0)


def full_bag():
    return tuple(make_owned(id=f'pedal-{n}') for n in range(10))


# --- Buying ---

def test_buy_safe_listing(state):
    state = replace(state, market=(SAFE_LISTING,))
    result = buy_item(state, 'strat')

    owned = result.find_item('strat')
    assert owned is not None
    assert owned.purchase_price == 420
    assert owned.acquired_day == 1
    assert owned.heat_value == 4
    assert result.cash == state.cash - 420
    assert result.find_listing('strat') is None


def test_buy_heat_ignores_location_risk(state):
    listing = make_listing(id='warm', scam_risk=0.0, hot_risk=0.30)
    state = replace(state, location='The Underground', market=(listing,))
    assert buy_item(state, 'warm').find_item('warm').heat_value == 30


def test_buy_blocked_when_bag_is_full(state):
    state = replace(state, market=(SAFE_LISTING,), inventory=full_bag())
    result = buy_item(state, 'strat')
    assert result.inventory == state.inventory
    assert result.cash == state.cash
    assert result.find_listing('strat') is not None
    assert result.messages[-1].text.startswith("No inventory space")


def test_buy_blocked_without_cash(state):
    state = replace(state, market=(SAFE_LISTING,), cash=100)
    result = buy_item(state, 'strat')
    assert result.cash == 100
    assert result.inventory == ()


def test_insurance_needs_the_plan(state):
    state = replace(state, market=(SAFE_LISTING,))
    refused = buy_item(state, 'strat', insure=True)
    assert refused.inventory == ()

    covered = buy_item(replace(state, tools=Tools(insurance_plan=True)), 'strat', insure=True)
    owned = covered.find_item('strat')
    assert owned.insured
    assert owned.insurance_paid == insurance_cost(420)
    assert covered.cash == state.cash - 420 - insurance_cost(420)


def test_risky_buy_either_lands_or_scams(state):
    sketchy = make_listing(id='sketchy', scam_risk=0.6)
    state = replace(state, market=(sketchy,))
    result = buy_item(state, 'sketchy')

    assert result.find_listing('sketchy') is None
    if result.find_item('sketchy') is None:
        assert result.reputation == state.reputation - 6
        assert result.cash == state.cash - 420
    else:
        assert result.cash == state.cash - 420


def test_ask_for_proof_marks_or_pulls_listing(state):
    state = replace(state, market=(make_listing(id='maybe', scam_risk=0.3),))
    result = ask_for_proof(state, 'maybe')
    assert result.find_listing('maybe') is None or 'maybe' in result.inspected_market_ids

    again = ask_for_proof(result, 'maybe')
    assert again.inspected_market_ids == result.inspected_market_ids


def test_bought_after_proof_is_marked_inspected(state):
    state = replace(state, market=(SAFE_LISTING,), inspected_market_ids=('strat',))
    result = buy_item(state, 'strat')
    assert result.find_item('strat').inspected
    assert result.inspected_market_ids == ()


# --- Selling ---

def test_cannot_sell_on_the_day_bought(state):
    item = make_owned(acquired_day=1)
    result = sell_item(replace(state, inventory=(item,)), item.id, allow_scare=False)
    assert result.find_item(item.id) is not None


def test_same_day_sell_flag(state):
    item = make_owned(acquired_day=1, same_day_sell_ok=True)
    state = replace(state, inventory=(item,))
    result = sell_item(state, item.id, allow_scare=False)
    assert result.inventory == ()
    assert result.cash == state.cash + sell_price(item, state.market, state.reputation)


def test_sell_next_day(state):
    item = make_owned(acquired_day=1)
    state = replace(state, day=2, inventory=(item,))
    result = sell_item(state, item.id, allow_scare=False)
    assert result.inventory == ()
    assert result.recent_flip_days == (2,)


def test_sale_cooldown(state):
    item = make_owned(acquired_day=1, sale_cooldown_day=3)
    state = replace(state, day=2, inventory=(item,))
    assert sell_item(state, item.id, allow_scare=False).find_item(item.id) is not None
    assert sell_item(replace(state, day=3), item.id, allow_scare=False).inventory == ()


def test_manual_sale_may_raise_repair_scare(state):
    item = make_owned(acquired_day=1)
    state = replace(state, day=2, inventory=(item,))
    result = sell_item(state, item.id)
    if result.pending_encounter is not None:
        assert result.pending_encounter.kind == 'repair_scare'
        assert result.find_item(item.id) is not None
        assert result.cash == state.cash
    else:
        assert result.inventory == ()


def test_sale_blocked_while_repair_scare_pending(state):
    scared = make_owned(id='scared', acquired_day=1)
    other = make_owned(id='other', acquired_day=1)
    scare = RepairScareEncounter(item_id='scared', item_name=scared.name, full_price=74, discount_price=52)
    state = replace(state, day=2, inventory=(scared, other), pending_encounter=scare)

    for item_id in ('scared', 'other'):
        result = sell_item(state, item_id)
        assert result.inventory == state.inventory
        assert result.cash == state.cash
        assert result.pending_encounter == scare

    assert sell_item(state, 'scared').messages[-1].text.startswith("The buyer is still waiting")


@pytest.mark.parametrize('busy', [
    dict(auth_status='pending', auth_ready_day=3),
    dict(luthier_status='pending', luthier_ready_day=3, luthier_target_condition='Player'),
    dict(auction_status='listed', auction_resolve_day=3),
])
def test_busy_item_is_locked_out_of_everything(state, busy):
    item = make_owned(acquired_day=1, condition='Project', **busy)
    state = replace(state, day=2, inventory=(item,), tools=Tools(luthier_bench=True))

    for action in (
        lambda s: sell_item(s, item.id, allow_scare=False),
        lambda s: authenticate_item(s, item.id),
        lambda s: send_to_luthier(s, item.id),
        lambda s: list_for_auction(s, item.id),
    ):
        result = action(state)
        assert result.inventory == state.inventory
        assert result.cash == state.cash


# --- Services ---

def test_authenticate_locks_in_outcome(state):
    item = make_owned(base_price=900)
    state = replace(state, day=2, inventory=(item,))
    result = authenticate_item(state, item.id)

    pending = result.find_item(item.id)
    assert pending.auth_status == 'pending'
    assert pending.auth_outcome in ('success', 'partial', 'fail')
    assert pending.auth_ready_day in (3, 4)
    assert result.cash == state.cash - auth_cost(item)

    assert authenticate_item(result, item.id).cash == result.cash


def test_luthier_needs_bench(state):
    item = make_owned(condition='Project')
    result = send_to_luthier(replace(state, inventory=(item,)), item.id)
    assert result.find_item(item.id).luthier_status == 'none'


def test_luthier_upgrades_one_step_by_default(state):
    item = make_owned(condition='Project', base_price=1000)
    state = replace(state, inventory=(item,), tools=Tools(luthier_bench=True))
    result = send_to_luthier(state, item.id)

    job = result.find_item(item.id)
    assert job.luthier_status == 'pending'
    assert job.luthier_target_condition == 'Player'
    assert job.luthier_ready_day == state.day + 1
    assert result.cash == state.cash - luthier_cost(item, 'Player')


def test_luthier_can_go_straight_to_mint(state):
    item = make_owned(condition='Project')
    state = replace(state, inventory=(item,), tools=Tools(luthier_bench=True))
    job = send_to_luthier(state, item.id, 'Mint').find_item(item.id)
    assert job.luthier_target_condition == 'Mint'
    assert job.luthier_ready_day == state.day + 2


def test_luthier_refuses_downgrades(state):
    item = make_owned(condition='Mint')
    state = replace(state, inventory=(item,), tools=Tools(luthier_bench=True))
    assert send_to_luthier(state, item.id).cash == state.cash
    assert send_to_luthier(state, item.id, 'Player').find_item(item.id).luthier_status == 'none'


def test_list_for_auction(state):
    item = make_owned(acquired_day=1)
    state = replace(state, day=2, inventory=(item,))
    listed = list_for_auction(state, item.id).find_item(item.id)
    assert listed.auction_status == 'listed'
    assert listed.auction_resolve_day == 3
    assert listed.auction_baseline == sell_price(item, state.market, state.reputation)


# --- Shop ---

def test_buy_tool_once(state):
    bought = buy_tool(state, 'serial_scanner')
    assert bought.tools.serial_scanner
    assert bought.cash == state.cash - 350
    assert buy_tool(bought, 'serial_scanner').cash == bought.cash
    assert buy_tool(state, 'jetpack').cash == state.cash


def test_bag_upgrades_raise_capacity(state):
    state = replace(state, cash=5000)
    first = upgrade_bag(state)
    assert first.inventory_capacity == 14
    second = upgrade_bag(first)
    assert second.inventory_capacity == 18
    assert upgrade_bag(second).cash == second.cash


def test_performance_item_leaves_the_shop(state):
    offer = state.performance_market[0]
    result = buy_performance_item(replace(state, cash=5000), offer.id)
    assert offer in result.performance_items
    assert all(p.id != offer.id for p in result.performance_market)
