import json
from dataclasses import replace

from catalog_data import START_LOCATION
from conftest import TEST_SEED, make_owned
from credit_engine import draw_loan
from day_cycle import end_day, new_game
from duel_engine import create_duel
from encounter_engine import build_bulk_lot, build_mysterious_listing, build_trade_offer, build_world_auction
from market_engine import generate_market
from player_actions import buy_tool
from seeded_rng import stream_for
from state_codec import from_record, snake_keys, to_record


def through_json(state):
    return from_record(json.loads(json.dumps(to_record(state))))


def test_round_trip_after_some_play():
    state = new_game('codec-seed')
    state = draw_loan(state, 1000)
    state = buy_tool(state, 'price_guide')
    state = replace(state, inventory=(make_owned(id='a'), make_owned(id='b', auth_status='pending', auth_ready_day=4)))
    for _ in range(4):
        state = end_day(state)
    assert through_json(state) == state


def test_round_trip_with_pending_duel(state):
    state = replace(state, pending_duel=create_duel(state, stream_for(TEST_SEED, 'duel')))
    assert through_json(state) == state


def test_round_trip_with_each_encounter(state):
    state = replace(state, inventory=(make_owned(id='mine'),))
    rng = stream_for(TEST_SEED, 'codec')
    for encounter in (
        build_bulk_lot(state, rng),
        build_trade_offer(state, rng),
        build_mysterious_listing(state, rng),
        build_world_auction(state),
    ):
        with_lead = replace(state, pending_encounter=encounter)
        assert through_json(with_lead) == with_lead


def test_snake_keys():
    assert snake_keys({'runSeed': 1, 'bestFlip': {'profitMargin': 2}}) == {'run_seed': 1, 'best_flip': {'profit_margin': 2}}


def test_partial_record_merges_onto_fresh_run():
    state = from_record({'runSeed': 'abc', 'cash': 999, 'somethingElse': True})
    assert state.run_seed == 'abc'
    assert state.cash == 999
    assert state.day == 1
    assert state.reputation == 50
    assert state.market == generate_market(1, START_LOCATION, 'abc')


def test_legacy_capacity_maps_to_bag_tier():
    assert from_record({'runSeed': 'abc', 'inventoryCapacity': 14}).bag_tier == 1
    assert from_record({'runSeed': 'abc', 'inventoryCapacity': 11}).bag_tier == 0


def test_malformed_market_is_regenerated():
    state = from_record({'run_seed': 'abc', 'day': 3, 'location': 'Vintage Alley', 'market': [{'id': 'x'}]})
    assert state.market == generate_market(3, 'Vintage Alley', 'abc')


def test_malformed_leads_are_dropped():
    assert from_record({'run_seed': 'abc', 'pending_encounter': {'kind': 'bulk_lot', 'items': []}}).pending_encounter is None
    assert from_record({'run_seed': 'abc', 'pending_encounter': {'kind': 'alien_invasion'}}).pending_encounter is None
    assert from_record({'run_seed': 'abc', 'pending_duel': {'challenger_id': 'busker'}}).pending_duel is None


def test_camel_case_encounter_kind(state):
    lot = build_bulk_lot(state, stream_for(TEST_SEED, 'camel'))
    raw = to_record(replace(state, pending_encounter=lot))
    raw['pending_encounter']['kind'] = 'bulkLot'
    assert from_record(json.loads(json.dumps(raw))).pending_encounter == lot


def test_sparse_inventory_item_is_filled_in():
    raw = {
        'run_seed': 'abc',
        'inventory': [
            {'id': 'a', 'name': 'Boss SD-1', 'category': 'Pedal', 'basePrice': 70, 'priceToday': 60,
             'rarity': 'common', 'condition': 'Player', 'slots': 9},
            {'id': 'broken'},
        ],
    }
    state = from_record(raw)
    assert len(state.inventory) == 1
    item = state.inventory[0]
    assert item.slots == 1
    assert item.purchase_price == 60
    assert item.heat_value == 0
    assert item.auth_multiplier == 1.0


def test_out_of_range_values_are_clamped():
    state = from_record({'run_seed': 'abc', 'reputation': 500, 'cash': -10, 'bag_tier': 9})
    assert state.reputation == 100
    assert state.cash == 0
    assert state.bag_tier == 0


def test_garbage_starts_a_new_run():
    assert from_record(['not', 'a', 'save']).day == 1
