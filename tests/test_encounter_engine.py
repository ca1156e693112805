from dataclasses import replace

import encounter_engine
from conftest import TEST_SEED, make_owned
from encounter_engine import (
    accept_bulk_lot, accept_repair_comp, accept_trade, bid_increment, build_bulk_lot,
    build_mysterious_listing, build_trade_offer, build_world_auction, buy_mystery_listing,
    decline_bulk_lot, decline_trade, encounter_intro, pass_world_auction, refuse_repair_comp,
    resolve_world_auction,
)
from game_models import RepairScareEncounter
from seeded_rng import stream_for


def rng(tag='test'):
    return stream_for(TEST_SEED, tag)


def full_bag():
    return tuple(make_owned(id=f'pedal-{n}') for n in range(10))


# --- World auction ---

def test_zero_bid_is_no_bid(state):
    auction = build_world_auction(state)
    state = replace(state, pending_encounter=auction)
    result, resolution = resolve_world_auction(state, 0)

    assert resolution.outcome == 'no_bid'
    assert resolution.final_price == auction.starting_bid
    assert result.cash == state.cash
    assert result.inventory == ()
    assert result.pending_encounter is None
    assert result.last_auction == resolution


def test_missing_bid_counts_as_zero(state):
    state = replace(state, pending_encounter=build_world_auction(state))
    _, resolution = resolve_world_auction(state)
    assert resolution.outcome == 'no_bid'


def test_low_reputation_is_blocked(state):
    state = replace(state, reputation=40, pending_encounter=build_world_auction(state))
    result, resolution = resolve_world_auction(state, 5000)
    assert resolution.outcome == 'blocked'
    assert resolution.final_price == 0
    assert result.cash == state.cash


def test_huge_bid_wins_at_rival_plus_increment(state):
    auction = build_world_auction(state)
    state = replace(state, cash=1_000_000, pending_encounter=auction)
    result, resolution = resolve_world_auction(state, 1_000_000)

    assert resolution.outcome == 'won'
    increment = bid_increment(auction.item.base_price)
    assert resolution.final_price == max(auction.starting_bid, resolution.opponent_max + increment)
    assert resolution.total_cost == resolution.final_price + resolution.premium
    assert result.cash == 1_000_000 - resolution.total_cost
    assert result.find_item(auction.item.id).purchase_price == resolution.total_cost


def test_tie_goes_to_rival_at_rivals_price(state, monkeypatch):
    auction = build_world_auction(state)
    rival = auction.starting_bid + 50
    monkeypatch.setattr(encounter_engine, 'opponent_max_bid', lambda s, base: rival)
    state = replace(state, cash=1_000_000, pending_encounter=auction)
    result, resolution = resolve_world_auction(state, rival)

    assert resolution.outcome == 'outbid'
    assert resolution.final_price == rival
    assert result.cash == state.cash


def test_tiny_bid_never_moves_cash(state):
    state = replace(state, pending_encounter=build_world_auction(state))
    result, resolution = resolve_world_auction(state, 1)
    assert resolution.outcome in ('passed', 'outbid')
    assert result.cash == state.cash
    assert result.inventory == ()


def test_win_without_room_is_voided(state):
    auction = build_world_auction(state)
    state = replace(state, cash=1_000_000, inventory=full_bag(), pending_encounter=auction)
    result, resolution = resolve_world_auction(state, 1_000_000)
    assert resolution.outcome == 'no_space'
    assert result.cash == state.cash
    assert result.inventory == state.inventory


def test_bid_increments():
    assert bid_increment(400) == 25
    assert bid_increment(900) == 50
    assert bid_increment(2200) == 100
    assert bid_increment(4200) == 250
    assert bid_increment(9000) == 500


def test_pass_world_auction(state):
    state = replace(state, pending_encounter=build_world_auction(state))
    assert pass_world_auction(state).pending_encounter is None


def test_resolving_without_an_auction(state):
    result, resolution = resolve_world_auction(state, 100)
    assert resolution is None
    assert result.messages[-1].text == "That lead has gone cold."


# --- Bulk lot ---

def test_bulk_lot_shape(state):
    lot = build_bulk_lot(state, rng())
    assert 3 <= len(lot.items) <= 4
    assert len(lot.vague_items) == len(lot.items)
    assert all(item.rarity != 'legendary' for item in lot.items)
    assert 0.25 <= lot.project_chance <= 0.45


def test_bulk_lot_accept(state):
    lot = build_bulk_lot(state, rng())
    state = replace(state, cash=10_000, bag_tier=2, pending_encounter=lot)
    result = accept_bulk_lot(state)

    assert result.pending_encounter is None
    assert len(result.inventory) == len(lot.items)
    assert result.cash == 10_000 - lot.total_cost
    assert sum(item.purchase_price for item in result.inventory) == lot.total_cost


def test_bulk_lot_without_room_closes(state):
    lot = build_bulk_lot(state, rng())
    state = replace(state, inventory=full_bag(), pending_encounter=lot)
    result = accept_bulk_lot(state)
    assert result.pending_encounter is None
    assert result.inventory == state.inventory
    assert result.cash == state.cash


def test_bulk_lot_without_cash_stays_open(state):
    lot = build_bulk_lot(state, rng())
    state = replace(state, cash=0, bag_tier=2, pending_encounter=lot)
    result = accept_bulk_lot(state)
    assert result.pending_encounter == lot
    assert result.inventory == ()


def test_bulk_lot_decline(state):
    state = replace(state, pending_encounter=build_bulk_lot(state, rng()))
    assert decline_bulk_lot(state).pending_encounter is None


# --- Trade offer ---

def test_trade_swaps_and_keeps_cost_basis(state):
    mine = make_owned(id='mine', name='MIM Stratocaster', category='Guitar', base_price=420,
                      slots=2, purchase_price=380)
    state = replace(state, inventory=(mine,))
    offer = build_trade_offer(state, rng())
    assert offer.requested_item_id == 'mine'
    assert 0.6 * 420 <= offer.offered_item.base_price <= 1.6 * 420

    result = accept_trade(replace(state, pending_encounter=offer))
    assert result.find_item('mine') is None
    incoming = result.find_item(offer.offered_item.id)
    assert incoming.purchase_price == 380
    assert result.cash == state.cash
    assert result.reputation == state.reputation + 1
    assert result.pending_encounter is None


def test_trade_declines_cost_reputation_after_two(state):
    mine = make_owned(id='mine')
    state = replace(state, inventory=(mine,))
    offer = build_trade_offer(state, rng())

    for expected_rep in (50, 50, 49, 48):
        state = decline_trade(replace(state, pending_encounter=offer))
        assert state.reputation == expected_rep
        assert state.pending_encounter is None
    assert state.trade_declines == 4


# --- Mysterious listing ---

def test_mystery_listing_without_cash_stays_open(state):
    listing = build_mysterious_listing(state, rng())
    state = replace(state, cash=0, pending_encounter=listing)
    result = buy_mystery_listing(state)
    assert result.pending_encounter == listing


def test_mystery_listing_buy_resolves(state):
    listing = build_mysterious_listing(state, rng())
    state = replace(state, cash=100_000, pending_encounter=listing)
    result = buy_mystery_listing(state)

    assert result.pending_encounter is None
    assert result.cash == state.cash - listing.item.price_today
    owned = result.find_item(listing.item.id)
    if owned is None:
        assert result.reputation == state.reputation - 4
    else:
        assert owned.same_day_sell_ok
        assert owned.heat_value >= 20


def test_mystery_scam_risk_is_capped(state):
    for n in range(20):
        listing = build_mysterious_listing(state, rng(f'mystery-{n}'))
        assert listing.scam_risk <= 0.9


# --- Repair scare ---

def scare_state(state):
    item = make_owned(id='flawed', name='Flawed Pedal')
    scare = RepairScareEncounter(item_id='flawed', item_name='Flawed Pedal', full_price=200, discount_price=170)
    return replace(state, day=2, inventory=(item,), pending_encounter=scare)


def test_repair_comp_accept(state):
    state = scare_state(state)
    result = accept_repair_comp(state)
    assert result.inventory == ()
    assert result.cash == state.cash + 170
    assert result.reputation == state.reputation + 1
    assert result.pending_encounter is None


def test_repair_comp_refuse(state):
    state = scare_state(state)
    result = refuse_repair_comp(state)
    assert result.find_item('flawed').sale_cooldown_day == 3
    assert result.reputation == state.reputation - 1
    assert result.pending_encounter is None


def test_every_encounter_has_an_intro(state):
    mine = make_owned(id='mine')
    state = replace(state, inventory=(mine,))
    for encounter in (
        build_bulk_lot(state, rng()),
        build_trade_offer(state, rng()),
        build_mysterious_listing(state, rng()),
        build_world_auction(state),
        scare_state(state).pending_encounter,
    ):
        assert encounter_intro(encounter).text
