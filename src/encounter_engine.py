"""
Fret Wars - Encounter Engine

At most one special lead is pending at a time. Each kind has one accept path
and one decline path, and both clear `pending_encounter` (except where a
block leaves the offer open, noted per function).

Encounter kinds:
- Bulk lot: a vague storage-unit lot, some pieces turn out to be projects
- Trade offer: swap one owned piece for a fresh one
- Mysterious listing: too cheap to be true, maybe it isn't
- World auction: a legendary piece, one sealed max bid against one rival
- Repair scare: raised from the sell flow, a buyer finds a flaw
"""

from dataclasses import replace
from typing import Optional, Tuple

from catalog_data import (
    BID_INCREMENTS, BULK_LOT_ENTRY_RATE, BULK_LOT_PRICE_RANGE, BULK_LOT_PROJECT_CHANCE,
    BULK_LOT_SHARE, BULK_LOT_SIZE, BULK_VAGUE_LABELS, CATALOG, CONDITION_MULTIPLIER,
    ENCOUNTER_CHANCE, MAX_BID_INCREMENT, MYSTERY_HEAT_BUMP, MYSTERY_PRICE_RANGE,
    MYSTERY_PROOF_RELIEF, MYSTERY_SCAM_BUMP, MYSTERY_SCAM_CAP, MYSTERY_SCAM_FLOOR,
    MYSTERY_SCAM_REP_LOSS, MYSTERY_SHARE, MYSTERY_VANISH_CHANCE, OPPONENT_BASE_RANGE,
    OPPONENT_SPIKE_CHANCE, OPPONENT_SPIKE_RANGE, PRICE_FLOOR, REPAIR_COMP_FLOOR,
    REPAIR_COMP_RATE, REPAIR_SCARE_CHANCE, REPAIR_SCARE_SAFE_CHANCE,
    TRADE_DECLINE_GRACE, TRADE_OFFER_SHARE, WORLD_AUCTION_CHANCE,
    WORLD_AUCTION_COUNTDOWN, WORLD_AUCTION_MIN_REP, WORLD_AUCTION_PREMIUM,
    WORLD_AUCTION_START_RATE,
)
from game_models import (
    AuctionResolution, BulkLotEncounter, Encounter, GameState, MarketItem,
    MysteriousListingEncounter, OwnedItem, RepairScareEncounter, TradeOfferEncounter,
    WorldAuctionEncounter, clamp, clamp_rep, log, money, msg, remove_item, update_item,
)
from market_engine import (
    LEGENDARY, NON_LEGENDARY, build_listing, draw_condition, draw_template, listing_id, make_owned,
)
from scoring import record_sale
from seeded_rng import Stream, chance, choice, randint, stream_for, uniform

TRADE_PRICE_BAND = (0.6, 1.6)


def clear_encounter(state: GameState, *messages) -> GameState:
    return log(replace(state, pending_encounter=None), *messages)


def _pending(state: GameState, kind: str) -> Optional[Encounter]:
    encounter = state.pending_encounter
    if encounter is None or encounter.kind != kind:
        return None
    return encounter


def _no_lead(state: GameState) -> GameState:
    return log(state, msg("That lead has gone cold.", 'info'))


def tradeable_items(state: GameState):
    return [item for item in state.inventory if not item.is_busy]


# --- Daily roll ---

def roll_encounter(state: GameState) -> Optional[Encounter]:
    """
    Roll today's lead (called by the day cycle when no jam duel fired).

    World auction first (8%), otherwise a 22% generic lead split into bulk
    lot (32%), trade offer (28%, needs something tradeable) and mysterious
    listing (20%); the remaining share is a quiet day.
    """
    rng = stream_for(state.run_seed, 'encounter', state.day, state.location)
    if chance(rng, WORLD_AUCTION_CHANCE):
        return build_world_auction(state)
    if not chance(rng, ENCOUNTER_CHANCE):
        return None

    branch = rng()
    if branch < BULK_LOT_SHARE:
        return build_bulk_lot(state, rng)
    if branch < BULK_LOT_SHARE + TRADE_OFFER_SHARE:
        if not tradeable_items(state):
            return None
        return build_trade_offer(state, rng)
    if branch < BULK_LOT_SHARE + TRADE_OFFER_SHARE + MYSTERY_SHARE:
        return build_mysterious_listing(state, rng)
    return None


def encounter_intro(encounter: Encounter):
    if encounter.kind == 'bulk_lot':
        return msg(f"A storage unit lot just surfaced: {len(encounter.items)} pieces for ${encounter.total_cost:,}.", 'event')
    if encounter.kind == 'trade_offer':
        return msg(f"A trader wants your {encounter.requested_name} for a {encounter.offered_item.name}.", 'event')
    if encounter.kind == 'mysterious_listing':
        return msg(f"A too-good-to-be-true listing: {encounter.item.name} for ${encounter.item.price_today:,}.", 'event')
    if encounter.kind == 'world_auction':
        return msg(f"World auction: {encounter.item.name}, bidding opens at ${encounter.starting_bid:,}.", 'event')
    return msg(f"A buyer spots a flaw in your {encounter.item_name}.", 'warning')


# --- Bulk lot ---

def build_bulk_lot(state: GameState, rng: Stream) -> BulkLotEncounter:
    lo, hi = BULK_LOT_PRICE_RANGE
    items = []
    for index in range(randint(rng, *BULK_LOT_SIZE)):
        template = draw_template(rng, NON_LEGENDARY)
        condition = draw_condition(rng)
        price = max(PRICE_FLOOR, money(template['base_price'] * uniform(rng, lo, hi)))
        item_id = listing_id(state.day, state.location, f"bulk {template['name']}", index)
        items.append(build_listing(template, condition, price, item_id))

    return BulkLotEncounter(
        items=tuple(items),
        vague_items=tuple(BULK_VAGUE_LABELS[item.category] for item in items),
        total_cost=sum(bulk_entry_price(item) for item in items),
        project_chance=uniform(rng, *BULK_LOT_PROJECT_CHANCE),
    )


def bulk_entry_price(item: MarketItem) -> int:
    return money(item.price_today * BULK_LOT_ENTRY_RATE)


def accept_bulk_lot(state: GameState) -> GameState:
    """
    Buy the whole lot. No room for every piece closes the lead; a cash
    shortfall leaves it open.
    """
    lot = _pending(state, 'bulk_lot')
    if lot is None:
        return _no_lead(state)

    if not state.has_room_for(sum(item.slots for item in lot.items)):
        return clear_encounter(state, msg("No room for the whole lot. It moves on without you.", 'warning'))
    if state.cash < lot.total_cost:
        return log(state, msg(f"You need ${lot.total_cost:,} for the lot.", 'warning'))

    rng = stream_for(state.run_seed, 'bulk-open', state.day, state.location)
    owned = []
    projects = 0
    for item in lot.items:
        condition = item.condition
        if chance(rng, lot.project_chance):
            condition = 'Project'
            projects += 1
        owned.append(make_owned(state, item, bulk_entry_price(item), condition=condition))

    state = replace(state, cash=state.cash - lot.total_cost, inventory=state.inventory + tuple(owned))
    names = ", ".join(item.name for item in owned)
    notes = [msg(f"You haul the lot home: {names}.", 'success')]
    if projects:
        notes.append(msg(f"{projects} of them need serious work.", 'warning'))
    return clear_encounter(state, *notes)


def decline_bulk_lot(state: GameState) -> GameState:
    if _pending(state, 'bulk_lot') is None:
        return _no_lead(state)
    return clear_encounter(state, msg("You pass on the lot.", 'info'))


# --- Trade offer ---

def build_trade_offer(state: GameState, rng: Stream) -> TradeOfferEncounter:
    requested = choice(rng, tradeable_items(state))
    lo, hi = TRADE_PRICE_BAND
    pool = [
        t for t in NON_LEGENDARY
        if t['name'] != requested.name and lo * requested.base_price <= t['base_price'] <= hi * requested.base_price
    ] or NON_LEGENDARY
    template = draw_template(rng, pool)
    condition = draw_condition(rng)
    price = money(template['base_price'] * CONDITION_MULTIPLIER[condition])
    offered = build_listing(
        template, condition, price,
        listing_id(state.day, state.location, f"trade {template['name']}", 0),
    )
    return TradeOfferEncounter(requested_item_id=requested.id, requested_name=requested.name, offered_item=offered)


def accept_trade(state: GameState) -> GameState:
    """Swap at no cash cost; the new piece inherits the cost basis of the old one."""
    offer = _pending(state, 'trade_offer')
    if offer is None:
        return _no_lead(state)

    requested = state.find_item(offer.requested_item_id)
    if requested is None or requested.is_busy:
        return clear_encounter(state, msg(f"Your {offer.requested_name} isn't available to trade. The trader leaves.", 'info'))

    if state.slots_used - requested.slots + offer.offered_item.slots > state.inventory_capacity:
        return log(state, msg("No room for that swap.", 'warning'))

    state = remove_item(state, requested.id)
    incoming = make_owned(state, offer.offered_item, requested.purchase_price)
    state = replace(
        state,
        inventory=state.inventory + (incoming,),
        reputation=clamp_rep(state.reputation + 1),
    )
    return clear_encounter(state, msg(f"Traded your {requested.name} for a {incoming.name}.", 'success'))


def decline_trade(state: GameState) -> GameState:
    if _pending(state, 'trade_offer') is None:
        return _no_lead(state)

    declines = state.trade_declines + 1
    reputation = state.reputation
    notes = [msg("You turn the trader down.", 'info')]
    if declines > TRADE_DECLINE_GRACE:
        reputation = clamp_rep(reputation - 1)
        notes.append(msg("Word gets around that you never deal.", 'warning'))
    return clear_encounter(replace(state, trade_declines=declines, reputation=reputation), *notes)


# --- Mysterious listing ---

def build_mysterious_listing(state: GameState, rng: Stream) -> MysteriousListingEncounter:
    template = draw_template(rng, CATALOG)
    condition = draw_condition(rng)
    price = max(PRICE_FLOOR, money(template['base_price'] * uniform(rng, *MYSTERY_PRICE_RANGE)))
    item = build_listing(
        template, condition, price,
        listing_id(state.day, state.location, f"mystery {template['name']}", 0),
    )
    return MysteriousListingEncounter(
        item=item,
        scam_risk=min(MYSTERY_SCAM_CAP, template['scam_risk'] + MYSTERY_SCAM_BUMP),
    )


def ask_mystery_proof(state: GameState) -> GameState:
    listing = _pending(state, 'mysterious_listing')
    if listing is None:
        return _no_lead(state)
    if listing.proof_checked:
        return log(state, msg("You've already pushed for proof on this one.", 'info'))

    rng = stream_for(state.run_seed, 'mystery-proof', state.day, listing.item.id)
    if chance(rng, MYSTERY_VANISH_CHANCE):
        return clear_encounter(state, msg("You ask for proof. The listing vanishes.", 'warning'))

    checked = replace(
        listing,
        proof_checked=True,
        scam_risk=max(MYSTERY_SCAM_FLOOR, listing.scam_risk - MYSTERY_PROOF_RELIEF),
    )
    return log(replace(state, pending_encounter=checked),
               msg("The seller sends a serial photo. It looks legit-ish.", 'info'))


def buy_mystery_listing(state: GameState) -> GameState:
    """Capacity and cash blocks leave the listing open; a scam still takes the cash."""
    listing = _pending(state, 'mysterious_listing')
    if listing is None:
        return _no_lead(state)

    item = listing.item
    if not state.has_room_for(item.slots):
        return log(state, msg("No inventory space left. Clear a slot first.", 'warning'))
    if state.cash < item.price_today:
        return log(state, msg("Not enough cash for this deal.", 'warning'))

    rng = stream_for(state.run_seed, 'mystery-buy', state.day, item.id)
    if chance(rng, listing.scam_risk):
        state = replace(
            state,
            cash=state.cash - item.price_today,
            reputation=clamp_rep(state.reputation - MYSTERY_SCAM_REP_LOSS),
        )
        return clear_encounter(state, msg(f"The {item.name} never shows. ${item.price_today:,} gone.", 'warning'))

    owned = make_owned(state, item, item.price_today, heat_bump=MYSTERY_HEAT_BUMP, same_day_sell_ok=True)
    state = replace(state, cash=state.cash - item.price_today, inventory=state.inventory + (owned,))
    return clear_encounter(state, msg(f"It's real. {item.name} for ${item.price_today:,}.", 'success'))


def pass_mystery_listing(state: GameState) -> GameState:
    if _pending(state, 'mysterious_listing') is None:
        return _no_lead(state)
    return clear_encounter(state, msg("You let the listing go.", 'info'))


# --- World auction ---

def build_world_auction(state: GameState) -> WorldAuctionEncounter:
    rng = stream_for(state.run_seed, 'auction-item', state.day, state.location)
    template = choice(rng, LEGENDARY)
    condition = draw_condition(rng)
    price = money(template['base_price'] * CONDITION_MULTIPLIER[condition])
    item = build_listing(
        template, condition, price,
        listing_id(state.day, state.location, f"auction {template['name']}", 0),
    )
    return WorldAuctionEncounter(
        item=item,
        starting_bid=money(template['base_price'] * WORLD_AUCTION_START_RATE),
        buyer_premium_rate=WORLD_AUCTION_PREMIUM,
        min_reputation=WORLD_AUCTION_MIN_REP,
        countdown_seconds=WORLD_AUCTION_COUNTDOWN,
    )


def bid_increment(base_price: int) -> int:
    for upper, increment in BID_INCREMENTS:
        if base_price < upper:
            return increment
    return MAX_BID_INCREMENT


def opponent_max_bid(state: GameState, base_price: int) -> int:
    rng = stream_for(state.run_seed, 'auction-bids', state.day, state.location)
    total = base_price * uniform(rng, *OPPONENT_BASE_RANGE)
    if chance(rng, OPPONENT_SPIKE_CHANCE):
        total += base_price * uniform(rng, *OPPONENT_SPIKE_RANGE)
    return money(total)


def _auction_outcome(state: GameState, auction: WorldAuctionEncounter, bid: int) -> AuctionResolution:
    if state.reputation < auction.min_reputation:
        return AuctionResolution('blocked', bid, 0, 0)
    if bid < 1:
        return AuctionResolution('no_bid', 0, 0, auction.starting_bid)

    item = auction.item
    rival = opponent_max_bid(state, item.base_price)
    if bid < auction.starting_bid and rival < auction.starting_bid:
        return AuctionResolution('passed', bid, rival, 0)

    increment = bid_increment(item.base_price)
    # ties go to the rival, whose bid was on the book first
    if rival >= bid:
        return AuctionResolution('outbid', bid, rival, min(rival, max(auction.starting_bid, bid + increment)))

    hammer = max(auction.starting_bid, rival + increment)
    premium = money(hammer * auction.buyer_premium_rate)
    total = hammer + premium
    if total > state.cash:
        return AuctionResolution('forfeited', bid, rival, hammer, premium, total)
    if not state.has_room_for(item.slots):
        return AuctionResolution('no_space', bid, rival, hammer, premium, total)
    return AuctionResolution('won', bid, rival, hammer, premium, total)


AUCTION_MESSAGES = {
    'blocked': ("The auction house won't register you. Reputation too low.", 'warning'),
    'no_bid': ("The clock runs out. You never raised a paddle.", 'info'),
    'passed': ("Nobody met the opening bid. The lot passes.", 'info'),
    'outbid': ("Outbid at the buzzer.", 'warning'),
    'forfeited': ("You won, but can't cover the bill. The win is forfeited.", 'warning'),
    'no_space': ("You won, but there's no room to ship it. The win is voided.", 'warning'),
    'won': ("Hammer down. It's yours.", 'success'),
}


def resolve_world_auction(state: GameState, max_bid=None) -> Tuple[GameState, Optional[AuctionResolution]]:
    """
    Settle the world auction against one seeded rival max bid.

    A missing bid (countdown timeout) counts as $0. The bid is clamped to
    [0, cash]. Only a `won` outcome moves cash or inventory.

    Returns:
        tuple: (new state, AuctionResolution or None when no auction is pending)
    """
    auction = _pending(state, 'world_auction')
    if auction is None:
        return _no_lead(state), None

    bid = int(clamp(int(max_bid or 0), 0, state.cash))
    resolution = _auction_outcome(state, auction, bid)

    if resolution.outcome == 'won':
        owned = make_owned(state, auction.item, resolution.total_cost)
        state = replace(state, cash=state.cash - resolution.total_cost, inventory=state.inventory + (owned,))

    text, kind = AUCTION_MESSAGES[resolution.outcome]
    if resolution.outcome in ('outbid', 'won', 'forfeited', 'no_space'):
        text = f"{text} {auction.item.name} hammered at ${resolution.final_price:,}."
    state = replace(state, last_auction=resolution)
    return clear_encounter(state, msg(text, kind)), resolution


def pass_world_auction(state: GameState) -> GameState:
    if _pending(state, 'world_auction') is None:
        return _no_lead(state)
    return clear_encounter(state, msg("You sit this auction out.", 'info'))


# --- Repair scare ---

def maybe_raise_repair_scare(state: GameState, item: OwnedItem, price: int) -> Optional[GameState]:
    """
    Roll for a flaw scare on a manual sale.

    Returns the interrupted state, or None when the sale should go through.
    """
    if state.pending_encounter is not None:
        return None
    odds = REPAIR_SCARE_SAFE_CHANCE if item.auth_status == 'success' or item.condition == 'Mint' else REPAIR_SCARE_CHANCE
    rng = stream_for(state.run_seed, 'repair-scare', state.day, item.id)
    if not chance(rng, odds):
        return None

    scare = RepairScareEncounter(
        item_id=item.id,
        item_name=item.name,
        full_price=price,
        discount_price=max(REPAIR_COMP_FLOOR, money(price * REPAIR_COMP_RATE)),
    )
    state = replace(state, pending_encounter=scare)
    return log(state, msg(
        f"The buyer spots a flaw in the {item.name}. They want ${scare.discount_price:,} instead of ${price:,}.",
        'warning',
    ))


def accept_repair_comp(state: GameState) -> GameState:
    scare = _pending(state, 'repair_scare')
    if scare is None:
        return _no_lead(state)

    item = state.find_item(scare.item_id)
    if item is None or item.is_busy:
        return clear_encounter(state, msg("The buyer walks. Nothing to sell.", 'info'))

    state = record_sale(state, item, scare.discount_price)
    state = replace(state, reputation=clamp_rep(state.reputation + 1))
    return clear_encounter(state, msg(f"You comp the buyer. Sold {item.name} for ${scare.discount_price:,}.", 'success'))


def refuse_repair_comp(state: GameState) -> GameState:
    scare = _pending(state, 'repair_scare')
    if scare is None:
        return _no_lead(state)

    state = replace(state, reputation=clamp_rep(state.reputation - 1))
    if state.find_item(scare.item_id) is not None:
        state = update_item(state, scare.item_id, sale_cooldown_day=state.day + 1)
    return clear_encounter(state, msg(f"You hold firm. The buyer walks, and the {scare.item_name} sits until tomorrow.", 'warning'))
