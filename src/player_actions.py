"""
Fret Wars - Player Actions

Direct player moves on the current day. Every action is a pure
GameState -> GameState transform; a move that isn't allowed (no cash, no
room, item busy) only appends a message.

Actions:
- Market: buy (optionally insured), ask for proof
- Inventory: sell, authenticate, luthier work, list for auction
- Shop: tools, bag upgrades, performance items
"""

from dataclasses import replace

from catalog_data import (
    BAG_TIERS, CONDITIONS, PLAYER_AUCTION_DAYS, PLAYER_AUCTION_PREMIUM,
    TOOL_COSTS, TOOL_LABELS,
)
from encounter_engine import maybe_raise_repair_scare
from game_models import (
    GameState, clamp, clamp_rep, log, money, msg, remove_listing, update_item,
)
from market_engine import (
    auth_cost, insurance_cost, luthier_cost, luthier_days, luthier_target,
    make_owned, sell_price,
)
from scoring import record_sale
from seeded_rng import chance, stream_for

SCAM_CAP = 0.9
INSPECTED_RELIEF = 0.2
SCANNER_RELIEF = 0.05
PRICE_GUIDE_RELIEF = 0.03
SCAM_REP_LOSS = 6
INSURANCE_REFUND_RATE = 0.6

AUTH_PARTIAL_BAND = 0.2
AUTH_FAST_CHANCE = 0.7

CONDITION_RANK = {condition: rank for rank, condition in enumerate(reversed(CONDITIONS))}


def _missing(state: GameState) -> GameState:
    return log(state, msg("That item isn't in your bag.", 'info'))


def _busy(state: GameState, item) -> GameState:
    return log(state, msg(f"{item.name} {item.busy_reason}. Try again tomorrow.", 'info'))


# --- Market ---

def effective_scam_risk(state: GameState, listing) -> float:
    risk = listing.scam_risk
    if listing.id in state.inspected_market_ids:
        risk -= INSPECTED_RELIEF
    risk -= state.reputation * 0.001
    if state.tools.serial_scanner:
        risk -= SCANNER_RELIEF
    if state.tools.price_guide:
        risk -= PRICE_GUIDE_RELIEF
    return clamp(risk, 0, SCAM_CAP)


def buy_item(state: GameState, item_id: str, insure: bool = False) -> GameState:
    listing = state.find_listing(item_id)
    if listing is None:
        return log(state, msg("That listing is gone.", 'info'))
    if not state.has_room_for(listing.slots):
        return log(state, msg("No inventory space left. Clear a slot first.", 'warning'))
    if insure and not state.tools.insurance_plan:
        return log(state, msg("Insurance plan required to insure this deal.", 'warning'))

    premium = insurance_cost(listing.price_today) if insure else 0
    total = listing.price_today + premium
    if state.cash < total:
        return log(state, msg("Not enough cash for this deal.", 'warning'))

    rng = stream_for(state.run_seed, 'buy', state.day, item_id)
    if chance(rng, effective_scam_risk(state, listing)):
        refund = money(listing.price_today * INSURANCE_REFUND_RATE) if insure else 0
        state = remove_listing(state, item_id)
        state = replace(
            state,
            cash=max(0, state.cash - total + refund),
            reputation=clamp_rep(state.reputation - SCAM_REP_LOSS),
        )
        if insure:
            return log(state, msg(f"Scammed on the {listing.name}. Insurance reimburses ${refund:,}.", 'warning'))
        return log(state, msg(f"Scammed on the {listing.name}. The seller ghosts you and your cash vanishes.", 'warning'))

    owned = make_owned(
        state, listing, listing.price_today,
        inspected=item_id in state.inspected_market_ids,
        insured=insure,
        insurance_paid=premium,
    )
    state = remove_listing(state, item_id)
    state = replace(state, cash=state.cash - total, inventory=state.inventory + (owned,))
    if insure:
        return log(state, msg(f"Purchased {listing.name} for ${listing.price_today:,} + ${premium:,} insurance.", 'success'))
    return log(state, msg(f"Purchased {listing.name} for ${listing.price_today:,}.", 'success'))


def ask_for_proof(state: GameState, item_id: str) -> GameState:
    """
    Press a seller for proof. Sketchy sellers may pull the listing; the
    ones who answer make the listing safer to buy today.
    """
    listing = state.find_listing(item_id)
    if listing is None:
        return log(state, msg("That listing is gone.", 'info'))
    if item_id in state.inspected_market_ids:
        return log(state, msg("You've already pushed for proof on this one.", 'info'))

    walk_chance = clamp(0.2 + listing.scam_risk * 0.3 - state.reputation * 0.002, 0.05, 0.45)
    rng = stream_for(state.run_seed, 'proof', state.day, item_id)
    if chance(rng, walk_chance):
        return log(remove_listing(state, item_id),
                   msg("You ask for proof. The seller ghosts and pulls the listing.", 'warning'))

    if listing.scam_risk < 0.15:
        rep_change = -1
    elif listing.scam_risk >= 0.35:
        rep_change = 1
    else:
        rep_change = 0

    state = replace(
        state,
        reputation=clamp_rep(state.reputation + rep_change),
        inspected_market_ids=state.inspected_market_ids + (item_id,),
    )
    notes = [
        msg("You ask for proof. The seller sends a verification clip.", 'info'),
        msg("You get a clearer read on the deal.", 'event'),
    ]
    if rep_change < 0:
        notes.append(msg("Word spreads: you're thorough, maybe a bit picky.", 'warning'))
    elif rep_change > 0:
        notes.append(msg("Smart move. Your caution earns respect.", 'success'))
    return log(state, *notes)


# --- Inventory ---

def can_sell_today(state: GameState, item) -> bool:
    return item.acquired_day < state.day or item.same_day_sell_ok


def sell_item(state: GameState, item_id: str, allow_scare: bool = True) -> GameState:
    item = state.find_item(item_id)
    if item is None:
        return _missing(state)
    scare = state.pending_encounter
    if scare is not None and scare.kind == 'repair_scare':
        if scare.item_id == item_id:
            return log(state, msg(f"The buyer is still waiting on your answer about the {item.name}.", 'info'))
        return log(state, msg(f"Settle things with the buyer over the {scare.item_name} first.", 'info'))
    if item.is_busy:
        return _busy(state, item)
    if not can_sell_today(state, item):
        return log(state, msg(f"You just picked up the {item.name}. Buyers won't bite until tomorrow.", 'info'))
    if item.sale_cooldown_day is not None and state.day < item.sale_cooldown_day:
        return log(state, msg(f"Nobody wants the {item.name} after that scene. Try tomorrow.", 'info'))

    price = sell_price(item, state.market, state.reputation)
    if allow_scare:
        interrupted = maybe_raise_repair_scare(state, item, price)
        if interrupted is not None:
            return interrupted

    state = record_sale(state, item, price)
    return log(state, msg(f"Sold {item.name} for ${price:,}.", 'success'))


def authenticate_item(state: GameState, item_id: str) -> GameState:
    """
    Send an item out for authentication. The outcome is rolled now and
    locked in; it lands when the job is ready (1 day, or 2 on a slow week).
    """
    item = state.find_item(item_id)
    if item is None:
        return _missing(state)
    if item.is_busy:
        return _busy(state, item)
    if item.auth_status != 'none':
        return log(state, msg("Authentication already in progress or completed.", 'info'))

    cost = auth_cost(item)
    if state.cash < cost:
        return log(state, msg("Not enough cash to authenticate this item.", 'warning'))

    success_chance = clamp(0.65 - item.heat_value * 0.004 + state.reputation * 0.003, 0.15, 0.85)
    rng = stream_for(state.run_seed, 'auth', state.day, item_id)
    roll = rng()
    if roll < success_chance:
        outcome = 'success'
    elif roll < success_chance + AUTH_PARTIAL_BAND:
        outcome = 'partial'
    else:
        outcome = 'fail'
    ready_in = 1 if chance(rng, AUTH_FAST_CHANCE) else 2

    state = update_item(
        state, item_id,
        auth_status='pending',
        auth_ready_day=state.day + ready_in,
        auth_outcome=outcome,
    )
    state = replace(state, cash=state.cash - cost)
    return log(state, msg(f"Authentication started for {item.name}. Results in {ready_in} day(s).", 'info'))


def send_to_luthier(state: GameState, item_id: str, target: str = None) -> GameState:
    if not state.tools.luthier_bench:
        return log(state, msg("You don't have luthier access yet.", 'warning'))

    item = state.find_item(item_id)
    if item is None:
        return _missing(state)
    if item.is_busy:
        return _busy(state, item)

    target = target or luthier_target(item.condition)
    if target not in CONDITION_RANK or CONDITION_RANK[target] <= CONDITION_RANK[item.condition]:
        return log(state, msg("That item is already in that condition.", 'info'))

    cost = luthier_cost(item, target)
    if state.cash < cost:
        return log(state, msg("Not enough cash for luthier work.", 'warning'))

    ready_in = luthier_days(target)
    state = update_item(
        state, item_id,
        luthier_status='pending',
        luthier_ready_day=state.day + ready_in,
        luthier_target_condition=target,
    )
    state = replace(state, cash=state.cash - cost)
    return log(state, msg(f"Luthier work started for {item.name}. Ready in {ready_in} day(s).", 'info'))


def list_for_auction(state: GameState, item_id: str) -> GameState:
    """
    List an item on the player auction board. It resolves on the next day
    advance at whatever the room pays; the buyer fee is on the buyer.
    """
    item = state.find_item(item_id)
    if item is None:
        return _missing(state)
    if item.is_busy:
        return _busy(state, item)
    if not can_sell_today(state, item):
        return log(state, msg(f"You just picked up the {item.name}. List it tomorrow.", 'info'))

    baseline = sell_price(item, state.market, state.reputation)
    resolve_day = state.day + PLAYER_AUCTION_DAYS
    state = update_item(
        state, item_id,
        auction_status='listed',
        auction_listed_day=state.day,
        auction_resolve_day=resolve_day,
        auction_premium_rate=PLAYER_AUCTION_PREMIUM,
        auction_baseline=baseline,
    )
    return log(state, msg(f"Listed {item.name} for auction. Resolves on day {resolve_day}.", 'event'))


# --- Shop ---

def buy_tool(state: GameState, tool: str) -> GameState:
    if tool not in TOOL_COSTS:
        return log(state, msg("Nobody sells that around here.", 'info'))
    if getattr(state.tools, tool):
        return log(state, msg("Already owned.", 'info'))

    cost = TOOL_COSTS[tool]
    if state.cash < cost:
        return log(state, msg("Not enough cash for that upgrade.", 'warning'))

    state = replace(state, cash=state.cash - cost, tools=replace(state.tools, **{tool: True}))
    return log(state, msg(f"{TOOL_LABELS[tool]} acquired. New options unlocked.", 'success'))


def upgrade_bag(state: GameState) -> GameState:
    next_tier = state.bag_tier + 1
    if next_tier not in BAG_TIERS:
        return log(state, msg("You're already hauling the biggest case there is.", 'info'))

    label, capacity, cost = BAG_TIERS[next_tier]
    if state.cash < cost:
        return log(state, msg(f"A {label} costs ${cost:,}.", 'warning'))

    state = replace(state, cash=state.cash - cost, bag_tier=next_tier)
    return log(state, msg(f"Upgraded to a {label}. {capacity} slots.", 'success'))


def buy_performance_item(state: GameState, perf_id: str) -> GameState:
    offer = next((p for p in state.performance_market if p.id == perf_id), None)
    if offer is None:
        return log(state, msg("That one's sold out.", 'info'))
    if state.cash < offer.price:
        return log(state, msg("Not enough cash for that.", 'warning'))

    state = replace(
        state,
        cash=state.cash - offer.price,
        performance_items=state.performance_items + (offer,),
        performance_market=tuple(p for p in state.performance_market if p.id != perf_id),
    )
    return log(state, msg(f"Picked up a {offer.name}.", 'success'))
