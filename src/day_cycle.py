"""
Fret Wars - Day Cycle

Run lifecycle and the once-per-day state machine.

advance_day runs the subsystems in a fixed order, since each step reads
what the previous one wrote:
    1. new day, market, performance market, macro shift, recap
    2. credit line tick
    3. luthier jobs
    4. authentication jobs
    5. repo risk
    6. player-listed auctions
    7. jam duel roll
    8. otherwise the encounter roll
On the final day it liquidates instead and ends the run.
"""

import uuid
from dataclasses import replace
from typing import Iterable, Optional

from catalog_data import (
    ARRIVAL_MESSAGES, AUTH_RESULTS, FLIP_WINDOW_DAYS, HOT_ITEM_HEAT, INITIAL_MESSAGES,
    JAM_CHANCE, LOCATIONS_BY_NAME, MAX_FLIP_DAYS, MAX_MACRO_MESSAGES, MAX_RUN_DAYS,
    MIN_RUN_DAYS, PLAYER_AUCTION_BASE_RANGE, PLAYER_AUCTION_FLOOR,
    PLAYER_AUCTION_SPIKE_CHANCE, PLAYER_AUCTION_SPIKE_RANGE, REPO_BASE, REPO_FINE_MIN,
    REPO_FINE_RATE, REPO_INSURANCE_PAYOUT, REPO_MAX, REPO_MESSAGES, REPO_PER_HEAT,
    REPO_PER_HOT_ITEM, REPO_PER_LISTING, REPO_PER_RECENT_FLIP, REPO_RECENT_FLIP_DAYS,
    REPO_REP_LOSS, REPO_REP_RELIEF, REPO_SCANNER_RELIEF, STANDARD_RUN_DAYS,
    START_LOCATION, STARTING_CASH, STARTING_REPUTATION,
)
from credit_engine import tick_credit
from duel_engine import create_duel
from encounter_engine import encounter_intro, roll_encounter
from game_models import (
    GameState, TerminalMessage, clamp, clamp_rep, log, money, msg, remove_item, update_item,
)
from market_engine import (
    apply_shift, generate_market, generate_performance_market, market_recap, pick_shift, sell_price,
)
from scoring import calculate_score, record_sale
from seeded_rng import chance, choice, stream_for, uniform


def new_run_seed() -> str:
    return uuid.uuid4().hex[:12]


def new_game(run_seed: Optional[str] = None, total_days: int = STANDARD_RUN_DAYS) -> GameState:
    """Start a fresh run on day 1 at Downtown Music Row."""
    run_seed = run_seed or new_run_seed()
    total_days = int(clamp(int(total_days), MIN_RUN_DAYS, MAX_RUN_DAYS))
    return GameState(
        run_seed=run_seed,
        total_days=total_days,
        location=START_LOCATION,
        cash=STARTING_CASH,
        reputation=STARTING_REPUTATION,
        market=generate_market(1, START_LOCATION, run_seed),
        performance_market=generate_performance_market(1, START_LOCATION, run_seed),
        messages=tuple(msg(text, kind) for text, kind in INITIAL_MESSAGES),
    )


# --- Daily steps ---

def _finish_luthier_jobs(state: GameState):
    messages = []
    for item in state.inventory:
        if item.luthier_status != 'pending' or item.luthier_ready_day is None or item.luthier_ready_day > state.day:
            continue
        upgraded = item.luthier_target_condition or item.condition
        state = update_item(
            state, item.id,
            condition=upgraded,
            luthier_status='complete',
            luthier_ready_day=None,
            luthier_target_condition=None,
        )
        messages.append(msg(f"Luthier finishes {item.name}. Condition improves to {upgraded}.", 'success'))
    return state, messages


AUTH_TEXT = {
    'success': ("Authentication clears for {name}. Buyers pay a premium.", 'success'),
    'fail': ("Authentication fails for {name}. It sells at a discount.", 'warning'),
    'partial': ("Authentication returns mixed results for {name}.", 'info'),
}


def _finish_authentications(state: GameState):
    messages = []
    for item in state.inventory:
        if item.auth_status != 'pending' or item.auth_ready_day is None or item.auth_ready_day > state.day:
            continue
        outcome = item.auth_outcome or 'partial'
        multiplier, heat_drop, rep_change = AUTH_RESULTS[outcome]
        state = update_item(
            state, item.id,
            auth_status=outcome,
            auth_multiplier=item.auth_multiplier if multiplier is None else multiplier,
            heat_value=max(0, item.heat_value - heat_drop),
            auth_ready_day=None,
            auth_outcome=None,
        )
        state = replace(state, reputation=clamp_rep(state.reputation + rep_change))
        text, kind = AUTH_TEXT[outcome]
        messages.append(msg(text.format(name=item.name), kind))
    return state, messages


def repo_risk(state: GameState) -> float:
    hot_items = sum(1 for item in state.inventory if item.heat_value >= HOT_ITEM_HEAT)
    listed = sum(1 for item in state.inventory if item.auction_status == 'listed')
    recent_flips = sum(1 for day in state.recent_flip_days if state.day - day <= REPO_RECENT_FLIP_DAYS)
    risk = (
        REPO_BASE
        + REPO_PER_HEAT * state.total_heat
        + REPO_PER_HOT_ITEM * hot_items
        + REPO_PER_LISTING * listed
        + REPO_PER_RECENT_FLIP * recent_flips
        - REPO_REP_RELIEF * state.reputation
        - (REPO_SCANNER_RELIEF if state.tools.serial_scanner else 0)
    )
    return clamp(risk, 0, REPO_MAX)


def apply_repo_hit(state: GameState):
    """Confiscate the hottest item, fine the player and pay out insurance if any."""
    hottest = max(state.inventory, key=lambda item: item.heat_value)
    fine = max(REPO_FINE_MIN, money(state.cash * REPO_FINE_RATE))
    cash = max(0, state.cash - fine)
    messages = []
    if hottest.insured:
        payout = money(hottest.base_price * REPO_INSURANCE_PAYOUT)
        cash += payout
        messages.append(msg(f"Repo hit. {hottest.name} is confiscated. You pay a ${fine:,} fine. Insurance pays ${payout:,}.", 'warning'))
    else:
        messages.append(msg(f"Repo hit. {hottest.name} is confiscated. You pay a ${fine:,} fine.", 'warning'))

    state = remove_item(state, hottest.id)
    state = replace(state, cash=cash, reputation=clamp_rep(state.reputation - REPO_REP_LOSS))
    return state, messages


def _roll_repo(state: GameState):
    if not any(item.heat_value >= HOT_ITEM_HEAT for item in state.inventory):
        return state, []
    rng = stream_for(state.run_seed, 'repo', state.day, state.location)
    if rng() >= repo_risk(state):
        return state, []
    state, messages = apply_repo_hit(state)
    return state, [msg(choice(rng, REPO_MESSAGES), 'warning')] + messages


def player_auction_hammer(run_seed: str, item) -> int:
    rng = stream_for(run_seed, 'player-auction', item.id)
    factor = uniform(rng, *PLAYER_AUCTION_BASE_RANGE)
    if chance(rng, PLAYER_AUCTION_SPIKE_CHANCE):
        factor += uniform(rng, *PLAYER_AUCTION_SPIKE_RANGE)
    return max(PLAYER_AUCTION_FLOOR, money(item.auction_baseline * factor))


def _resolve_player_auctions(state: GameState):
    messages = []
    for item in state.inventory:
        if item.auction_status != 'listed' or item.auction_resolve_day is None or item.auction_resolve_day > state.day:
            continue
        hammer = player_auction_hammer(state.run_seed, item)
        premium = money(hammer * item.auction_premium_rate)
        state = record_sale(state, item, hammer)
        messages.append(msg(
            f"Auction closed: {item.name} hammered at ${hammer:,} (buyer paid ${hammer + premium:,}).",
            'success' if hammer >= item.purchase_price else 'warning',
        ))
    return state, messages


# --- Day advance ---

def liquidate(state: GameState) -> GameState:
    """Sell everything at today's prices and end the run."""
    proceeds = sum(sell_price(item, state.market, state.reputation) for item in state.inventory)
    state = replace(
        state,
        cash=state.cash + proceeds,
        inventory=(),
        is_game_over=True,
        pending_duel=None,
        pending_encounter=None,
    )
    return log(
        state,
        msg("Final day reached. Game over!", 'warning'),
        msg(f"Liquidated your remaining gear for ${proceeds:,}.", 'info'),
        msg(f"Final score: ${calculate_score(state):,}.", 'success'),
    )


def advance_day(state: GameState, destination: Optional[str] = None,
                travel_messages: Iterable[TerminalMessage] = ()) -> GameState:
    if state.is_game_over:
        return state
    if state.day >= state.total_days:
        return liquidate(log(state, *travel_messages))

    day = state.day + 1
    location = destination or state.location
    shift = pick_shift(day, location, state.run_seed)
    market = apply_shift(shift, generate_market(day, location, state.run_seed), state.run_seed, day, location)

    # unanswered offers from yesterday expire
    state = replace(
        state,
        day=day,
        location=location,
        market=market,
        performance_market=generate_performance_market(day, location, state.run_seed),
        inspected_market_ids=(),
        recent_flip_days=tuple(d for d in state.recent_flip_days if day - d <= FLIP_WINDOW_DAYS)[-MAX_FLIP_DAYS:],
        pending_duel=None,
        pending_encounter=None,
    )
    macro = [msg(shift['message'], 'event'), msg(market_recap(market), 'info')][:MAX_MACRO_MESSAGES]

    state, credit_messages = tick_credit(state)
    state, luthier_messages = _finish_luthier_jobs(state)
    state, auth_messages = _finish_authentications(state)
    state, repo_messages = _roll_repo(state)
    state, auction_messages = _resolve_player_auctions(state)

    intro_messages = []
    jam_rng = stream_for(state.run_seed, 'jam', day, location)
    if chance(jam_rng, JAM_CHANCE):
        duel = create_duel(state, jam_rng)
        state = replace(state, pending_duel=duel)
        intro_messages.append(msg(f"Jam challenge: {duel.challenger_label}. {duel.intro}", 'event'))
    else:
        encounter = roll_encounter(state)
        if encounter is not None:
            state = replace(state, pending_encounter=encounter)
            intro_messages.append(encounter_intro(encounter))

    return log(
        state,
        *travel_messages,
        msg(f"Day {day} begins. New deals appear...", 'event'),
        *macro,
        *credit_messages,
        *auth_messages,
        *luthier_messages,
        *auction_messages,
        *intro_messages,
        *repo_messages,
    )


def travel(state: GameState, location_name: str) -> GameState:
    location = LOCATIONS_BY_NAME.get(location_name)
    if location is None:
        return log(state, msg(f"Nobody's heard of {location_name}.", 'info'))
    if state.is_game_over:
        return state

    text, kind = ARRIVAL_MESSAGES[location['risk_level']]
    return advance_day(state, location['name'], [
        msg(f"Traveling to {location['name']}... ({location['travel_time']}h)", 'info'),
        msg(text, kind),
    ])


def end_day(state: GameState) -> GameState:
    """Stay put and sleep on it."""
    return advance_day(state, state.location)
