"""
Fret Wars - Score & Run Summary

Pure projections of a GameState:
- calculate_score: cash + liquidation value of inventory + reputation bonus
- record_sale: cash-in bookkeeping shared by every way an item leaves for money
- run_summary / share_text: end-of-run display data
- leaderboard_payload / is_eligible: score submission record
"""

from dataclasses import replace
from typing import Optional

from catalog_data import MAX_FLIP_DAYS, RARITY_RANK, STANDARD_RUN_DAYS
from game_models import BestFlip, GameState, OwnedItem, RarestSold, remove_item
from market_engine import sell_price

REPUTATION_POINTS = 50
CLIENT_VERSION = 'fretwars-py-1.0'


def inventory_value(state: GameState) -> int:
    return sum(sell_price(item, state.market, state.reputation) for item in state.inventory)


def calculate_score(state: GameState) -> int:
    return round(state.cash + inventory_value(state) + state.reputation * REPUTATION_POINTS)


def record_sale(state: GameState, item: OwnedItem, proceeds: int) -> GameState:
    """
    Remove a sold item, bank the proceeds and update the run trackers.

    The best flip only moves on a strictly larger positive profit; the rarest
    sold only moves on a strictly higher rarity rank. Both are monotonic.
    """
    profit = proceeds - item.purchase_price

    best_flip = state.best_flip
    if profit > 0 and (best_flip is None or profit > best_flip.profit):
        best_flip = BestFlip(name=item.name, profit=profit)

    rarest = state.rarest_sold
    if rarest is None or RARITY_RANK[item.rarity] > RARITY_RANK.get(rarest.rarity, 0):
        rarest = RarestSold(name=item.name, rarity=item.rarity)

    state = remove_item(state, item.id)
    return replace(
        state,
        cash=state.cash + proceeds,
        recent_flip_days=(state.recent_flip_days + (state.day,))[-MAX_FLIP_DAYS:],
        best_flip=best_flip,
        rarest_sold=rarest,
    )


def run_summary(state: GameState) -> dict:
    return {
        'score': calculate_score(state),
        'day': state.day,
        'total_days': state.total_days,
        'completed': state.is_game_over,
        'cash': state.cash,
        'reputation': state.reputation,
        'inventory_slots_used': state.slots_used,
        'inventory_capacity': state.inventory_capacity,
        'best_flip': (
            {'name': state.best_flip.name, 'profit': state.best_flip.profit}
            if state.best_flip else None
        ),
        'rarest_sold': (
            {'name': state.rarest_sold.name, 'rarity': state.rarest_sold.rarity}
            if state.rarest_sold else None
        ),
        'run_seed': state.run_seed,
    }


def share_text(state: GameState) -> str:
    lines = [
        f"Fret Wars - Day {state.day}/{state.total_days}",
        f"Score: ${calculate_score(state):,}",
        f"Cash: ${state.cash:,} | Rep: {state.reputation}",
    ]
    if state.best_flip:
        lines.append(f"Best flip: {state.best_flip.name} (+${state.best_flip.profit:,})")
    if state.rarest_sold:
        lines.append(f"Rarest sold: {state.rarest_sold.name} ({state.rarest_sold.rarity})")
    lines.append(f"Seed: {state.run_seed}")
    return "\n".join(lines)


def leaderboard_payload(state: GameState, display_name: Optional[str] = None,
                        email: Optional[str] = None, email_opt_in: bool = False) -> dict:
    """Build the score submission record for the leaderboard."""
    payload = {
        'displayName': (display_name or '').strip()[:32] or 'Anonymous',
        'score': max(0, calculate_score(state)),
        'runSeed': state.run_seed,
        'day': state.day,
        'totalDays': state.total_days,
        'completed': state.is_game_over,
        'cash': state.cash,
        'reputation': state.reputation,
        'inventorySlotsUsed': state.slots_used,
        'inventoryCapacity': state.inventory_capacity,
        'clientVersion': CLIENT_VERSION,
    }
    if state.best_flip:
        payload['bestFlip'] = {'name': state.best_flip.name, 'profit': state.best_flip.profit}
    if state.rarest_sold:
        payload['rarestSold'] = {'name': state.rarest_sold.name, 'rarity': state.rarest_sold.rarity}
    if email:
        payload['email'] = email
        payload['emailOptIn'] = bool(email_opt_in)
    return payload


def is_eligible(payload: dict) -> bool:
    """Only completed standard-length runs are ranked."""
    return (
        payload.get('totalDays') == STANDARD_RUN_DAYS
        and bool(payload.get('completed'))
        and payload.get('day', 0) >= payload.get('totalDays', 0)
    )
