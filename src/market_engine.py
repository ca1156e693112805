"""
Fret Wars - Market Engine

Daily market generation and pricing:
- Listing generation per (day, location) with the affordable/legendary post-pass
- Performance-item (duel boost) market
- Macro market shifts (one narrative event per day re-pricing 1-2 listings)
- Market recap line
- Pricing helpers shared by player actions, scoring and liquidation
"""

import re
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from catalog_data import (
    AFFORDABLE_PRICE, CATALOG, CATEGORY_SLOTS, CHEAP_TEMPLATE_MAX_BASE,
    CONDITION_MULTIPLIER, CONDITION_WEIGHTS, CONDITIONS,
    LOCATIONS_BY_NAME, MARKET_LISTING_SPREAD, MARKET_MIN_LISTINGS, MARKET_SHIFTS,
    MAX_LEGENDARIES_PER_DAY, PERFORMANCE_ITEMS, PERFORMANCE_MARKET_SIZE,
    PRICE_DRIFT, PRICE_FLOOR, RARITY_WEIGHTS, SHIFT_RANGES, TREND_THRESHOLD,
)
from game_models import GameState, MarketItem, OwnedItem, PerformanceItem, clamp, money, to_owned
from seeded_rng import Stream, choice, pick_weighted, randint, shuffled, stream_for, uniform

SELL_FLOOR = 30
SELL_BASE_RATE = 0.85
SELL_REP_BONUS_CAP = 0.2
SMOKING_DEAL_RATE = 0.75

AUTH_COST_MIN = 60
AUTH_COST_RATE = 0.08
INSURANCE_COST_MIN = 20
INSURANCE_COST_RATE = 0.06

# target condition -> (minimum cost, rate of base price, days in the shop)
LUTHIER_WORK = {
    'Player': (80, 0.05, 1),
    'Mint': (180, 0.12, 2),
}

LUTHIER_UPGRADES = {
    'Project': 'Player',
    'Player': 'Mint',
}

NO_BIAS = {'Guitar': 0.0, 'Amp': 0.0, 'Pedal': 0.0, 'Parts': 0.0}

NON_LEGENDARY = [t for t in CATALOG if t['rarity'] != 'legendary']
LEGENDARY = [t for t in CATALOG if t['rarity'] == 'legendary']


def compute_trend(price_today: int, base_price: int) -> str:
    delta = (price_today - base_price) / base_price
    if delta > TREND_THRESHOLD:
        return 'up'
    if delta < -TREND_THRESHOLD:
        return 'down'
    return 'stable'


def listing_id(day: int, location: str, name: str, index: int) -> str:
    return re.sub(r'\s+', '-', f"{day}-{location}-{name}-{index}").lower()


def build_listing(template: dict, condition: str, price: int, item_id: str) -> MarketItem:
    """Instantiate a catalog template as a concrete listing."""
    return MarketItem(
        id=item_id,
        name=template['name'],
        category=template['category'],
        base_price=template['base_price'],
        price_today=price,
        trend=compute_trend(price, template['base_price']),
        rarity=template['rarity'],
        condition=condition,
        slots=CATEGORY_SLOTS[template['category']],
        scam_risk=template['scam_risk'],
        hot_risk=template['hot_risk'],
        description=template['description'],
        flavor_text=template['flavor_text'],
    )


def draw_template(rng: Stream, pool: Sequence[dict]) -> dict:
    return pick_weighted(rng, pool, [RARITY_WEIGHTS[t['rarity']] for t in pool])


def draw_condition(rng: Stream) -> str:
    return pick_weighted(rng, CONDITIONS, [CONDITION_WEIGHTS[c] for c in CONDITIONS])


def _draw_listing(rng: Stream, pool: Sequence[dict], bias: dict,
                  day: int, location: str, index: int) -> MarketItem:
    template = draw_template(rng, pool)
    condition = draw_condition(rng)
    drift = (rng() - 0.5) * PRICE_DRIFT
    price = max(
        PRICE_FLOOR,
        money(template['base_price'] * (1 + drift + bias.get(template['category'], 0.0))
              * CONDITION_MULTIPLIER[condition]),
    )
    return build_listing(template, condition, price, listing_id(day, location, template['name'], index))


def generate_market(day: int, location: str, run_seed: str) -> Tuple[MarketItem, ...]:
    """
    Generate the listings for one day at one location.

    The same (day, location, run_seed) always produces the same ordered
    listings. Post-pass fixes are applied by replacing single slots:

    1. No listing at or below $300 -> the last slot becomes a cheap template.
    2. More than one legendary -> every legendary after the first is redrawn
       from the non-legendary templates.
    """
    rng = stream_for(run_seed, 'market', day, location)
    bias = LOCATIONS_BY_NAME.get(location, {}).get('bias', NO_BIAS)
    count = MARKET_MIN_LISTINGS + int(rng() * MARKET_LISTING_SPREAD)

    listings = [_draw_listing(rng, CATALOG, bias, day, location, i) for i in range(count)]

    if not any(item.price_today <= AFFORDABLE_PRICE for item in listings):
        cheap = [t for t in CATALOG if t['base_price'] <= CHEAP_TEMPLATE_MAX_BASE]
        last = len(listings) - 1
        listings[last] = _draw_listing(rng, cheap, bias, day, location, last)

    legendaries = 0
    for index, item in enumerate(listings):
        if item.rarity != 'legendary':
            continue
        legendaries += 1
        if legendaries > MAX_LEGENDARIES_PER_DAY:
            listings[index] = _draw_listing(rng, NON_LEGENDARY, bias, day, location, index)

    return tuple(listings)


def generate_performance_market(day: int, location: str, run_seed: str) -> Tuple[PerformanceItem, ...]:
    rng = stream_for(run_seed, 'performance', day, location)
    picks = shuffled(rng, PERFORMANCE_ITEMS)[:PERFORMANCE_MARKET_SIZE]
    return tuple(PerformanceItem(**entry) for entry in picks)


# --- Market shifts ---

def pick_shift(day: int, location: str, run_seed: str) -> dict:
    return choice(stream_for(run_seed, 'shift', day, location), MARKET_SHIFTS)


def shift_matches(event: dict, item: MarketItem) -> bool:
    if event['categories'] is not None and item.category not in event['categories']:
        return False
    if event['rarities'] is not None and item.rarity not in event['rarities']:
        return False
    return True


def apply_shift(event: dict, market: Sequence[MarketItem], run_seed: str,
                day: int, location: str) -> Tuple[MarketItem, ...]:
    """
    Re-price 1-2 listings matching the event predicate.

    Discounts pull a price down toward 45-80% of base (never up), spikes push
    it to 105-140% of base (never down). Listings are never added or removed.
    """
    matching = [item for item in market if shift_matches(event, item)]
    if not matching:
        return tuple(market)

    rng = stream_for(run_seed, 'shift-apply', day, location)
    count = min(len(matching), randint(rng, 1, 2))
    lo, hi = SHIFT_RANGES[event['kind']]

    repriced = {}
    for item in shuffled(rng, matching)[:count]:
        target = money(item.base_price * uniform(rng, lo, hi))
        if event['kind'] == 'discount':
            price = max(PRICE_FLOOR, min(item.price_today, target))
        else:
            price = max(item.price_today, target)
        repriced[item.id] = replace(item, price_today=price, trend=compute_trend(price, item.base_price))

    return tuple(repriced.get(item.id, item) for item in market)


def market_recap(market: Sequence[MarketItem]) -> str:
    counts = {'Guitar': 0, 'Amp': 0, 'Pedal': 0, 'Parts': 0, 'up': 0, 'down': 0, 'stable': 0}
    for item in market:
        counts[item.category] += 1
        counts[item.trend] += 1

    if counts['up'] > counts['down']:
        trend = 'trending up'
    elif counts['down'] > counts['up']:
        trend = 'trending down'
    else:
        trend = 'steady'

    return (f"Market recap: {len(market)} listings. "
            f"G:{counts['Guitar']} A:{counts['Amp']} P:{counts['Pedal']} Parts:{counts['Parts']}. "
            f"Prices {trend}.")


# --- Pricing helpers ---

def sell_price(item, market: Sequence[MarketItem], reputation: int) -> int:
    """
    What a buyer pays for an owned item today.

    The reference is today's price of a same-name listing if one is on the
    market, otherwise the item's base price. Reputation adds up to 20%.
    """
    reference = next((m.price_today for m in market if m.name == item.name), item.base_price)
    rep_bonus = min(SELL_REP_BONUS_CAP, reputation / 200)
    auth_multiplier = getattr(item, 'auth_multiplier', 1.0)
    return max(
        SELL_FLOOR,
        money(reference * (SELL_BASE_RATE + rep_bonus) * CONDITION_MULTIPLIER[item.condition] * auth_multiplier),
    )


def trust_tier(scam_risk: float, reputation: int) -> str:
    adjusted = clamp(scam_risk - reputation * 0.002, 0, 1)
    if adjusted < 0.15:
        return 'Verified'
    if adjusted < 0.3:
        return 'Mixed'
    return 'Sketchy'


def is_smoking_deal(item: MarketItem) -> bool:
    return item.price_today < item.base_price * SMOKING_DEAL_RATE


def auth_cost(item) -> int:
    return max(AUTH_COST_MIN, money(item.base_price * AUTH_COST_RATE))


def insurance_cost(price: int) -> int:
    return max(INSURANCE_COST_MIN, money(price * INSURANCE_COST_RATE))


def luthier_target(condition: str) -> Optional[str]:
    return LUTHIER_UPGRADES.get(condition)


def luthier_cost(item, target: str) -> int:
    minimum, rate, _ = LUTHIER_WORK[target]
    return max(minimum, money(item.base_price * rate))


def luthier_days(target: str) -> int:
    return LUTHIER_WORK[target][2]


def acquisition_heat(item: MarketItem, bump: int = 0) -> int:
    """Heat stamped on gear when it changes hands."""
    return money(item.hot_risk * 100) + bump


def make_owned(state: GameState, listing: MarketItem, purchase_price: int,
               heat_bump: int = 0, **overrides) -> OwnedItem:
    fields = dict(
        purchase_price=purchase_price,
        heat_value=acquisition_heat(listing, heat_bump),
        acquired_day=state.day,
    )
    fields.update(overrides)
    return to_owned(listing, **fields)
