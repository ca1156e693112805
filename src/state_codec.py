"""
Fret Wars - Save Codec

Converts GameState to a plain JSON-ready dict and back.

Loading never trusts a saved record wholesale: every field is merged onto a
freshly started run, so saves from older builds (missing fields, renamed
fields, camelCase keys) still load into a complete, playable state.
- Unknown keys are ignored
- Inventory items are normalized (slots recomputed, missing fields defaulted)
- A market whose listings are missing details is regenerated
- Malformed duel/encounter records are dropped
"""

import re
from dataclasses import asdict, fields
from typing import Optional

from catalog_data import BAG_TIERS, CATEGORY_SLOTS, CONDITIONS, LOCATIONS_BY_NAME
from day_cycle import new_game
from game_models import (
    AuctionResolution, BestFlip, BulkLotEncounter, CreditLine, DuelOption, DuelState,
    GameState, Loan, MarketItem, MysteriousListingEncounter, OwnedItem, PerformanceItem,
    RarestSold, RepairScareEncounter, TerminalMessage, Tools, TradeOfferEncounter,
    WorldAuctionEncounter, clamp_rep,
)
from market_engine import generate_market, generate_performance_market

ENCOUNTER_TYPES = {
    'bulk_lot': BulkLotEncounter,
    'trade_offer': TradeOfferEncounter,
    'mysterious_listing': MysteriousListingEncounter,
    'world_auction': WorldAuctionEncounter,
    'repair_scare': RepairScareEncounter,
}

# older saves used the client's camelCase kind names
ENCOUNTER_ALIASES = {
    'bulkLot': 'bulk_lot',
    'tradeOffer': 'trade_offer',
    'mysteriousListing': 'mysterious_listing',
    'worldAuction': 'world_auction',
    'repairScare': 'repair_scare',
}

MARKET_REQUIRED = ('id', 'name', 'category', 'base_price', 'price_today', 'rarity', 'condition')

_CAMEL = re.compile(r'(?<!^)(?=[A-Z])')


def to_record(state: GameState) -> dict:
    return asdict(state)


def snake_keys(raw):
    """Recursively convert camelCase dict keys to snake_case."""
    if isinstance(raw, dict):
        return {_CAMEL.sub('_', str(key)).lower(): snake_keys(value) for key, value in raw.items()}
    if isinstance(raw, list):
        return [snake_keys(value) for value in raw]
    return raw


def _known(cls, raw: dict) -> dict:
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in raw.items() if key in names}


def _int(value, default):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


def _list(value):
    return value if isinstance(value, list) else []


# --- Nested records ---

def _market_item(raw) -> Optional[MarketItem]:
    if not isinstance(raw, dict) or any(raw.get(key) is None for key in MARKET_REQUIRED):
        return None
    if raw['category'] not in CATEGORY_SLOTS or raw['condition'] not in CONDITIONS:
        return None
    data = _known(MarketItem, raw)
    data.setdefault('trend', 'stable')
    data.setdefault('scam_risk', 0.0)
    data.setdefault('hot_risk', 0.0)
    data['slots'] = CATEGORY_SLOTS[raw['category']]
    try:
        return MarketItem(**data)
    except TypeError:
        return None


def _owned_item(raw) -> Optional[OwnedItem]:
    item = _market_item(raw)
    if item is None:
        return None
    data = _known(OwnedItem, raw)
    data['slots'] = item.slots
    for key in ('trend', 'scam_risk', 'hot_risk'):
        data[key] = getattr(item, key)
    data['purchase_price'] = _int(raw.get('purchase_price'), item.price_today)
    data['heat_value'] = max(0, _int(raw.get('heat_value'), round(item.hot_risk * 100)))
    data['acquired_day'] = _int(raw.get('acquired_day'), 1)
    if not isinstance(data.get('auth_multiplier'), (int, float)):
        data['auth_multiplier'] = 1.0
    try:
        return OwnedItem(**data)
    except TypeError:
        return None


def _performance_item(raw) -> Optional[PerformanceItem]:
    if not isinstance(raw, dict):
        return None
    try:
        return PerformanceItem(**_known(PerformanceItem, raw))
    except TypeError:
        return None


def _auction_resolution(raw) -> Optional[AuctionResolution]:
    if not isinstance(raw, dict):
        return None
    try:
        return AuctionResolution(**_known(AuctionResolution, raw))
    except TypeError:
        return None


def _duel(raw) -> Optional[DuelState]:
    if not isinstance(raw, dict):
        return None
    try:
        data = _known(DuelState, raw)
        data['options'] = tuple(DuelOption(**_known(DuelOption, o)) for o in _list(raw.get('options')))
        if not data['options']:
            return None
        return DuelState(**data)
    except TypeError:
        return None


def _encounter(raw):
    if not isinstance(raw, dict):
        return None
    kind = raw.get('kind') or raw.get('type')
    kind = ENCOUNTER_ALIASES.get(kind, kind)
    cls = ENCOUNTER_TYPES.get(kind)
    if cls is None:
        return None

    data = _known(cls, raw)
    data['kind'] = kind
    if cls is BulkLotEncounter:
        items = [_market_item(i) for i in _list(raw.get('items'))]
        if not items or None in items:
            return None
        data['items'] = tuple(items)
        data['vague_items'] = tuple(str(v) for v in _list(raw.get('vague_items')))
    elif cls is TradeOfferEncounter:
        data['offered_item'] = _market_item(raw.get('offered_item'))
        if data['offered_item'] is None:
            return None
    elif cls in (MysteriousListingEncounter, WorldAuctionEncounter):
        data['item'] = _market_item(raw.get('item'))
        if data['item'] is None:
            return None
        if cls is WorldAuctionEncounter:
            data['resolution'] = _auction_resolution(raw.get('resolution'))

    try:
        return cls(**data)
    except TypeError:
        return None


def _credit(raw) -> CreditLine:
    if not isinstance(raw, dict):
        return CreditLine()
    loan = None
    if isinstance(raw.get('loan'), dict):
        try:
            loan = Loan(**_known(Loan, raw['loan']))
        except TypeError:
            loan = None
    return CreditLine(frozen=bool(raw.get('frozen', False)), loan=loan)


def _messages(raw) -> tuple:
    out = []
    for entry in _list(raw):
        if isinstance(entry, dict) and isinstance(entry.get('text'), str):
            out.append(TerminalMessage(**_known(TerminalMessage, entry)))
    return tuple(out)


# --- Whole state ---

def from_record(raw) -> GameState:
    """
    Merge a saved record onto a fresh run.

    Anything missing or malformed falls back to the fresh run's value.
    """
    if not isinstance(raw, dict):
        return new_game()
    raw = snake_keys(raw)

    run_seed = raw.get('run_seed') if isinstance(raw.get('run_seed'), str) and raw.get('run_seed') else None
    base = new_game(run_seed, _int(raw.get('total_days'), 21))

    day = max(1, _int(raw.get('day'), base.day))
    location = raw.get('location') if raw.get('location') in LOCATIONS_BY_NAME else base.location
    bag_tier = _int(raw.get('bag_tier'), None)
    if bag_tier is None:
        # saves from before bag tiers only stored the capacity
        capacity = _int(raw.get('inventory_capacity'), None)
        bag_tier = next((tier for tier, (_, slots, _) in BAG_TIERS.items() if slots == capacity), base.bag_tier)
    if bag_tier not in BAG_TIERS:
        bag_tier = base.bag_tier

    inventory = tuple(item for item in map(_owned_item, _list(raw.get('inventory'))) if item is not None)

    saved_market = _list(raw.get('market'))
    market = tuple(_market_item(i) for i in saved_market)
    if not saved_market or None in market:
        market = generate_market(day, location, base.run_seed)

    if 'performance_market' in raw:
        performance_market = tuple(p for p in map(_performance_item, _list(raw['performance_market'])) if p)
    else:
        performance_market = generate_performance_market(day, location, base.run_seed)

    tools_raw = raw.get('tools') if isinstance(raw.get('tools'), dict) else {}
    tools = Tools(**{k: bool(v) for k, v in _known(Tools, tools_raw).items()})

    best_flip = None
    if isinstance(raw.get('best_flip'), dict) and 'name' in raw['best_flip']:
        best_flip = BestFlip(name=str(raw['best_flip']['name']), profit=_int(raw['best_flip'].get('profit'), 0))
    rarest_sold = None
    if isinstance(raw.get('rarest_sold'), dict) and 'name' in raw['rarest_sold']:
        rarest_sold = RarestSold(name=str(raw['rarest_sold']['name']), rarity=str(raw['rarest_sold'].get('rarity', 'common')))

    return GameState(
        run_seed=base.run_seed,
        day=day,
        total_days=base.total_days,
        location=location,
        cash=max(0, _int(raw.get('cash'), base.cash)),
        bag_tier=bag_tier,
        inventory=inventory,
        reputation=clamp_rep(_int(raw.get('reputation'), base.reputation)),
        inspected_market_ids=tuple(str(i) for i in _list(raw.get('inspected_market_ids'))),
        recent_flip_days=tuple(_int(d, day) for d in _list(raw.get('recent_flip_days'))),
        is_game_over=bool(raw.get('is_game_over', False)),
        best_flip=best_flip,
        rarest_sold=rarest_sold,
        tools=tools,
        pending_duel=_duel(raw.get('pending_duel')),
        pending_encounter=_encounter(raw.get('pending_encounter')),
        trade_declines=max(0, _int(raw.get('trade_declines'), 0)),
        performance_market=performance_market,
        performance_items=tuple(p for p in map(_performance_item, _list(raw.get('performance_items'))) if p),
        market=market,
        messages=_messages(raw.get('messages')) or base.messages,
        credit=_credit(raw.get('credit')),
        last_auction=_auction_resolution(raw.get('last_auction')),
    )
