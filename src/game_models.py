"""
Fret Wars - Game State Records

Immutable records for everything a run tracks. Transforms never edit a record in
place; they build a replacement with dataclasses.replace (see `log` and
`update_item` below for the common cases).

Records:
- MarketItem / OwnedItem: daily listings and the player's gear
- DuelState, DuelOption, PerformanceItem: jam challenge state
- BulkLotEncounter, TradeOfferEncounter, MysteriousListingEncounter,
  WorldAuctionEncounter, RepairScareEncounter: one per encounter kind
- Loan / CreditLine: credit line bookkeeping
- GameState: the single source of truth
"""

import uuid
from dataclasses import dataclass, field, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple, Union

from catalog_data import BAG_TIERS, HEAT_HIGH, HEAT_MEDIUM


def clamp(value, lo, hi):
    return lo if value < lo else hi if value > hi else value


def money(value) -> int:
    """Round a dollar amount half-up to a whole number (2.5 -> 3, never banker's rounding)."""
    return int(Decimal(value).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def clamp_rep(value: int) -> int:
    return int(clamp(value, 0, 100))


@dataclass(frozen=True)
class TerminalMessage:
    text: str
    type: str = 'info'
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])


def msg(text: str, type: str = 'info') -> TerminalMessage:
    return TerminalMessage(text=text, type=type)


@dataclass(frozen=True)
class MarketItem:
    id: str
    name: str
    category: str
    base_price: int
    price_today: int
    trend: str
    rarity: str
    condition: str
    slots: int
    scam_risk: float
    hot_risk: float
    description: str = ''
    flavor_text: str = ''


@dataclass(frozen=True)
class OwnedItem(MarketItem):
    purchase_price: int = 0
    heat_value: int = 0
    acquired_day: int = 1
    same_day_sell_ok: bool = False
    sale_cooldown_day: Optional[int] = None
    auction_status: str = 'none'           # none | listed
    auction_listed_day: Optional[int] = None
    auction_resolve_day: Optional[int] = None
    auction_premium_rate: float = 0.0
    auction_baseline: int = 0
    inspected: bool = False
    auth_status: str = 'none'              # none | pending | success | partial | fail
    auth_ready_day: Optional[int] = None
    auth_outcome: Optional[str] = None
    auth_multiplier: float = 1.0
    insured: bool = False
    insurance_paid: int = 0
    luthier_status: str = 'none'           # none | pending | complete
    luthier_ready_day: Optional[int] = None
    luthier_target_condition: Optional[str] = None

    @property
    def busy_reason(self) -> Optional[str]:
        if self.auth_status == 'pending':
            return 'is still authenticating'
        if self.luthier_status == 'pending':
            return 'is with the luthier'
        if self.auction_status == 'listed':
            return 'is listed for auction'
        return None

    @property
    def is_busy(self) -> bool:
        return self.busy_reason is not None


def to_owned(item: MarketItem, **overrides) -> OwnedItem:
    """Snapshot a listing into the player's inventory."""
    base = {name: getattr(item, name) for name in MarketItem.__dataclass_fields__}
    base.update(overrides)
    return OwnedItem(**base)


# --- Jam duels ---

@dataclass(frozen=True)
class DuelOption:
    id: str
    label: str
    player_bonus: float
    variance: float
    rep_bonus: int = 0
    reaction: str = ''


@dataclass(frozen=True)
class PerformanceItem:
    id: str
    name: str
    description: str
    price: int
    player_bonus: float = 0
    variance: float = 0
    opponent_penalty: float = 0
    rep_bonus: int = 0


@dataclass(frozen=True)
class DuelState:
    challenger_id: str
    challenger_label: str
    intro: str
    wager: int
    options: Tuple[DuelOption, ...]
    total_rounds: int
    round: int = 1
    wager_accepted: bool = True
    player_score: float = 0.0
    opponent_score: float = 0.0
    last_reaction: Optional[str] = None
    selected_boost_id: Optional[str] = None
    phase: str = 'pick'                    # pick | meter
    selected_option_id: Optional[str] = None
    rep_bonus_earned: int = 0


# --- Encounters ---

@dataclass(frozen=True)
class AuctionResolution:
    outcome: str                           # blocked | no_bid | passed | outbid | forfeited | no_space | won
    max_bid: int
    opponent_max: int
    final_price: int
    premium: int = 0
    total_cost: int = 0


@dataclass(frozen=True)
class BulkLotEncounter:
    items: Tuple[MarketItem, ...]
    vague_items: Tuple[str, ...]
    total_cost: int
    project_chance: float
    kind: str = 'bulk_lot'


@dataclass(frozen=True)
class TradeOfferEncounter:
    requested_item_id: str
    requested_name: str
    offered_item: MarketItem
    kind: str = 'trade_offer'


@dataclass(frozen=True)
class MysteriousListingEncounter:
    item: MarketItem
    scam_risk: float
    proof_checked: bool = False
    kind: str = 'mysterious_listing'


@dataclass(frozen=True)
class WorldAuctionEncounter:
    item: MarketItem
    starting_bid: int
    buyer_premium_rate: float
    min_reputation: int
    countdown_seconds: int
    resolution: Optional[AuctionResolution] = None
    kind: str = 'world_auction'


@dataclass(frozen=True)
class RepairScareEncounter:
    item_id: str
    item_name: str
    full_price: int
    discount_price: int
    kind: str = 'repair_scare'


Encounter = Union[
    BulkLotEncounter,
    TradeOfferEncounter,
    MysteriousListingEncounter,
    WorldAuctionEncounter,
    RepairScareEncounter,
]


# --- Credit ---

@dataclass(frozen=True)
class Loan:
    principal: int
    balance_due: int
    rate: float
    drawn_day: int
    due_day: int
    defaulted: bool = False
    penalty_applied: bool = False


@dataclass(frozen=True)
class CreditLine:
    frozen: bool = False
    loan: Optional[Loan] = None


@dataclass(frozen=True)
class Tools:
    serial_scanner: bool = False
    price_guide: bool = False
    insurance_plan: bool = False
    luthier_bench: bool = False


@dataclass(frozen=True)
class BestFlip:
    name: str
    profit: int


@dataclass(frozen=True)
class RarestSold:
    name: str
    rarity: str


# --- Game state ---

@dataclass(frozen=True)
class GameState:
    run_seed: str
    day: int = 1
    total_days: int = 21
    location: str = 'Downtown Music Row'
    cash: int = 2500
    bag_tier: int = 0
    inventory: Tuple[OwnedItem, ...] = ()
    reputation: int = 50
    inspected_market_ids: Tuple[str, ...] = ()
    recent_flip_days: Tuple[int, ...] = ()
    is_game_over: bool = False
    best_flip: Optional[BestFlip] = None
    rarest_sold: Optional[RarestSold] = None
    tools: Tools = Tools()
    pending_duel: Optional[DuelState] = None
    pending_encounter: Optional[Encounter] = None
    trade_declines: int = 0
    performance_market: Tuple[PerformanceItem, ...] = ()
    performance_items: Tuple[PerformanceItem, ...] = ()
    market: Tuple[MarketItem, ...] = ()
    messages: Tuple[TerminalMessage, ...] = ()
    credit: CreditLine = CreditLine()
    last_auction: Optional[AuctionResolution] = None

    @property
    def inventory_capacity(self) -> int:
        return BAG_TIERS[self.bag_tier][1]

    @property
    def slots_used(self) -> int:
        return sum(item.slots for item in self.inventory)

    @property
    def total_heat(self) -> int:
        return sum(item.heat_value for item in self.inventory)

    @property
    def heat_level(self) -> str:
        total = self.total_heat
        if total >= HEAT_HIGH:
            return 'High'
        if total >= HEAT_MEDIUM:
            return 'Medium'
        return 'Low'

    def has_room_for(self, slots: int) -> bool:
        return self.slots_used + slots <= self.inventory_capacity

    def find_item(self, item_id: str) -> Optional[OwnedItem]:
        for item in self.inventory:
            if item.id == item_id:
                return item
        return None

    def find_listing(self, item_id: str) -> Optional[MarketItem]:
        for item in self.market:
            if item.id == item_id:
                return item
        return None


# --- Transform helpers ---

def log(state: GameState, *messages: TerminalMessage) -> GameState:
    """Append messages to the log (returns a new state)."""
    return replace(state, messages=state.messages + tuple(messages))


def update_item(state: GameState, item_id: str, **changes) -> GameState:
    inventory = tuple(
        replace(item, **changes) if item.id == item_id else item
        for item in state.inventory
    )
    return replace(state, inventory=inventory)


def remove_item(state: GameState, item_id: str) -> GameState:
    return replace(state, inventory=tuple(i for i in state.inventory if i.id != item_id))


def remove_listing(state: GameState, item_id: str) -> GameState:
    return replace(
        state,
        market=tuple(i for i in state.market if i.id != item_id),
        inspected_market_ids=tuple(i for i in state.inspected_market_ids if i != item_id),
    )
