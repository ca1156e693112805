"""
Fret Wars - Seeded Random Streams

Every roll that can change a player's outcome comes from a stream derived from
the run seed plus a context tag (day, location, item id, subsystem). The same
seed always replays the same markets, shifts, auctions and encounters.

- hash_seed: FNV-1a 32-bit string hash
- mulberry32: small counter-based float generator
- stream_for: the one entry point gameplay code should use
"""

from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")

Stream = Callable[[], float]

FNV_OFFSET = 2166136261
FNV_PRIME = 16777619
MULBERRY_STEP = 0x6D2B79F5
UINT32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit multiply, wrapped the way JavaScript's Math.imul wraps."""
    return (a * b) & UINT32


def hash_seed(text: str) -> int:
    """
    Hash a string to an unsigned 32-bit integer (FNV-1a).

    Characters are consumed as UTF-16 code units so that seeds shared between
    clients hash identically everywhere.
    """
    h = FNV_OFFSET
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = _imul(h, FNV_PRIME)
    return h & UINT32


def mulberry32(seed: int) -> Stream:
    """Return a generator of floats in [0, 1) seeded with a 32-bit integer."""
    state = seed & UINT32

    def next_float() -> float:
        nonlocal state
        state = (state + MULBERRY_STEP) & UINT32
        t = state
        r = _imul(t ^ (t >> 15), 1 | t)
        r = (r ^ ((r + _imul(r ^ (r >> 7), 61 | r)) & UINT32)) & UINT32
        return ((r ^ (r >> 14)) & UINT32) / 4294967296

    return next_float


def stream_for(run_seed: str, *tag_parts) -> Stream:
    """Derive an independent stream for one subsystem roll, e.g. ("market", 3, "Vintage Alley")."""
    tag = ":".join(str(part) for part in tag_parts)
    return mulberry32(hash_seed(f"{run_seed}:{tag}"))


# --- Sampling helpers ---

def pick_weighted(rng: Stream, items: Sequence[T], weights: Sequence[float]) -> T:
    """
    Cumulative-weight pick. The first item whose running total reaches the roll
    wins, so a roll landing exactly on a boundary goes to the earlier item.
    """
    total = sum(weights)
    roll = rng() * total
    acc = 0.0
    for item, weight in zip(items, weights):
        acc += weight
        if roll <= acc:
            return item
    return items[-1]


def uniform(rng: Stream, lo: float, hi: float) -> float:
    return lo + rng() * (hi - lo)


def randint(rng: Stream, lo: int, hi: int) -> int:
    """Inclusive on both ends."""
    return lo + int(rng() * (hi - lo + 1))


def chance(rng: Stream, p: float) -> bool:
    return rng() < p


def choice(rng: Stream, seq: Sequence[T]) -> T:
    return seq[int(rng() * len(seq))]


def shuffled(rng: Stream, seq: Sequence[T]) -> List[T]:
    """Fisher-Yates shuffle into a new list."""
    out = list(seq)
    for i in range(len(out) - 1, 0, -1):
        j = int(rng() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out
