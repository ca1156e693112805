"""Shared builders for Fret Wars tests."""

from dataclasses import replace

import pytest

from day_cycle import new_game
from game_models import MarketItem, OwnedItem

TEST_SEED = 'test-seed'


def make_listing(**overrides):
    fields = dict(
        id='l-1',
        name='MIM Stratocaster',
        category='Guitar',
        base_price=420,
        price_today=420,
        trend='stable',
        rarity='common',
        condition='Player',
        slots=2,
        scam_risk=0.0,
        hot_risk=0.04,
    )
    fields.update(overrides)
    return MarketItem(**fields)


def make_owned(**overrides):
    fields = dict(
        id='o-1',
        name='Boss SD-1',
        category='Pedal',
        base_price=70,
        price_today=70,
        trend='stable',
        rarity='common',
        condition='Player',
        slots=1,
        scam_risk=0.03,
        hot_risk=0.02,
        purchase_price=50,
        heat_value=0,
        acquired_day=1,
    )
    fields.update(overrides)
    return OwnedItem(**fields)


@pytest.fixture
def state():
    """Day 1 of a seeded standard run with an empty market."""
    return replace(new_game(TEST_SEED), market=())
