"""
Fret Wars - Jam Duels

A street challenger asks to trade licks. Each round runs `pick -> meter`:
the player picks an approach (plus an optional performance item), then the
timing meter reports an accuracy in [0, 1]. Scores accumulate over the
challenger's fixed number of rounds and the margin decides the outcome.

Round score:
    player   = rep*0.4 + option bonus + boost bonus
               + roll*(option variance + boost variance)*(1 - accuracy*0.45)
               + gear bonus - heat penalty + (accuracy - 0.5)*timing scale
    opponent = base skill + roll*28 - boost opponent penalty
"""

import math
from dataclasses import replace
from typing import Optional

from catalog_data import (
    DUEL_ACCURACY_DAMPING, DUEL_CHALLENGERS, DUEL_DECLINE_REP_LOSS, DUEL_GEAR_AMP,
    DUEL_GEAR_GUITAR, DUEL_HEAT_PENALTY, DUEL_OPPONENT_SPREAD, DUEL_OPTIONS,
    DUEL_WIN_MARGIN,
)
from game_models import (
    DuelOption, DuelState, GameState, PerformanceItem, clamp, clamp_rep, log, money, msg,
)
from market_engine import NON_LEGENDARY, build_listing, draw_condition, draw_template, listing_id, make_owned
from seeded_rng import Stream, chance, choice, shuffled, stream_for

OPTIONS_PER_ROUND = 3
REWARD_LISTING_RATE = 0.7

CHALLENGERS_BY_ID = {c['id']: c for c in DUEL_CHALLENGERS}


def timing_scale(round_number: int, total_rounds: int) -> int:
    return 10 + 4 * (round_number - 1) + 2 * total_rounds


def gear_bonus(state: GameState) -> int:
    categories = {item.category for item in state.inventory}
    bonus = 0
    if 'Guitar' in categories:
        bonus += DUEL_GEAR_GUITAR
    if 'Amp' in categories:
        bonus += DUEL_GEAR_AMP
    return bonus


def _round_options(rng: Stream, challenger: dict, round_number: int):
    generic = [DuelOption(**option) for option in shuffled(rng, DUEL_OPTIONS)]
    if round_number == 1:
        return tuple(generic[:OPTIONS_PER_ROUND])
    # from round 2 the challenger's signature move takes one slot
    picks = generic[:OPTIONS_PER_ROUND - 1] + [DuelOption(**challenger['signature'])]
    return tuple(shuffled(rng, picks))


def create_duel(state: GameState, rng: Stream) -> DuelState:
    challenger = choice(rng, DUEL_CHALLENGERS)
    return DuelState(
        challenger_id=challenger['id'],
        challenger_label=challenger['label'],
        intro=challenger['intro'],
        wager=min(state.cash, challenger['wager']),
        wager_accepted=False,
        options=_round_options(rng, challenger, 1),
        total_rounds=challenger['total_rounds'],
    )


def _no_duel(state: GameState) -> GameState:
    return log(state, msg("Nobody's waiting to jam.", 'info'))


def toggle_wager(state: GameState) -> GameState:
    """The wager can only be set before the first approach is picked."""
    duel = state.pending_duel
    if duel is None:
        return _no_duel(state)
    if duel.round != 1 or duel.phase != 'pick':
        return log(state, msg("The wager is locked in.", 'info'))
    if duel.wager <= 0:
        return log(state, msg("You've got nothing to put on the line.", 'info'))

    accepted = not duel.wager_accepted
    state = replace(state, pending_duel=replace(duel, wager_accepted=accepted))
    if accepted:
        return log(state, msg(f"You put ${duel.wager:,} on the line.", 'event'))
    return log(state, msg("You pull the wager. Just for fun, then.", 'info'))


def choose_option(state: GameState, option_id: str, boost_id: Optional[str] = None) -> GameState:
    duel = state.pending_duel
    if duel is None:
        return _no_duel(state)
    if duel.phase != 'pick':
        return log(state, msg("Finish the run you started.", 'info'))
    if not any(option.id == option_id for option in duel.options):
        return log(state, msg("That's not on the table this round.", 'info'))
    if boost_id is not None and not any(item.id == boost_id for item in state.performance_items):
        return log(state, msg("You don't have that in your gig bag.", 'info'))

    duel = replace(duel, phase='meter', selected_option_id=option_id, selected_boost_id=boost_id)
    return replace(state, pending_duel=duel)


def _consume_boost(state: GameState, boost_id: str) -> GameState:
    items = list(state.performance_items)
    for index, item in enumerate(items):
        if item.id == boost_id:
            del items[index]
            break
    return replace(state, performance_items=tuple(items))


def submit_timing(state: GameState, accuracy: float) -> GameState:
    """
    Score the round from the meter accuracy and either open the next round
    or settle the duel.
    """
    duel = state.pending_duel
    if duel is None:
        return _no_duel(state)
    if duel.phase != 'meter':
        return log(state, msg("Pick your approach first.", 'info'))

    accuracy = float(accuracy)
    # a meter that never reported counts as a miss
    accuracy = clamp(accuracy, 0.0, 1.0) if math.isfinite(accuracy) else 0.0
    challenger = CHALLENGERS_BY_ID[duel.challenger_id]
    option = next(o for o in duel.options if o.id == duel.selected_option_id)
    boost = next((p for p in state.performance_items if p.id == duel.selected_boost_id), None)
    if boost is None:
        boost = PerformanceItem(id='', name='', description='', price=0)
    else:
        state = _consume_boost(state, boost.id)

    rng = stream_for(state.run_seed, 'duel', state.day, duel.challenger_id, duel.round)
    player = (
        state.reputation * 0.4
        + option.player_bonus
        + boost.player_bonus
        + rng() * (option.variance + boost.variance) * (1 - accuracy * DUEL_ACCURACY_DAMPING)
        + gear_bonus(state)
        - DUEL_HEAT_PENALTY[state.heat_level]
        + (accuracy - 0.5) * timing_scale(duel.round, duel.total_rounds)
    )
    opponent = challenger['base_skill'] + rng() * DUEL_OPPONENT_SPREAD - boost.opponent_penalty

    duel = replace(
        duel,
        player_score=duel.player_score + player,
        opponent_score=duel.opponent_score + opponent,
        rep_bonus_earned=duel.rep_bonus_earned + option.rep_bonus + boost.rep_bonus,
        last_reaction=option.reaction,
        round=duel.round + 1,
        phase='pick',
        selected_option_id=None,
        selected_boost_id=None,
    )
    notes = [msg(option.reaction, 'event')]

    if duel.round > duel.total_rounds:
        return _settle(log(state, *notes), duel, challenger)

    duel = replace(duel, options=_round_options(rng, challenger, duel.round))
    notes.append(msg(f"Round {duel.round} of {duel.total_rounds}. {round(duel.player_score)} - {round(duel.opponent_score)}.", 'info'))
    return log(replace(state, pending_duel=duel), *notes)


def _reward(state: GameState, duel: DuelState, challenger: dict) -> GameState:
    rng = stream_for(state.run_seed, 'duel', state.day, duel.challenger_id, 'reward')
    if not chance(rng, challenger['reward_chance']):
        return state

    template = draw_template(rng, NON_LEGENDARY)
    condition = draw_condition(rng)
    if challenger['reward'] == 'listing':
        price = money(template['base_price'] * REWARD_LISTING_RATE)
        listing = build_listing(
            template, condition, price,
            listing_id(state.day, state.location, f"tip {template['name']}", len(state.market)),
        )
        state = replace(state, market=state.market + (listing,))
        return log(state, msg(f"{duel.challenger_label} tips you off: a {listing.name} for ${price:,}.", 'event'))

    listing = build_listing(
        template, condition, template['base_price'],
        listing_id(state.day, state.location, f"gift {template['name']}", 0),
    )
    if not state.has_room_for(listing.slots):
        return log(state, msg(f"{duel.challenger_label} offers you a {listing.name}, but you've got no room.", 'info'))
    owned = make_owned(state, listing, 0)
    state = replace(state, inventory=state.inventory + (owned,))
    return log(state, msg(f"{duel.challenger_label} hands you a {listing.name}. Respect.", 'success'))


def _settle(state: GameState, duel: DuelState, challenger: dict) -> GameState:
    margin = duel.player_score - duel.opponent_score
    state = replace(state, pending_duel=None)

    if margin >= DUEL_WIN_MARGIN:
        cash = state.cash + (duel.wager if duel.wager_accepted else 0)
        reputation = clamp_rep(state.reputation + challenger['rep_bonus'] + duel.rep_bonus_earned)
        state = log(replace(state, cash=cash, reputation=reputation),
                    msg(f"You win the jam against the {duel.challenger_label}.", 'success'))
        if duel.wager_accepted and duel.wager:
            state = log(state, msg(f"You pocket the ${duel.wager:,} wager.", 'success'))
        return _reward(state, duel, challenger)

    if margin <= -DUEL_WIN_MARGIN:
        lost = min(duel.wager, state.cash) if duel.wager_accepted else 0
        state = replace(
            state,
            cash=state.cash - lost,
            reputation=clamp_rep(state.reputation - challenger['rep_loss']),
        )
        note = f"The {duel.challenger_label} takes it."
        if lost:
            note += f" You hand over ${lost:,}."
        return log(state, msg(note, 'warning'))

    return log(state, msg("Dead even. The crowd calls it a draw.", 'info'))


def decline_duel(state: GameState) -> GameState:
    duel = state.pending_duel
    if duel is None:
        return _no_duel(state)
    if duel.round != 1:
        return log(state, msg("Too late to back out now.", 'warning'))

    state = replace(state, pending_duel=None, reputation=clamp_rep(state.reputation - DUEL_DECLINE_REP_LOSS))
    return log(state, msg(f"You wave off the {duel.challenger_label}. A few people laugh.", 'warning'))
