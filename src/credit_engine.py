"""
Fret Wars - Credit Line

Loan lifecycle: draw, repay, and the daily due-date/default/garnish tick.

The balance due is fixed at draw time (principal x (1 + rate)) and never
accrues further. A default freezes the line for the rest of the run, even
after the balance is cleared.
"""

from dataclasses import replace
from typing import List, Tuple

from catalog_data import CREDIT_TIERS, GARNISH_RATE, LOAN_DEFAULT_REP_LOSS, LOAN_TERM_DAYS
from game_models import GameState, Loan, TerminalMessage, clamp, clamp_rep, log, money, msg


def credit_terms(reputation: int) -> Tuple[int, float]:
    """
    Credit limit and interest rate for a reputation score.

    Returns:
        tuple: (limit, rate); (0, 0.0) below the lowest tier
    """
    for min_rep, limit, rate in CREDIT_TIERS:
        if reputation >= min_rep:
            return limit, rate
    return 0, 0.0


def draw_loan(state: GameState, amount) -> GameState:
    credit = state.credit
    if credit.frozen:
        return log(state, msg("Your credit line is frozen after a missed payment.", 'warning'))
    if credit.loan is not None:
        return log(state, msg("Pay off your current loan before drawing again.", 'warning'))

    limit, rate = credit_terms(state.reputation)
    if limit == 0:
        return log(state, msg("No lender will touch you at this reputation.", 'warning'))

    principal = int(clamp(int(amount or 0), 0, limit))
    if principal <= 0:
        return log(state, msg("Pick an amount to borrow.", 'warning'))

    loan = Loan(
        principal=principal,
        balance_due=money(principal * (1 + rate)),
        rate=rate,
        drawn_day=state.day,
        due_day=state.day + LOAN_TERM_DAYS,
    )
    state = replace(state, cash=state.cash + principal, credit=replace(credit, loan=loan))
    return log(state, msg(
        f"Borrowed ${principal:,} at {round(rate * 100)}%. ${loan.balance_due:,} due on day {loan.due_day}.",
        'event',
    ))


def repay_loan(state: GameState, amount) -> GameState:
    loan = state.credit.loan
    if loan is None:
        return log(state, msg("You don't owe anybody. Yet.", 'info'))

    payment = min(int(amount or 0), state.cash, loan.balance_due)
    if payment <= 0:
        return log(state, msg("Nothing to put toward the loan.", 'warning'))

    remaining = loan.balance_due - payment
    if remaining == 0:
        credit = replace(state.credit, loan=None)
        note = msg(f"Paid ${payment:,}. Loan cleared.", 'success')
    else:
        credit = replace(state.credit, loan=replace(loan, balance_due=remaining))
        note = msg(f"Paid ${payment:,}. ${remaining:,} still owed.", 'info')

    return log(replace(state, cash=state.cash - payment, credit=credit), note)


def tick_credit(state: GameState) -> Tuple[GameState, List[TerminalMessage]]:
    """
    Daily credit step, run after the day counter has moved.

    Past due: the default penalty lands once (reputation, freeze), then a
    garnish of min(balance, 30% of cash) is taken every day until cleared.
    Due today: warning only.
    """
    loan = state.credit.loan
    if loan is None:
        return state, []

    messages = []
    if state.day > loan.due_day:
        credit = state.credit
        reputation = state.reputation
        if not loan.penalty_applied:
            loan = replace(loan, defaulted=True, penalty_applied=True)
            credit = replace(credit, frozen=True)
            reputation = clamp_rep(reputation - LOAN_DEFAULT_REP_LOSS)
            messages.append(msg("Loan past due. The lender freezes your line and talks.", 'warning'))

        cash = state.cash
        garnish = min(loan.balance_due, money(cash * GARNISH_RATE))
        if garnish > 0:
            cash -= garnish
            loan = replace(loan, balance_due=loan.balance_due - garnish)
            messages.append(msg(f"Collector garnished ${garnish:,}.", 'warning'))

        if loan.balance_due == 0:
            credit = replace(credit, loan=None)
            messages.append(msg("Defaulted loan finally settled.", 'info'))
        else:
            credit = replace(credit, loan=loan)

        return replace(state, cash=cash, reputation=reputation, credit=credit), messages

    if state.day == loan.due_day:
        messages.append(msg(f"Loan of ${loan.balance_due:,} is due today.", 'warning'))

    return state, messages
