"""
Fret Wars - Game Engine

SQLite-backed shell around the simulation core:
- Save slots (one JSON-serialized GameState per save key)
- Run lifecycle (new run, action dispatch, autosave)
- Leaderboard submissions and queries

The core never touches the database; every action here is
load -> pure transform -> save.
"""

import json
import re
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Optional

import telemetry
from catalog_data import STANDARD_RUN_DAYS
from credit_engine import draw_loan, repay_loan
from day_cycle import end_day, new_game, travel
from duel_engine import choose_option, decline_duel, submit_timing, toggle_wager
from encounter_engine import (
    accept_bulk_lot, accept_repair_comp, accept_trade, ask_mystery_proof, buy_mystery_listing,
    decline_bulk_lot, decline_trade, pass_mystery_listing, pass_world_auction,
    refuse_repair_comp, resolve_world_auction,
)
from game_models import GameState
from player_actions import (
    ask_for_proof, authenticate_item, buy_item, buy_performance_item, buy_tool,
    list_for_auction, send_to_luthier, sell_item, upgrade_bag,
)
from scoring import calculate_score, is_eligible
from state_codec import from_record, to_record

DEFAULT_LEADERBOARD_LIMIT = 50
MAX_LEADERBOARD_LIMIT = 200

LEADERBOARD_COLUMNS = (
    "id, created_at, display_name, score, day, total_days, cash, reputation, "
    "inventory_slots_used, inventory_capacity, best_flip_name, best_flip_profit, "
    "rarest_sold_name, rarest_sold_rarity"
)

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


class UnknownAction(ValueError):
    pass


class InvalidScorePayload(ValueError):
    """Score submission failed validation; `issues` lists what was wrong."""

    def __init__(self, issues):
        super().__init__("; ".join(issues))
        self.issues = issues


def _resolve_auction(state, params):
    state, _ = resolve_world_auction(state, params.get('max_bid'))
    return state


# action name -> transform(state, params)
ACTIONS = {
    'travel': lambda s, p: travel(s, p.get('location', '')),
    'end_day': lambda s, p: end_day(s),
    'buy': lambda s, p: buy_item(s, p.get('item_id', ''), bool(p.get('insure', False))),
    'proof': lambda s, p: ask_for_proof(s, p.get('item_id', '')),
    'sell': lambda s, p: sell_item(s, p.get('item_id', '')),
    'authenticate': lambda s, p: authenticate_item(s, p.get('item_id', '')),
    'luthier': lambda s, p: send_to_luthier(s, p.get('item_id', ''), p.get('target')),
    'tool': lambda s, p: buy_tool(s, p.get('tool', '')),
    'bag': lambda s, p: upgrade_bag(s),
    'auction_list': lambda s, p: list_for_auction(s, p.get('item_id', '')),
    'performance_buy': lambda s, p: buy_performance_item(s, p.get('perf_id', '')),
    'loan_draw': lambda s, p: draw_loan(s, p.get('amount', 0)),
    'loan_repay': lambda s, p: repay_loan(s, p.get('amount', 0)),
    'bulk_accept': lambda s, p: accept_bulk_lot(s),
    'bulk_decline': lambda s, p: decline_bulk_lot(s),
    'trade_accept': lambda s, p: accept_trade(s),
    'trade_decline': lambda s, p: decline_trade(s),
    'mystery_proof': lambda s, p: ask_mystery_proof(s),
    'mystery_buy': lambda s, p: buy_mystery_listing(s),
    'mystery_pass': lambda s, p: pass_mystery_listing(s),
    'auction_bid': _resolve_auction,
    'auction_pass': lambda s, p: pass_world_auction(s),
    'repair_comp': lambda s, p: accept_repair_comp(s),
    'repair_refuse': lambda s, p: refuse_repair_comp(s),
    'duel_wager': lambda s, p: toggle_wager(s),
    'duel_choose': lambda s, p: choose_option(s, p.get('option_id', ''), p.get('boost_id')),
    'duel_timing': lambda s, p: submit_timing(s, p.get('accuracy', 0.0)),
    'duel_decline': lambda s, p: decline_duel(s),
}


def start_of_utc_week(now: Optional[datetime] = None) -> datetime:
    """Monday 00:00 UTC of the current week."""
    now = now or datetime.now(timezone.utc)
    midnight = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=midnight.weekday())


def clamp_limit(raw) -> int:
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_LEADERBOARD_LIMIT
    if limit == 0:
        return DEFAULT_LEADERBOARD_LIMIT
    return max(1, min(MAX_LEADERBOARD_LIMIT, limit))


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _trimmed(value, max_len, field, issues, min_len=1):
    if not isinstance(value, str):
        issues.append(f"{field} must be a string")
        return None
    value = value.strip()
    if not min_len <= len(value) <= max_len:
        issues.append(f"{field} must be {min_len}-{max_len} characters")
        return None
    return value


def validate_score_payload(body) -> dict:
    """
    Check a leaderboard submission and normalize it.

    Raises:
        InvalidScorePayload: with every issue found
    """
    if not isinstance(body, dict):
        raise InvalidScorePayload(["payload must be a JSON object"])

    issues = []
    for field in ('score', 'day', 'totalDays'):
        if not _is_int(body.get(field)):
            issues.append(f"{field} must be an integer")
    if _is_int(body.get('score')) and body['score'] < 0:
        issues.append("score must be >= 0")
    for field in ('day', 'totalDays'):
        if _is_int(body.get(field)) and body[field] < 1:
            issues.append(f"{field} must be >= 1")
    if not isinstance(body.get('completed'), bool):
        issues.append("completed must be a boolean")

    for field in ('cash', 'reputation', 'inventorySlotsUsed', 'inventoryCapacity'):
        value = body.get(field)
        if value is not None and (not _is_int(value) or value < 0):
            issues.append(f"{field} must be a non-negative integer")
    if _is_int(body.get('reputation')) and body['reputation'] > 100:
        issues.append("reputation must be <= 100")

    clean = dict(body)
    display_name = body.get('displayName')
    if display_name is not None:
        clean['displayName'] = _trimmed(display_name, 32, 'displayName', issues, min_len=0)
    if body.get('runSeed') is not None:
        clean['runSeed'] = _trimmed(body['runSeed'], 80, 'runSeed', issues)
    if body.get('clientVersion') is not None:
        clean['clientVersion'] = _trimmed(body['clientVersion'], 40, 'clientVersion', issues)

    best_flip = body.get('bestFlip')
    if best_flip is not None:
        if not isinstance(best_flip, dict) or not _is_int(best_flip.get('profit')):
            issues.append("bestFlip must have a name and an integer profit")
        else:
            clean['bestFlip'] = {'name': _trimmed(best_flip.get('name'), 80, 'bestFlip.name', issues),
                                 'profit': best_flip['profit']}
    rarest = body.get('rarestSold')
    if rarest is not None:
        if not isinstance(rarest, dict):
            issues.append("rarestSold must have a name and a rarity")
        else:
            clean['rarestSold'] = {'name': _trimmed(rarest.get('name'), 80, 'rarestSold.name', issues),
                                   'rarity': _trimmed(rarest.get('rarity'), 24, 'rarestSold.rarity', issues)}

    email = body.get('email')
    if email is not None and (not isinstance(email, str) or not EMAIL_PATTERN.match(email.strip())):
        issues.append("email is not a valid address")
    if body.get('emailOptIn') is not None and not isinstance(body['emailOptIn'], bool):
        issues.append("emailOptIn must be a boolean")

    if issues:
        raise InvalidScorePayload(issues)

    clean['displayName'] = clean.get('displayName') or 'Anonymous'
    if isinstance(email, str):
        clean['email'] = email.strip()
    return clean


class GameEngine:
    """Save slots, run lifecycle and leaderboard for Fret Wars."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    @contextmanager
    def get_db(self):
        """Get a database connection (autocommit, rows as sqlite3.Row)."""
        conn = sqlite3.connect(str(self.db_path), isolation_level=None)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    # --- Saves ---

    def load_game(self, save_key: str) -> Optional[GameState]:
        with self.get_db() as conn:
            row = conn.execute(
                "SELECT state_json FROM game_saves WHERE save_key = ?", (save_key,)
            ).fetchone()
        if row is None:
            return None
        try:
            raw = json.loads(row['state_json'])
        except ValueError:
            print(f"[WARNING] Save '{save_key}' is unreadable. Starting fresh.")
            return None
        return from_record(raw)

    def save_game(self, save_key: str, state: GameState):
        with self.get_db() as conn:
            conn.execute("""
                INSERT INTO game_saves (save_key, run_seed, state_json, updated_at)
                VALUES (?, ?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(save_key) DO UPDATE SET
                    run_seed = excluded.run_seed,
                    state_json = excluded.state_json,
                    updated_at = excluded.updated_at
            """, (save_key, state.run_seed, json.dumps(to_record(state))))

    def list_saves(self, limit: int = 10) -> list:
        with self.get_db() as conn:
            rows = conn.execute("""
                SELECT save_key, run_seed, updated_at FROM game_saves
                ORDER BY updated_at DESC LIMIT ?
            """, (limit,)).fetchall()
        return [dict(row) for row in rows]

    # --- Runs ---

    def new_run(self, save_key: str, total_days: int = STANDARD_RUN_DAYS,
                run_seed: Optional[str] = None) -> GameState:
        state = new_game(run_seed, total_days)
        self.save_game(save_key, state)
        telemetry.emit('run_started', {'run_seed': state.run_seed, 'total_days': state.total_days})
        return state

    def get_or_create(self, save_key: str) -> GameState:
        state = self.load_game(save_key)
        if state is None:
            state = self.new_run(save_key)
        return state

    def perform(self, save_key: str, action: str, **params) -> GameState:
        """
        Apply one player action to a saved run and save the result.

        Raises:
            UnknownAction: if the action name isn't recognized
        """
        handler = ACTIONS.get(action)
        if handler is None:
            raise UnknownAction(f"Unknown action '{action}'")

        before = self.get_or_create(save_key)
        after = handler(before, params)
        self.save_game(save_key, after)

        if after.day != before.day:
            telemetry.emit('day_advanced', {'run_seed': after.run_seed, 'day': after.day, 'location': after.location})
        if after.is_game_over and not before.is_game_over:
            telemetry.emit('run_finished', {'run_seed': after.run_seed, 'score': calculate_score(after)})
        return after

    # --- Leaderboard ---

    def submit_score(self, body) -> dict:
        """
        Validate and store a leaderboard submission.

        Eligibility is always computed here, never taken from the client.

        Returns:
            dict: {'id': row id, 'eligible': bool}
        """
        payload = validate_score_payload(body)
        eligible = is_eligible(payload)
        opted_in = bool(payload.get('emailOptIn')) and bool(payload.get('email'))
        best_flip = payload.get('bestFlip') or {}
        rarest = payload.get('rarestSold') or {}

        with self.get_db() as conn:
            cursor = conn.execute("""
                INSERT INTO scores (
                    display_name, score, run_seed, day, total_days, completed, eligible,
                    cash, reputation, inventory_slots_used, inventory_capacity,
                    best_flip_name, best_flip_profit, rarest_sold_name, rarest_sold_rarity,
                    email, email_opt_in, opt_in_at, client_version
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                payload['displayName'], payload['score'], payload.get('runSeed'),
                payload['day'], payload['totalDays'], int(payload['completed']), int(eligible),
                payload.get('cash'), payload.get('reputation'),
                payload.get('inventorySlotsUsed'), payload.get('inventoryCapacity'),
                best_flip.get('name'), best_flip.get('profit'),
                rarest.get('name'), rarest.get('rarity'),
                payload['email'] if opted_in else None, int(opted_in),
                datetime.now(timezone.utc).isoformat() if opted_in else None,
                payload.get('clientVersion'),
            ))
            score_id = cursor.lastrowid

        telemetry.emit('score_submitted', {'score': payload['score'], 'eligible': eligible})
        return {'id': score_id, 'eligible': eligible}

    def get_leaderboard(self, scope: str = 'all-time', limit=None, now: Optional[datetime] = None) -> dict:
        """
        Ranked eligible scores, highest first (newest first on ties).

        scope 'weekly' only counts submissions since Monday 00:00 UTC.
        """
        limit = clamp_limit(DEFAULT_LEADERBOARD_LIMIT if limit is None else limit)
        query = f"SELECT {LEADERBOARD_COLUMNS} FROM scores WHERE eligible = 1"
        args = []
        since = None
        if scope == 'weekly':
            since = start_of_utc_week(now).strftime('%Y-%m-%dT%H:%M:%S.000Z')
            query += " AND created_at >= ?"
            args.append(since)
        query += " ORDER BY score DESC, created_at DESC LIMIT ?"
        args.append(limit)

        with self.get_db() as conn:
            rows = [dict(row) for row in conn.execute(query, args).fetchall()]

        result = {'rows': rows}
        if since is not None:
            result['since'] = since
        return result
