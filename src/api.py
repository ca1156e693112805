import os
import sqlite3

from flask import Flask, jsonify, request
from flask_cors import CORS

from game_engine import GameEngine, InvalidScorePayload
from migration_runner import run_all_pending
from scoring import calculate_score, inventory_value, leaderboard_payload, share_text
from setup_sqlite import create_database, get_db_path
from state_codec import to_record

DEFAULT_SAVE_KEY = 'default'
DEFAULT_CORS_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:*", "http://127.0.0.1:*"]

# action routes: url suffix -> (engine action, body fields it reads)
ACTION_ROUTES = {
    'travel': ('travel', ('location',)),
    'end_day': ('end_day', ()),
    'buy': ('buy', ('item_id', 'insure')),
    'proof': ('proof', ('item_id',)),
    'sell': ('sell', ('item_id',)),
    'authenticate': ('authenticate', ('item_id',)),
    'luthier': ('luthier', ('item_id', 'target')),
    'tools': ('tool', ('tool',)),
    'bag': ('bag', ()),
    'auction/list': ('auction_list', ('item_id',)),
    'performance/buy': ('performance_buy', ('perf_id',)),
    'loan/draw': ('loan_draw', ('amount',)),
    'loan/repay': ('loan_repay', ('amount',)),
}

ENCOUNTER_ACTIONS = {
    'bulk_accept', 'bulk_decline', 'trade_accept', 'trade_decline',
    'mystery_proof', 'mystery_buy', 'mystery_pass',
    'auction_bid', 'auction_pass', 'repair_comp', 'repair_refuse',
}
DUEL_ACTIONS = {
    'wager': 'duel_wager',
    'choose': 'duel_choose',
    'timing': 'duel_timing',
    'decline': 'duel_decline',
}

NUMERIC_FIELDS = {'amount': int, 'max_bid': int, 'accuracy': float}


def cors_origins():
    raw = os.environ.get('FRETWARS_CORS_ORIGINS')
    if not raw:
        return DEFAULT_CORS_ORIGINS
    return [origin.strip() for origin in raw.split(',') if origin.strip()]


def state_payload(state):
    """JSON view of a run: the saved record plus values the UI derives."""
    payload = to_record(state)
    payload.update({
        'inventory_capacity': state.inventory_capacity,
        'slots_used': state.slots_used,
        'total_heat': state.total_heat,
        'heat_level': state.heat_level,
        'inventory_value': inventory_value(state),
        'score': calculate_score(state),
    })
    if state.is_game_over:
        payload['share_text'] = share_text(state)
        payload['leaderboard_payload'] = leaderboard_payload(state)
    return payload


def read_params(data, fields):
    """Pick the named fields out of a request body, coercing numbers."""
    params = {}
    for field in fields:
        if field not in data or data[field] is None:
            continue
        value = data[field]
        cast = NUMERIC_FIELDS.get(field)
        if cast is not None:
            if isinstance(value, bool):
                raise ValueError(f"{field} must be a number")
            value = cast(value)
        params[field] = value
    return params


def create_app(db_path=None):
    db_path = db_path or get_db_path()
    create_database(db_path, quiet=True)
    run_all_pending(db_path)

    app = Flask(__name__)
    CORS(app, origins=cors_origins())
    engine = GameEngine(db_path)
    app.config['ENGINE'] = engine

    def save_key_from(data):
        return str(data.get('save_key') or request.args.get('save_key') or DEFAULT_SAVE_KEY)

    def run_action(action, fields):
        data = request.get_json(silent=True) or {}
        try:
            params = read_params(data, fields)
            state = engine.perform(save_key_from(data), action, **params)
        except (TypeError, ValueError) as err:
            return jsonify({"success": False, "message": str(err)}), 400
        except sqlite3.Error as err:
            print(f"[ERROR] Database error during '{action}': {err}")
            return jsonify({"success": False, "message": "Database error."}), 500
        return jsonify({"success": True, "state": state_payload(state)})

    @app.route('/api/state', methods=['GET'])
    def get_state():
        state = engine.get_or_create(save_key_from({}))
        return jsonify(state_payload(state))

    @app.route('/api/new_run', methods=['POST'])
    def new_run():
        data = request.get_json(silent=True) or {}
        try:
            total_days = int(data.get('total_days', 21))
        except (TypeError, ValueError):
            return jsonify({"success": False, "message": "total_days must be a number."}), 400
        state = engine.new_run(save_key_from(data), total_days, data.get('run_seed') or None)
        return jsonify({"success": True, "state": state_payload(state)})

    def register(suffix, action, fields):
        def view():
            return run_action(action, fields)
        view.__name__ = 'action_' + suffix.replace('/', '_')
        app.add_url_rule(f'/api/{suffix}', view.__name__, view, methods=['POST'])

    for suffix, (action, fields) in ACTION_ROUTES.items():
        register(suffix, action, fields)

    @app.route('/api/encounter/<action>', methods=['POST'])
    def encounter_action(action):
        if action not in ENCOUNTER_ACTIONS:
            return jsonify({"success": False, "message": f"Unknown encounter action '{action}'."}), 400
        return run_action(action, ('max_bid',))

    @app.route('/api/duel/<action>', methods=['POST'])
    def duel_action(action):
        if action not in DUEL_ACTIONS:
            return jsonify({"success": False, "message": f"Unknown duel action '{action}'."}), 400
        return run_action(DUEL_ACTIONS[action], ('option_id', 'boost_id', 'accuracy'))

    @app.route('/api/scores', methods=['POST'])
    def submit_score():
        body = request.get_json(silent=True)
        try:
            result = engine.submit_score(body)
        except InvalidScorePayload as err:
            return jsonify({"ok": False, "error": "invalid_payload", "issues": err.issues}), 400
        except sqlite3.Error as err:
            print(f"[ERROR] Failed to store score: {err}")
            return jsonify({"ok": False, "error": "db_error"}), 500
        except Exception as err:
            print(f"[ERROR] Unexpected error storing score: {err}")
            return jsonify({"ok": False, "error": "server_error"}), 500
        return jsonify({"ok": True, **result})

    @app.route('/api/leaderboard/<scope>', methods=['GET'])
    def leaderboard(scope):
        if scope not in ('all-time', 'weekly'):
            return jsonify({"ok": False, "error": "not_found"}), 404
        try:
            result = engine.get_leaderboard(scope, request.args.get('limit'))
        except sqlite3.Error as err:
            print(f"[ERROR] Failed to load leaderboard: {err}")
            return jsonify({"ok": False, "error": "db_error"}), 500
        except Exception as err:
            print(f"[ERROR] Unexpected error loading leaderboard: {err}")
            return jsonify({"ok": False, "error": "server_error"}), 500
        return jsonify({"ok": True, **result})

    return app


if __name__ == '__main__':
    port = int(os.environ.get('FRETWARS_PORT', 5000))
    app = create_app()
    print("=" * 60)
    print("Fret Wars API")
    print("=" * 60)
    print(f"Database: {get_db_path()}")
    print(f"Listening on http://127.0.0.1:{port}")
    app.run(debug=True, port=port)
