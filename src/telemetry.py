"""
Fret Wars - Telemetry

Fire-and-forget gameplay events (run_started, day_advanced, run_finished,
score_submitted). Callers never look at a result and a broken sink never
interrupts play.

Sinks are plain callables taking (event, properties). Setting
FRETWARS_TELEMETRY=stdout registers the print sink at import time.
"""

import json
import os
from datetime import datetime, timezone

_sinks = []

# never forward personal data to a sink
PRIVATE_KEYS = {'email', 'email_opt_in', 'emailOptIn'}


def add_sink(sink):
    _sinks.append(sink)


def clear_sinks():
    _sinks.clear()


def stdout_sink(event, properties):
    print(f"[telemetry] {event} {json.dumps(properties, sort_keys=True, default=str)}")


def emit(event: str, properties: dict = None):
    payload = {k: v for k, v in (properties or {}).items() if k not in PRIVATE_KEYS}
    payload['ts'] = datetime.now(timezone.utc).isoformat()
    for sink in list(_sinks):
        try:
            sink(event, payload)
        except Exception as e:
            print(f"[WARNING] Telemetry sink failed for '{event}': {e}")


if os.environ.get('FRETWARS_TELEMETRY', '').lower() == 'stdout':
    add_sink(stdout_sink)
