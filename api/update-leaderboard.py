"""Vercel Serverless Function for the weekly draft leaderboard update."""

from http.server import BaseHTTPRequestHandler
from pathlib import Path
import hmac
import json
import logging

from ootpstats.config import get_settings
from ootpstats.leaderboard import run_leaderboard_update
from ootpstats.logging_config import setup_logging
from ootpstats.store import JsonFileStore

logger = logging.getLogger('ootpstats.api.update_leaderboard')


def is_authorized(headers, method: str, settings) -> bool:
    """Allow Vercel cron calls, bearer-secret calls, and GETs outside production."""
    if headers.get("x-vercel-cron") == "1":
        return True

    secret = settings.cron_secret
    auth_header = headers.get("Authorization") or ""
    # bytes, since compare_digest rejects non-ASCII str
    if secret and hmac.compare_digest(auth_header.encode(), f"Bearer {secret}".encode()):
        return True

    return not settings.is_production and method == "GET"


def run_update(settings) -> tuple[int, dict]:
    """Run the update and map the outcome to (status, body)."""
    store = JsonFileStore(Path(settings.data_dir) / "store")
    try:
        return 200, run_leaderboard_update(settings, store)
    except Exception as e:
        logger.exception("Leaderboard update failed")
        return 500, {"error": str(e)}


class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        self._handle("GET")

    def do_POST(self):
        self._handle("POST")

    def _handle(self, method: str):
        setup_logging()
        settings = get_settings()

        if not is_authorized(self.headers, method, settings):
            return self._send_json(401, {"error": "Unauthorized"})

        status, body = run_update(settings)
        return self._send_json(status, body)

    def _send_json(self, status_code: int, data: dict):
        """Send JSON response."""
        self.send_response(status_code)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def log_message(self, format, *args):
        """Suppress default logging."""
        pass
