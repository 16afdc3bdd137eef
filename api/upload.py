"""Vercel Serverless Function for tournament management and stat uploads."""

from http.server import BaseHTTPRequestHandler
from pathlib import Path
import base64
import binascii
import json
import logging

from ootpstats.auth import AuthError, authenticate
from ootpstats.config import get_settings
from ootpstats.content import (
    add_video,
    embed_url,
    load_info,
    load_videos,
    remove_video,
    render_markdown,
    save_info,
    thumbnail_url,
)
from ootpstats.logging_config import setup_logging
from ootpstats.schemas import InfoSection
from ootpstats.store import JsonFileStore
from ootpstats.tables import filter_roster, handedness_counts, positions, roster_frame, sort_roster
from ootpstats.tournaments import TournamentService
from ootpstats.validators import UploadRejected

logger = logging.getLogger('ootpstats.api.upload')

# Access level each action needs
ACTION_LEVELS = {
    "validate": "upload",
    "create": "upload",
    "upload": "upload",
    "delete": "master",
    "save_info": "master",
    "add_video": "master",
    "remove_video": "master",
}


def site_content(store) -> dict:
    """Info sections with rendered HTML and videos with player URLs."""
    return {
        "info": [
            {**s.model_dump(), "html": render_markdown(s.content)}
            for s in load_info(store)
        ],
        "videos": [
            {**v.model_dump(), "embed_url": embed_url(v.url), "thumbnail_url": thumbnail_url(v.url)}
            for v in load_videos(store)
        ],
    }


def roster_view(service: TournamentService, data: dict) -> dict:
    """
    One tournament roster, searched, filtered and sorted.

    Request fields: tournament_id, stat_type ('batting' by default),
    search, position, filters, sort, direction.
    """
    tournament = service.get_tournament(data.get("tournament_id", ""))
    stat_type = data.get("stat_type") or "batting"
    records = tournament.roster(stat_type)

    df = roster_frame(records)
    df = filter_roster(
        df,
        search=data.get("search") or "",
        position=data.get("position") or "All",
        filters=data.get("filters"),
    )
    df = sort_roster(df, data.get("sort"), data.get("direction") or "asc")

    return {
        "tournament": {"id": tournament.id, "name": tournament.name},
        "stat_type": stat_type,
        "rows": df.to_dicts(),
        "total": len(records),
        "positions": positions(records),
        "handedness": handedness_counts(tournament.batting, tournament.pitching),
    }


def handle_action(data: dict, store, settings) -> tuple[int, dict]:
    """Run one API action and return (status, body)."""
    action = data.get("action", "upload")

    # Read-only actions need no password
    if action == "list":
        service = TournamentService(store, settings)
        tournaments = [
            {"id": t.id, "name": t.name, "created_at": t.created_at,
             "batting": len(t.batting), "pitching": len(t.pitching)}
            for t in service.list_tournaments()
        ]
        return 200, {"tournaments": tournaments}
    if action == "roster":
        if not data.get("tournament_id"):
            return 400, {"error": "Missing tournament_id"}
        return 200, roster_view(TournamentService(store, settings), data)
    if action == "content":
        return 200, site_content(store)

    required = ACTION_LEVELS.get(action)
    if required is None:
        return 400, {"error": f"Unknown action: {action}"}

    password = data.get("password")
    if not password:
        return 400, {"error": "Missing password"}

    session = authenticate(store, password, required)
    service = TournamentService(store, settings)

    if action == "validate":
        return 200, {"success": True, "level": session.level}

    if action == "create":
        tournament = service.create_tournament(session, data.get("name", ""))
        return 200, {"success": True, "id": tournament.id, "name": tournament.name}

    if action == "delete":
        tournament_id = data.get("tournament_id")
        if not tournament_id:
            return 400, {"error": "Missing tournament_id"}
        if not service.delete_tournament(session, tournament_id):
            return 404, {"error": f"Tournament not found: {tournament_id}"}
        return 200, {"success": True}

    if action == "save_info":
        sections = data.get("sections")
        if not isinstance(sections, list):
            return 400, {"error": "sections must be a list"}
        save_info(store, session, [InfoSection.model_validate(s) for s in sections])
        return 200, {"success": True, "sections": len(sections)}

    if action == "add_video":
        video = add_video(store, session, data.get("title", ""), data.get("url", ""))
        return 200, {"success": True, "video": video.model_dump()}

    if action == "remove_video":
        if not remove_video(store, session, data.get("video_id", "")):
            return 404, {"error": "Video not found"}
        return 200, {"success": True}

    tournament_id = data.get("tournament_id")
    filename = data.get("filename")
    encoded = data.get("content")
    if not all([tournament_id, filename, encoded]):
        return 400, {"error": "Missing required fields for upload"}

    try:
        content = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return 400, {"error": "File content must be base64 encoded"}

    result = service.upload_stats(session, tournament_id, filename, content, data.get("stat_type"))
    return 200, {"success": True, **result.to_dict()}


class handler(BaseHTTPRequestHandler):
    def do_OPTIONS(self):
        """Handle CORS preflight - no auth needed."""
        self.send_response(200)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.send_header("Access-Control-Max-Age", "86400")
        self.send_header("Content-Length", "0")
        self.end_headers()

    def do_POST(self):
        setup_logging()
        settings = get_settings()
        store = JsonFileStore(Path(settings.data_dir) / "store")

        try:
            content_length = int(self.headers.get("Content-Length", 0))
            body = self.rfile.read(content_length)
            data = json.loads(body.decode()) if body else {}
            status, payload = handle_action(data, store, settings)
            return self._send_json(status, payload)

        except json.JSONDecodeError:
            return self._send_json(400, {"error": "Invalid JSON"})
        except AuthError as e:
            return self._send_json(401, {"error": str(e)})
        except UploadRejected as e:
            return self._send_json(400, e.to_dict())
        except KeyError as e:
            return self._send_json(404, {"error": e.args[0] if e.args else "Not found"})
        except ValueError as e:
            return self._send_json(400, {"error": str(e)})
        except Exception as e:
            logger.exception("Upload API request failed")
            return self._send_json(500, {"error": str(e)})

    def _send_json(self, status_code: int, data: dict):
        """Send JSON response with CORS headers."""
        self.send_response(status_code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def log_message(self, format, *args):
        """Suppress default logging."""
        pass
