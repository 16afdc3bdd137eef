"""Info page sections and tutorial videos stored in site_content."""

import html
import re
from typing import Optional
from urllib.parse import parse_qs, urlparse

from .auth import Session, require_access
from .constants import SITE_CONTENT_TABLE
from .schemas import InfoSection, Video
from .store import DocumentStore

INFO_DOCUMENT_ID = 'info'
VIDEOS_DOCUMENT_ID = 'videos'


def render_markdown(text: str) -> str:
    """
    Render the small markdown subset used on the info page to HTML.

    Supports **bold**, *italic*, [links](url), '- ' bullets, '1. ' numbered
    items and line breaks. Input is HTML-escaped first.
    """
    out = html.escape(text or '', quote=False)
    out = re.sub(r'\*\*(.+?)\*\*', r'<strong>\1</strong>', out)
    out = re.sub(r'\*(.+?)\*', r'<em>\1</em>', out)
    out = re.sub(r'\[(.+?)\]\((.+?)\)', r'<a href="\2" target="_blank" rel="noopener">\1</a>', out)
    out = re.sub(r'^- (.+)$', r'<li>\1</li>', out, flags=re.MULTILINE)
    out = re.sub(r'(<li>.*</li>)', r'<ul>\1</ul>', out, count=1, flags=re.DOTALL)
    out = re.sub(r'^(\d+)\. (.+)$', r'<li>\2</li>', out, flags=re.MULTILINE)
    return out.replace('\n', '<br/>')


def _video_id(url: str) -> Optional[str]:
    if 'youtu.be/' in url:
        return url.split('youtu.be/', 1)[1].split('?', 1)[0] or None
    if 'youtube.com' in url:
        return parse_qs(urlparse(url).query).get('v', [None])[0]
    return None


def embed_url(url: str) -> str:
    """Player URL for YouTube/Vimeo links; other URLs are returned unchanged."""
    if 'youtube.com' in url or 'youtu.be' in url:
        return f'https://www.youtube.com/embed/{_video_id(url)}'
    if 'vimeo.com/' in url:
        video_id = url.split('vimeo.com/', 1)[1].split('?', 1)[0]
        return f'https://player.vimeo.com/video/{video_id}'
    return url


def thumbnail_url(url: str) -> Optional[str]:
    """YouTube thumbnail for a video link, None for other hosts."""
    if 'youtube.com' in url or 'youtu.be' in url:
        return f'https://img.youtube.com/vi/{_video_id(url)}/mqdefault.jpg'
    return None


def _content(store: DocumentStore, doc_id: str) -> list:
    doc = store.get(SITE_CONTENT_TABLE, doc_id)
    return (doc or {}).get('content') or []


def _save_content(store: DocumentStore, doc_id: str, content: list) -> None:
    store.upsert(SITE_CONTENT_TABLE, {'id': doc_id, 'content': content})


def load_info(store: DocumentStore) -> list[InfoSection]:
    return [InfoSection.model_validate(s) for s in _content(store, INFO_DOCUMENT_ID)]


def save_info(store: DocumentStore, session: Session, sections: list[InfoSection]) -> None:
    """Replace every info section (master access)."""
    require_access(session, 'master')
    _save_content(store, INFO_DOCUMENT_ID, [s.model_dump() for s in sections])


def load_videos(store: DocumentStore) -> list[Video]:
    return [Video.model_validate(v) for v in _content(store, VIDEOS_DOCUMENT_ID)]


def add_video(store: DocumentStore, session: Session, title: str, url: str) -> Video:
    """Append a video (master access)."""
    require_access(session, 'master')
    video = Video(title=title.strip(), url=url.strip())
    videos = load_videos(store) + [video]
    _save_content(store, VIDEOS_DOCUMENT_ID, [v.model_dump() for v in videos])
    return video


def remove_video(store: DocumentStore, session: Session, video_id: str) -> bool:
    require_access(session, 'master')
    videos = load_videos(store)
    kept = [v for v in videos if v.id != video_id]
    if len(kept) == len(videos):
        return False
    _save_content(store, VIDEOS_DOCUMENT_ID, [v.model_dump() for v in kept])
    return True
