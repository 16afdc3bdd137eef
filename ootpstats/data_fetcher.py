"""Draft dump fetching from the OOTP Perfect Team competitive page."""

import logging
import re
from datetime import date
from typing import Optional

import requests

from .constants import COMPETITIVE_URL, SITE_ORIGIN

logger = logging.getLogger('ootpstats.data_fetcher')

DUMP_LINK_RE = re.compile(r'href=["\']([^"\']*draft_dump[^"\']*)["\']', re.IGNORECASE)
DUMP_DATE_RE = re.compile(r'(\d{4})(\d{2})(\d{2})')

USER_AGENT = 'ootpstats-leaderboard/1.0'


class FetchError(Exception):
    """The listing page, the dump link or the dump itself could not be fetched."""


def find_dump_url(html: str, page_url: str = COMPETITIVE_URL, origin: str = SITE_ORIGIN) -> str:
    """
    Locate the draft dump link in the listing page HTML.

    Root-relative links are joined to the site origin, other relative
    links to the listing page.

    Raises:
        FetchError: If no draft_dump link is present
    """
    match = DUMP_LINK_RE.search(html)
    if not match:
        raise FetchError('Could not find draft CSV link on page')

    url = match.group(1)
    if url.startswith('/'):
        return origin.rstrip('/') + url
    if not url.startswith('http'):
        return page_url.rstrip('/') + '/' + url
    return url


def dump_date_from_url(url: str, today: Optional[date] = None) -> str:
    """ISO date from the first YYYYMMDD run in the URL, else today."""
    match = DUMP_DATE_RE.search(url)
    if match:
        return '-'.join(match.groups())
    return (today or date.today()).isoformat()


class DraftDumpFetcher:
    """Fetches the competitive listing page and the draft dump it links to."""

    def __init__(
        self,
        page_url: str = COMPETITIVE_URL,
        origin: str = SITE_ORIGIN,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.page_url = page_url
        self.origin = origin
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault('User-Agent', USER_AGENT)
        self._dump_url: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> 'DraftDumpFetcher':
        return cls(
            page_url=settings.competitive_url,
            origin=settings.site_origin,
            timeout=settings.request_timeout,
        )

    def _get_text(self, url: str) -> str:
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f'Failed to fetch {url}: {e}') from e
        return response.text

    @property
    def dump_url(self) -> str:
        """Lazy lookup of the dump link on the listing page."""
        if self._dump_url is None:
            logger.info(f'Loading listing page {self.page_url}...')
            html = self._get_text(self.page_url)
            self._dump_url = find_dump_url(html, self.page_url, self.origin)
            logger.info(f'Found CSV URL: {self._dump_url}')
        return self._dump_url

    def fetch_csv(self) -> str:
        """Download the draft dump CSV text."""
        logger.info(f'Downloading draft dump {self.dump_url}...')
        return self._get_text(self.dump_url)
