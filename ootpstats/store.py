"""Document store used by the tournament service and the leaderboard job.

Documents are plain dicts with an 'id' key, grouped into named tables.
There are no transactions: every write is last-write-wins.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from .schemas import new_id
from .utils import load_json, save_json

logger = logging.getLogger('ootpstats.store')


class StoreError(Exception):
    """A store read or write failed."""


class DocumentStore:
    """
    Interface for the persistent store.

    Subclasses implement table loading and saving; the query helpers are
    shared.
    """

    def _load_table(self, table: str) -> dict[str, dict]:
        raise NotImplementedError

    def _save_table(self, table: str, rows: dict[str, dict]) -> None:
        raise NotImplementedError

    def get(self, table: str, doc_id: str) -> Optional[dict]:
        """Return the document with doc_id, or None."""
        doc = self._load_table(table).get(doc_id)
        return dict(doc) if doc is not None else None

    def select(self, table: str, **equals: Any) -> list[dict]:
        """Return documents whose fields equal every keyword given."""
        return [
            dict(doc)
            for doc in self._load_table(table).values()
            if all(doc.get(key) == value for key, value in equals.items())
        ]

    def insert(self, table: str, docs: Iterable[dict]) -> list[dict]:
        """
        Insert new documents, assigning ids where missing.

        Raises:
            StoreError: If a document id already exists (nothing is written)
        """
        rows = self._load_table(table)
        inserted = []
        for doc in docs:
            doc = dict(doc)
            doc.setdefault('id', new_id())
            if doc['id'] in rows:
                raise StoreError(f'Duplicate id {doc["id"]!r} in {table}')
            rows[doc['id']] = doc
            inserted.append(doc)
        self._save_table(table, rows)
        return inserted

    def upsert(self, table: str, doc: dict) -> dict:
        """Insert or wholly replace the document with doc['id']."""
        if not doc.get('id'):
            raise StoreError(f'Cannot upsert into {table} without an id')
        rows = self._load_table(table)
        rows[doc['id']] = dict(doc)
        self._save_table(table, rows)
        return dict(doc)

    def delete(self, table: str, doc_id: str) -> bool:
        """Delete one document; returns False if it did not exist."""
        rows = self._load_table(table)
        if doc_id not in rows:
            return False
        del rows[doc_id]
        self._save_table(table, rows)
        return True

    def delete_where(self, table: str, **equals: Any) -> int:
        """Delete documents matching every keyword; returns how many were removed."""
        rows = self._load_table(table)
        keep = {
            doc_id: doc
            for doc_id, doc in rows.items()
            if not all(doc.get(key) == value for key, value in equals.items())
        }
        removed = len(rows) - len(keep)
        if removed:
            self._save_table(table, keep)
        return removed


class JsonFileStore(DocumentStore):
    """
    Store keeping each table in <root>/<table>.json as {id: document}.

    Example:
        store = JsonFileStore('data/store')
        store.upsert('site_content', {'id': 'videos', 'content': []})
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def _path(self, table: str) -> Path:
        if not table or '/' in table or table.startswith('.'):
            raise StoreError(f'Invalid table name: {table!r}')
        return self.root / f'{table}.json'

    def _load_table(self, table: str) -> dict[str, dict]:
        path = self._path(table)
        if not path.exists():
            return {}
        try:
            data = load_json(path)
        except json.JSONDecodeError as e:
            raise StoreError(f'Table {table} is not valid JSON: {e.msg}') from e
        if not isinstance(data, dict):
            raise StoreError(f'Table {table} is corrupt (expected an object)')
        return data

    def _save_table(self, table: str, rows: dict[str, dict]) -> None:
        try:
            save_json(self._path(table), rows)
        except (OSError, TypeError) as e:
            raise StoreError(f'Failed to write {table}: {e}') from e
        logger.debug(f'Saved {len(rows)} rows to {table}')


class MemoryStore(DocumentStore):
    """In-process store for tests and dry runs."""

    def __init__(self, tables: Optional[dict[str, dict[str, dict]]] = None):
        self.tables = {name: dict(rows) for name, rows in (tables or {}).items()}

    def _load_table(self, table: str) -> dict[str, dict]:
        return dict(self.tables.get(table, {}))

    def _save_table(self, table: str, rows: dict[str, dict]) -> None:
        self.tables[table] = dict(rows)
