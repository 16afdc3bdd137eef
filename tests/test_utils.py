"""Unit tests for shared helpers."""

import json

import pytest

from ootpstats.schemas import InfoSection
from ootpstats.utils import chunked, content_hash, load_json, save_json


class TestJsonFiles:
    """Tests for JSON file I/O."""

    def test_save_creates_parents(self, tmp_path):
        path = tmp_path / 'a' / 'b' / 'data.json'
        save_json(path, {'name': 'Smith'})
        assert json.loads(path.read_text()) == {'name': 'Smith'}

    def test_model_roundtrip_with_schema(self, tmp_path):
        path = tmp_path / 'section.json'
        save_json(path, InfoSection(title='Rules', content='- one'))
        assert load_json(path, schema=InfoSection) == InfoSection(title='Rules', content='- one')

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / 'missing.json')

    def test_schema_mismatch(self, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text(json.dumps({'title': ['not', 'a', 'string']}))
        with pytest.raises(ValueError, match='Schema validation failed'):
            load_json(path, schema=InfoSection)


def test_content_hash_ignores_filename():
    """Identical bytes hash the same regardless of type."""
    assert content_hash(b'Name\nSmith\n') == content_hash('Name\nSmith\n')
    assert content_hash(b'Name\nSmith\n') != content_hash(b'Name\nJones\n')


def test_chunked():
    assert list(chunked([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]
    with pytest.raises(ValueError):
        list(chunked([1], 0))
