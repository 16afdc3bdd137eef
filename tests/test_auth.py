"""Unit tests for password access levels."""

import pytest

from conftest import MASTER_PASSWORD, UPLOAD_PASSWORD
from ootpstats.auth import (
    ANONYMOUS,
    AuthError,
    Session,
    authenticate,
    configure_passwords,
    hash_password,
    require_access,
)
from ootpstats.constants import SITE_CONTENT_TABLE
from ootpstats.store import MemoryStore


class TestSession:
    """Tests for access level comparison."""

    def test_levels(self):
        assert Session('master').has_access('upload')
        assert Session('master').has_access('master')
        assert Session('upload').has_access('upload')
        assert not Session('upload').has_access('master')
        assert not ANONYMOUS.has_access('upload')
        assert ANONYMOUS.has_access('none')

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            Session('master').has_access('admin')

    def test_require_access(self):
        require_access(Session('master'), 'master')
        with pytest.raises(AuthError, match='requires master access'):
            require_access(Session('upload'), 'master')


class TestAuthenticate:
    """Tests for checking passwords against stored hashes."""

    def test_master_password(self, store):
        assert authenticate(store, MASTER_PASSWORD, 'master').level == 'master'
        assert authenticate(store, MASTER_PASSWORD, 'upload').level == 'master'

    def test_upload_password(self, store):
        assert authenticate(store, UPLOAD_PASSWORD, 'upload').level == 'upload'

    def test_upload_password_for_master_action(self, store):
        with pytest.raises(AuthError, match='This action requires master password'):
            authenticate(store, UPLOAD_PASSWORD, 'master')

    def test_wrong_password(self, store):
        with pytest.raises(AuthError, match='Incorrect password'):
            authenticate(store, 'guess', 'upload')

    def test_not_configured(self):
        with pytest.raises(AuthError, match='Auth not configured'):
            authenticate(MemoryStore(), MASTER_PASSWORD)

    def test_master_only_configuration(self):
        store = MemoryStore()
        configure_passwords(store, MASTER_PASSWORD)

        assert authenticate(store, MASTER_PASSWORD).level == 'master'
        with pytest.raises(AuthError, match='Incorrect password'):
            authenticate(store, '')

    def test_hashes_stored_not_passwords(self, store):
        content = store.get(SITE_CONTENT_TABLE, 'auth')['content']
        assert content['passwordHash'] == hash_password(MASTER_PASSWORD)
        assert MASTER_PASSWORD not in content.values()
        assert len(content['uploadPasswordHash']) == 64
