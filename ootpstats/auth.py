"""Shared-password access levels for editing tournaments and site content.

Two SHA-256 password hashes live in the 'auth' site_content document:
passwordHash grants master access, uploadPasswordHash grants upload
access only. A Session value carries the granted level and is passed to
every operation that needs one.
"""

import hashlib
from dataclasses import dataclass

from .constants import AUTH_LEVELS, SITE_CONTENT_TABLE
from .store import DocumentStore

AUTH_DOCUMENT_ID = 'auth'


class AuthError(Exception):
    """Password rejected or access level too low."""


def hash_password(password: str) -> str:
    """Hex SHA-256 of the UTF-8 password."""
    return hashlib.sha256(password.encode('utf-8')).hexdigest()


@dataclass(frozen=True)
class Session:
    """Access level granted to the current caller."""
    level: str = 'none'

    def has_access(self, required: str) -> bool:
        """Master covers everything; upload covers only upload."""
        if required not in AUTH_LEVELS:
            raise ValueError(f'Unknown access level: {required}')
        return AUTH_LEVELS.index(self.level) >= AUTH_LEVELS.index(required)


ANONYMOUS = Session()


def require_access(session: Session, required: str) -> None:
    """Raise AuthError unless session grants the required level."""
    if not session.has_access(required):
        raise AuthError(f'This action requires {required} access')


def authenticate(store: DocumentStore, password: str, required: str = 'upload') -> Session:
    """
    Check a password against the stored hashes.

    Args:
        store: Document store holding site_content/auth
        password: Plain-text password from the user
        required: Level the pending action needs

    Returns:
        Session with 'master' or 'upload' level

    Raises:
        AuthError: If auth is not configured, the password is wrong, or the
            upload password is used for a master action
    """
    doc = store.get(SITE_CONTENT_TABLE, AUTH_DOCUMENT_ID)
    content = (doc or {}).get('content')
    if not content:
        raise AuthError('Auth not configured')

    hashed = hash_password(password or '')

    master_hash = content.get('passwordHash')
    if master_hash and hashed == master_hash:
        return Session('master')

    upload_hash = content.get('uploadPasswordHash')
    if upload_hash and hashed == upload_hash:
        if required != 'upload':
            raise AuthError('This action requires master password')
        return Session('upload')

    raise AuthError('Incorrect password')


def configure_passwords(store: DocumentStore, master_password: str, upload_password: str = '') -> None:
    """Store hashes for the master and (optional) upload passwords."""
    content = {'passwordHash': hash_password(master_password)}
    if upload_password:
        content['uploadPasswordHash'] = hash_password(upload_password)
    store.upsert(SITE_CONTENT_TABLE, {'id': AUTH_DOCUMENT_ID, 'content': content})
