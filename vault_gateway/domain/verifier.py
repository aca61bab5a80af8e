"""Credential verification against a fetched record collection"""

from typing import Optional

from vault_gateway.domain.models import Credentials, RecordCollection, UserRecord
from vault_gateway.domain.records import stringify


def verify(records: RecordCollection, credentials: Credentials) -> Optional[UserRecord]:
    """
    Return the first record matching the submitted credentials, or None.

    Matching contract (kept exactly as the deployed client behaves):
    - identity key: stored and submitted values both trimmed, then compared
    - secret: stored value stringified (NOT trimmed), submitted value trimmed

    WARNING: this is a plaintext comparison with no hashing, rate limiting or
    transport guarantees. It is not a credential-security design.
    """
    identity_key = credentials.identity_key.strip()
    secret = credentials.secret.strip()

    for record in records:
        if record.secret is None:
            continue
        if record.username.strip() == identity_key and stringify(record.secret) == secret:
            return record
    return None


def find_by_identity(records: RecordCollection, identity_key: str) -> Optional[UserRecord]:
    """First record whose identity key equals identity_key exactly"""
    return next((record for record in records if record.username == identity_key), None)
