"""ID generation utilities."""

import uuid

# Memo UIDs are portable identifiers, so they carry no type prefix
MEMO_UID_LENGTH = 22


def generate_uid() -> str:
    """Generate a globally unique memo UID.

    Format: first 22 hex characters of a random uuid4
    """
    return uuid.uuid4().hex[:MEMO_UID_LENGTH]
