"""PIN gate in front of the ledger and task list.

A plain comparison against a fixed secret. A successful unlock stores a
marker in the blob store; locking removes it.
"""

import re

import structlog

from daybook.store.blobs import BlobStore

logger = structlog.get_logger(__name__)

AUTH_KEY = "userPin"
WRONG_PIN_MESSAGE = "Wrong PIN, try again."


def normalize_pin(candidate: str) -> str:
    """Keep only the digits of an entered PIN."""
    return re.sub(r"[^0-9]", "", candidate)


def check_pin(candidate: str, secret: str) -> bool:
    """Check a candidate PIN against the secret."""
    return candidate == secret


def unlock(store: BlobStore, candidate: str, secret: str) -> bool:
    """Unlock if the candidate PIN matches.

    Args:
        store: Blob store receiving the marker.
        candidate: PIN entered by the user; anything but digits is dropped.
        secret: Configured PIN.

    Returns:
        True if unlocked, False if the PIN was wrong.

    Raises:
        PersistenceFailure: If the marker could not be written.
    """
    pin = normalize_pin(candidate)
    if not check_pin(pin, secret):
        logger.info("unlock_failed")
        return False

    store.set_item(AUTH_KEY, pin)
    logger.info("unlocked")
    return True


def is_unlocked(store: BlobStore) -> bool:
    """True if an unlock marker is stored."""
    return bool(store.get_item(AUTH_KEY))


def lock(store: BlobStore) -> None:
    """Remove the unlock marker."""
    store.remove_item(AUTH_KEY)
    logger.info("locked")
