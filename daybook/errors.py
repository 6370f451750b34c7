"""Exceptions raised by daybook.

Validation rejections are not exceptions: creating an entity from blank text
or a non-positive amount simply returns None.
"""


class DaybookError(Exception):
    """Base class for daybook errors."""


class PersistenceFailure(DaybookError):
    """The blob store could not read or write a value."""


class CorruptStateError(DaybookError):
    """Stored data could not be decoded into entities."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Stored data under '{key}' is corrupt: {reason}")
        self.key = key
        self.reason = reason
