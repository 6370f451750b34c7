"""Domain type definitions for daybook.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in the ledger's currency, as entered (Decimal, no float drift)
- Description: Transaction description text
- EntityId: Opaque identifier of a transaction or task
"""

from decimal import Decimal
from typing import NewType
from uuid import uuid4

# Money amounts are kept as Decimal so sums of entered values stay exact
Money = NewType("Money", Decimal)

# Transaction description text
Description = NewType("Description", str)

# Opaque entity identifier (uuid4 hex)
EntityId = NewType("EntityId", str)


def new_entity_id() -> EntityId:
    """Generate a fresh entity identifier."""
    return EntityId(uuid4().hex)
