"""Domain models and types for daybook.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Reference time is always passed in, never read from the clock
"""

from daybook.domain.models import Description, EntityId, Money, new_entity_id

__all__ = ["Money", "Description", "EntityId", "new_entity_id"]
