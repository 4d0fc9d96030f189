"""Domain models and pure functions for kirjanpito.

This package contains the functional core:
- Filename parsing
- Income/expense classification
- Totals aggregation
- Report rendering to strings and plain data

Nothing here touches the filesystem or the console.
"""

from kirjanpito.domain.models import Money, Record

__all__ = ["Money", "Record"]
