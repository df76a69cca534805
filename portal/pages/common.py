"""Read helpers shared by the page services."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from portal.backend.client import TableQuery
from portal.core.exceptions import BackendError

logger = logging.getLogger(__name__)

GENERIC_WRITE_ERROR = "Something went wrong. Please try again."


async def fetch_rows(query: TableQuery, what: str) -> List[Dict[str, Any]]:
    """Run a list read. A failure is logged and reads as no rows."""
    try:
        return await query.execute() or []
    except BackendError:
        logger.exception("Error fetching %s", what)
        return []


async def fetch_row(query: TableQuery, what: str) -> Optional[Dict[str, Any]]:
    try:
        return await query.single().execute()
    except BackendError:
        logger.exception("Error fetching %s", what)
        return None


def with_placeholder(items: List[Any], text: str) -> Tuple[Optional[List[Any]], Optional[str]]:
    """Empty lists are returned as (None, placeholder) so nothing renders an empty table."""
    if not items:
        return None, text
    return items, None
