"""
Repositories - one module per table group.

Each function takes an open SQLAlchemy Session (see db.postgres.get_db_session)
and runs a single parameterised statement. Rows come back as plain dicts.
Errors are NOT caught here; the service layer tags them.
"""

import json
from typing import Any, Dict, List, Optional


def row_to_dict(row) -> Optional[Dict[str, Any]]:
    """Convert a RowMapping to a dict (None stays None)."""
    if row is None:
        return None
    return dict(row)


def dump_tags(tags: Optional[List[str]]) -> Optional[str]:
    """Tag lists are stored as JSON text so the same schema works on SQLite."""
    if tags is None:
        return None
    return json.dumps(list(tags))


def load_tags(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        return []
    return [str(t) for t in value] if isinstance(value, list) else []
