"""
Helpers shared by the list endpoints: page/limit parsing, sorting and the
`pagination` block every list response carries.
"""

from typing import Any, Dict, List, Optional, Tuple
from ruscles.exceptions import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
# Rows skipped by the deepest page a list endpoint will serve
MAX_OFFSET = 1000000


def parse_page_args(args) -> Tuple[int, int]:
    """Read `page` and `limit` from query args, applying defaults and bounds."""
    try:
        page = int(args.get('page', DEFAULT_PAGE))
        limit = int(args.get('limit', DEFAULT_LIMIT))
    except (TypeError, ValueError):
        raise ValidationError('page and limit must be integers')

    page = max(page, 1)
    limit = min(max(limit, 1), MAX_LIMIT)
    if (page - 1) * limit > MAX_OFFSET:
        raise ValidationError('page is out of range')
    return page, limit


def parse_bool_arg(args, name: str) -> Optional[bool]:
    """Tri-state flag filter: absent -> None, otherwise `== 'true'`."""
    value = args.get(name)
    if value is None or value == '':
        return None
    return value.lower() == 'true'


def parse_list_arg(args, name: str) -> List[str]:
    value = args.get(name)
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def apply_sort(query, model, args, allowed: Dict[str, Any], default_key: str, default_order: str = 'asc'):
    """Order `query` by a whitelisted `sortBy` key and `sortOrder` direction."""
    sort_by = args.get('sortBy') or default_key
    sort_order = (args.get('sortOrder') or default_order).lower()

    column = allowed.get(sort_by)
    if column is None:
        raise ValidationError(f'Invalid sortBy value: {sort_by}')
    if sort_order not in ('asc', 'desc'):
        raise ValidationError(f'Invalid sortOrder value: {sort_order}')

    ordered = column.asc() if sort_order == 'asc' else column.desc()
    return query.order_by(ordered, model.id.asc())


def paginate(query, page: int, limit: int):
    """Run a paginated query; returns (items, pagination dict)."""
    result = query.paginate(page=page, per_page=limit, error_out=False, max_per_page=MAX_LIMIT)
    return result.items, {
        'page': page,
        'limit': limit,
        'total': result.total,
        'pages': result.pages,
    }
