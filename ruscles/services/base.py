"""
Shared plumbing for the admin resource services.

A resource service maps the camelCase wire fields of one model onto its
columns, and provides list/get/create/update/delete on top of that mapping.
Subclasses add filters, hooks and their aggregation queries.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from ruscles.exceptions import ValidationError, NotFoundError, ConflictError
from ruscles.middleware.validation import ValidationMiddleware
from ruscles.models.enums import parse_enum
from ruscles.utils.dates import parse_datetime
from ruscles.utils.pagination import parse_page_args, apply_sort, paginate

logger = logging.getLogger(__name__)


# Coercers take (value, wire_name) and return the column value

def as_str(value, field):
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValidationError(f"{field} must be a string")
    return str(value)


def as_bool(value, field):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    raise ValidationError(f"{field} must be a boolean")


def as_int(value, field):
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer")


def as_float(value, field):
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")


def as_datetime(value, field):
    try:
        return parse_datetime(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an ISO 8601 date")


def as_str_list(value, field):
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValidationError(f"{field} must be a list of strings")
    return value


def as_enum(enum_cls):
    def coerce(value, field):
        return parse_enum(enum_cls, value, field)
    return coerce


def as_email(value, field):
    value = as_str(value, field).strip().lower()
    if not ValidationMiddleware.validate_email(value):
        raise ValidationError(f"Invalid {field} format")
    return value


class ResourceService:
    model = None
    label = 'Record'
    plural = 'records'
    # wire name -> (attribute, coercer)
    fields: Dict[str, Tuple[str, Callable]] = {}
    required: Tuple[str, ...] = ()
    # attribute -> value written when a PUT omits the field
    defaults: Dict[str, Any] = {}
    # wire names a PUT leaves untouched when omitted
    keep_when_omitted: Tuple[str, ...] = ()
    search_columns: Tuple = ()
    sort_columns: Dict[str, Any] = {}
    default_sort = ('createdAt', 'desc')

    def __init__(self, session):
        self.session = session

    # -- reads --------------------------------------------------------------

    def get(self, record_id):
        record = self.session.get(self.model, record_id)
        if record is None:
            raise NotFoundError(f"{self.label} not found")
        return record

    def base_query(self):
        return self.model.query

    def apply_filters(self, query, args):
        return query

    def apply_search(self, query, term: Optional[str]):
        if not term or not self.search_columns:
            return query
        pattern = f"%{term.strip()}%"
        return query.filter(or_(*[column.ilike(pattern) for column in self.search_columns]))

    def list(self, args) -> Tuple[List[Any], Dict[str, int]]:
        page, limit = parse_page_args(args)
        query = self.apply_filters(self.base_query(), args)
        query = self.apply_search(query, args.get('search'))
        sort_key, sort_order = self.default_sort
        query = apply_sort(query, self.model, args, self.sort_columns, sort_key, sort_order)
        return paginate(query, page, limit)

    # -- writes -------------------------------------------------------------

    def _default_for(self, attr):
        default = self.defaults.get(attr)
        return default() if callable(default) else default

    def apply_fields(self, record, data: Dict[str, Any], partial: bool) -> None:
        for wire, (attr, coerce) in self.fields.items():
            if wire in data:
                value = data[wire]
                if value is None or (isinstance(value, str) and value == '' and wire not in self.required):
                    setattr(record, attr, self._default_for(attr))
                else:
                    setattr(record, attr, coerce(value, wire))
            elif not partial and wire not in self.keep_when_omitted:
                setattr(record, attr, self._default_for(attr))

    def validate(self, data: Dict[str, Any], partial: bool) -> None:
        if partial:
            blanked = [field for field in self.required if field in data]
            missing = ValidationMiddleware.missing_fields(data, blanked)
        else:
            missing = ValidationMiddleware.missing_fields(data, list(self.required))
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    def before_create(self, record, data):
        pass

    def before_save(self, record, data):
        pass

    def conflict_message(self) -> str:
        return f"{self.label} already exists"

    def commit(self):
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning(f"Integrity error saving {self.label}: {e.orig}")
            raise ConflictError(self.conflict_message())

    def create(self, data: Dict[str, Any], **attrs):
        """Create from wire data; `attrs` are set directly on the new row."""
        self.validate(data, partial=False)
        record = self.model(**attrs)
        self.apply_fields(record, data, partial=False)
        self.before_create(record, data)
        self.before_save(record, data)
        self.session.add(record)
        self.commit()
        logger.info(f"Created {self.label} {record.id}")
        return record

    def update(self, record_id, data: Dict[str, Any], partial: bool = False):
        record = self.get(record_id)
        self.validate(data, partial=partial)
        self.apply_fields(record, data, partial=partial)
        self.before_save(record, data)
        self.commit()
        logger.info(f"Updated {self.label} {record.id}")
        return record

    def delete(self, record_id) -> None:
        record = self.get(record_id)
        self.session.delete(record)
        self.session.commit()
        logger.info(f"Deleted {self.label} {record_id}")

    # -- aggregation helpers -------------------------------------------------

    def count(self, *criteria) -> int:
        query = self.session.query(func.count(self.model.id))
        if criteria:
            query = query.filter(*criteria)
        return query.scalar() or 0

    def count_by(self, column, values: Iterable, *criteria) -> Dict[str, int]:
        """`{value: count}` with every enum value present, zero-filled."""
        query = self.session.query(column, func.count(self.model.id))
        if criteria:
            query = query.filter(*criteria)
        counts = {getattr(key, 'value', key): total for key, total in query.group_by(column).all()}
        return {member.value: counts.get(member.value, 0) for member in values}

    def distribution(self, column, label: str) -> List[Dict[str, Any]]:
        """`[{label: value, count: n}]` ordered by count, nulls excluded."""
        total = func.count(self.model.id)
        rows = (
            self.session.query(column, total)
            .filter(column.isnot(None))
            .group_by(column)
            .order_by(total.desc(), column.asc())
            .all()
        )
        return [{label: value, 'count': count} for value, count in rows]


def next_display_order(session, model) -> int:
    """max(display_order) + 1, or 1 for an empty table."""
    with session.no_autoflush:
        current = session.query(func.max(model.display_order)).scalar()
    return (current or 0) + 1
