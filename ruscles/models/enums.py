import enum


class Role(enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class FormType(enum.Enum):
    CONTACT = "CONTACT"
    SERVICE_INQUIRY = "SERVICE_INQUIRY"
    QUOTE_REQUEST = "QUOTE_REQUEST"


class FormStatus(enum.Enum):
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    RESPONDED = "RESPONDED"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class Priority(enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class ResponseMethod(enum.Enum):
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    WHATSAPP = "WHATSAPP"
    IN_PERSON = "IN_PERSON"
    OTHER = "OTHER"


class ContentStatus(enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    SCHEDULED = "SCHEDULED"
    ARCHIVED = "ARCHIVED"


class ProjectStatus(enum.Enum):
    PLANNING = "PLANNING"
    IN_PROGRESS = "IN_PROGRESS"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


def parse_enum(enum_cls, value, field):
    """Coerce a wire value ('new', 'NEW') to an enum member or raise ValidationError."""
    from ruscles.exceptions import ValidationError

    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {field}: {value}. Allowed values: {allowed}")
