"""
Pydantic schemas for the structured sub-documents stored in JSON columns.

Each blob carries a `version` so readers can tell which shape a row was
written with. Validation happens on write; rows are read back as plain dicts.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from ruscles.exceptions import ValidationError

CUSTOMER_INFO_VERSION = 1
CONTACT_FORM_VERSION = 1


class CustomerInfo(BaseModel):
    model_config = ConfigDict(extra='allow')

    version: int = CUSTOMER_INFO_VERSION
    name: str = Field(min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    company: Optional[str] = None
    address: Optional[str] = None


class ContactFormData(BaseModel):
    """The form-data blob written by the public contact intake."""
    model_config = ConfigDict(extra='allow')

    version: int = CONTACT_FORM_VERSION
    service: str
    message: str
    propertyType: Optional[str] = None
    timeline: Optional[str] = None
    emergency: bool = False
    consent: bool = True


class ContactSubmission(BaseModel):
    """Fields accepted by POST /contact after checkbox normalisation."""
    firstName: str = Field(min_length=1)
    lastName: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: str = Field(min_length=1)
    service: str = Field(min_length=1)
    message: str = Field(min_length=1)
    consent: bool
    propertyType: Optional[str] = None
    timeline: Optional[str] = None
    emergency: bool = False

    @field_validator('firstName', 'lastName', 'email', 'phone', 'service', 'message')
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError('must not be blank')
        return value

    @field_validator('consent')
    @classmethod
    def consent_given(cls, value: bool) -> bool:
        if not value:
            raise ValueError('consent is required')
        return value


class BusinessHours(BaseModel):
    model_config = ConfigDict(extra='allow')

    open: Optional[str] = None
    close: Optional[str] = None
    closed: bool = False


class BusinessInfoPayload(BaseModel):
    model_config = ConfigDict(extra='ignore')

    companyName: str = Field(min_length=1)
    tagline: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    socialMedia: Dict[str, Optional[str]] = Field(default_factory=dict)
    businessHours: Dict[str, BusinessHours] = Field(default_factory=dict)
    services: Dict[str, Any] = Field(default_factory=dict)


def validate_document(schema, data: Dict[str, Any], label: str) -> Dict[str, Any]:
    """Validate `data` against `schema` and return the JSON-ready dict.

    Pydantic errors are flattened into a single ValidationError naming the
    offending fields.
    """
    if not isinstance(data, dict):
        raise ValidationError(f"{label} must be an object")
    try:
        model = schema.model_validate(data)
    except PydanticValidationError as e:
        fields = sorted({'.'.join(str(part) for part in error['loc']) or label for error in e.errors()})
        raise ValidationError(f"Invalid {label}: {', '.join(fields)}")
    return model.model_dump(mode='json', exclude_none=True)
