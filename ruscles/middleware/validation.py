from typing import Dict, Any, List
from flask import request
import re
from ruscles.exceptions import ValidationError


class ValidationMiddleware:
    """Request body helpers shared by the admin and public routes"""

    EMAIL_PATTERN = r'^[^\s@]+@[^\s@]+\.[^\s@]+$'

    @staticmethod
    def validate_email(email: str) -> bool:
        """Validate email format (local@domain.tld)"""
        if not isinstance(email, str):
            return False
        return re.match(ValidationMiddleware.EMAIL_PATTERN, email) is not None

    @staticmethod
    def missing_fields(data: Dict[str, Any], required_fields: List[str]) -> List[str]:
        return [
            field for field in required_fields
            if field not in data or data[field] is None or (isinstance(data[field], str) and not data[field].strip())
        ]

    @staticmethod
    def require_fields(data: Dict[str, Any], required_fields: List[str]) -> None:
        """Raise ValidationError naming every missing required field"""
        missing = ValidationMiddleware.missing_fields(data, required_fields)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def get_json_body() -> Dict[str, Any]:
    """JSON object body of the current request, or ValidationError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def get_form_or_json() -> Dict[str, Any]:
    """Body as a dict whether the client sent JSON or a form post."""
    if request.is_json:
        return get_json_body()
    return request.form.to_dict()
