import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from ruscles.middleware.validation import ValidationMiddleware
from ruscles.models.enums import FormType, Priority
from ruscles.schemas import ContactSubmission, ContactFormData, CustomerInfo
from ruscles.services.form_service import FormService
from ruscles.utils.text import is_checked, mask_email

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = 'Thank you for your inquiry. We will contact you within 24 hours.'
INVALID_MESSAGE = 'Please fill in all required fields and accept the privacy policy.'
FAILURE_MESSAGE = 'Sorry, we could not submit your request. Please try again or call us directly.'

CHECKBOX_FIELDS = ('consent', 'emergency')


class ContactService:
    """Public contact-form intake"""

    def __init__(self, session):
        self.forms = FormService(session)

    @staticmethod
    def normalise(raw: Dict[str, Any]) -> Dict[str, Any]:
        data = {key: value for key, value in raw.items() if value is not None}
        for field in CHECKBOX_FIELDS:
            data[field] = is_checked(raw.get(field))
        return data

    def submit(self, raw: Dict[str, Any]) -> Tuple[bool, str, Optional[int]]:
        """
        Validate and store a contact form post.

        Returns:
            Tuple of (success: bool, message: str, submission_id: Optional[int]).
            The message is always safe to show to the visitor.
        """
        data = self.normalise(raw)
        try:
            contact = ContactSubmission.model_validate(data)
        except PydanticValidationError as e:
            fields = sorted({str(error['loc'][0]) for error in e.errors() if error['loc']})
            logger.info(f"Contact form rejected, invalid fields: {', '.join(fields)}")
            return False, INVALID_MESSAGE, None

        if not ValidationMiddleware.validate_email(contact.email):
            logger.info("Contact form rejected, malformed email")
            return False, INVALID_MESSAGE, None

        customer_info = CustomerInfo(
            name=f"{contact.firstName} {contact.lastName}",
            firstName=contact.firstName,
            lastName=contact.lastName,
            email=contact.email.lower(),
            phone=contact.phone,
        ).model_dump(mode='json', exclude_none=True)
        form_data = ContactFormData(
            service=contact.service,
            message=contact.message,
            propertyType=contact.propertyType or None,
            timeline=contact.timeline or None,
            emergency=contact.emergency,
            consent=contact.consent,
        ).model_dump(mode='json', exclude_none=True)
        priority = Priority.URGENT if contact.emergency else Priority.MEDIUM

        try:
            submission = self.forms.intake(
                FormType.SERVICE_INQUIRY, customer_info, form_data,
                priority=priority, tags=[contact.service],
            )
        except Exception as e:
            logger.error(f"Error storing contact form from {mask_email(contact.email)}: {str(e)}")
            return False, FAILURE_MESSAGE, None

        logger.info(f"Contact form {submission.id} stored ({priority.value}) for {mask_email(contact.email)}")
        return True, SUCCESS_MESSAGE, submission.id
