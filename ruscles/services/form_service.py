"""
Form Service for the submissions inbox

This service provides:
- Filtered, paginated listing of form submissions
- Status/priority/assignment updates, single and in bulk
- Staff responses, which move a submission to RESPONDED
- Grouped counts for the inbox summary
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import String, case, cast, or_

from ruscles.exceptions import ServiceError, ValidationError
from ruscles.models.enums import FormType, FormStatus, Priority, ResponseMethod, parse_enum
from ruscles.models.form_submission import FormSubmission, FormResponse
from ruscles.models.user import User
from ruscles.schemas import CustomerInfo, validate_document
from ruscles.services.base import ResourceService, as_str, as_int, as_datetime, as_str_list, as_enum
from ruscles.utils.dates import utcnow, days_ago
from ruscles.utils.pagination import parse_list_arg

logger = logging.getLogger(__name__)

RECENT_DAYS = 7

# Severity rank, so sorting by priority runs LOW < MEDIUM < HIGH < URGENT
PRIORITY_RANK = case(
    *[(FormSubmission.priority == priority, rank) for rank, priority in enumerate(Priority, start=1)],
    else_=0,
)


class FormService(ResourceService):
    model = FormSubmission
    label = 'Form submission'
    plural = 'forms'
    # Fields staff may change after submission (PATCH and bulk)
    fields = {
        'status': ('status', as_enum(FormStatus)),
        'priority': ('priority', as_enum(Priority)),
        'assignedTo': ('assigned_to_id', as_int),
        'notes': ('notes', as_str),
        'tags': ('tags', as_str_list),
    }
    defaults = {'status': FormStatus.NEW, 'priority': Priority.MEDIUM, 'tags': list}
    sort_columns = {
        'submittedAt': FormSubmission.submitted_at,
        'lastUpdated': FormSubmission.last_updated,
        'priority': PRIORITY_RANK,
        'status': FormSubmission.status,
        'customerName': FormSubmission.customer_name,
    }
    default_sort = ('submittedAt', 'desc')

    def apply_filters(self, query, args):
        statuses = [parse_enum(FormStatus, value, 'status') for value in parse_list_arg(args, 'status')]
        if statuses:
            query = query.filter(FormSubmission.status.in_(statuses))
        priorities = [parse_enum(Priority, value, 'priority') for value in parse_list_arg(args, 'priority')]
        if priorities:
            query = query.filter(FormSubmission.priority.in_(priorities))
        types = [parse_enum(FormType, value, 'type') for value in parse_list_arg(args, 'type')]
        if types:
            query = query.filter(FormSubmission.type.in_(types))

        if args.get('assignedTo'):
            query = query.filter(FormSubmission.assigned_to_id == as_int(args['assignedTo'], 'assignedTo'))

        date_from = as_datetime(args.get('dateFrom'), 'dateFrom')
        if date_from:
            query = query.filter(FormSubmission.submitted_at >= date_from)
        date_to = as_datetime(args.get('dateTo'), 'dateTo')
        if date_to:
            query = query.filter(FormSubmission.submitted_at <= date_to)
        return query

    def apply_search(self, query, term):
        if not term:
            return query
        pattern = f"%{term.strip()}%"
        return query.filter(or_(
            FormSubmission.customer_name.ilike(pattern),
            FormSubmission.customer_email.ilike(pattern),
            cast(FormSubmission.form_data, String).ilike(pattern),
        ))

    def before_save(self, record, data):
        if record.assigned_to_id is not None and self.session.get(User, record.assigned_to_id) is None:
            raise ValidationError('Assigned user not found')
        record.last_updated = utcnow()

    def create(self, data: Dict[str, Any], **attrs) -> FormSubmission:
        """Staff-entered submission: type, customerInfo and formData are required."""
        missing = [field for field in ('type', 'customerInfo', 'formData') if not data.get(field)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        if not isinstance(data['formData'], dict):
            raise ValidationError('formData must be an object')

        submission = FormSubmission(
            type=parse_enum(FormType, data['type'], 'type'),
            status=FormStatus.NEW,
            form_data=data['formData'],
            **attrs
        )
        submission.set_customer_info(validate_document(CustomerInfo, data['customerInfo'], 'customerInfo'))
        self.apply_fields(submission, {k: v for k, v in data.items() if k != 'status'}, partial=True)
        self.before_save(submission, data)
        self.session.add(submission)
        self.commit()
        logger.info(f"Created form submission {submission.id} ({submission.type.value})")
        return submission

    def update(self, record_id, data, partial=True):
        # Submissions only support merge updates
        return super().update(record_id, data, partial=True)

    # -- responses --------------------------------------------------------

    def respond(self, form_id: int, data: Dict[str, Any], principal) -> FormResponse:
        """
        Record a staff response and mark the submission RESPONDED.

        Both writes commit together. Responses are additive; repeating the
        call adds another response and leaves the status at RESPONDED.
        """
        if principal is None:
            raise ValidationError('An authenticated user is required to respond')

        submission = self.get(form_id)

        content = data.get('content')
        if not isinstance(content, str) or not content.strip():
            raise ValidationError('Missing required fields: content')
        content = content.strip()
        method = parse_enum(ResponseMethod, data.get('method') or ResponseMethod.EMAIL.value, 'method')
        attachments = as_str_list(data.get('attachments') or [], 'attachments')

        now = utcnow()
        response = FormResponse(
            form=submission,
            responded_by=principal.email,
            user_id=principal.id,
            method=method,
            content=content,
            attachments=attachments,
            responded_at=now,
        )
        submission.status = FormStatus.RESPONDED
        submission.last_updated = now

        try:
            self.session.add(response)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        # Delivery is handled outside this service; the response is logged only
        logger.info(f"Form {submission.id} answered by {principal.email} via {method.value}")
        return response

    # -- bulk -------------------------------------------------------------

    def bulk_update(self, form_ids: List[Any], updates: Dict[str, Any]) -> Tuple[bool, List[Dict[str, Any]]]:
        """
        Apply `updates` to every id in `form_ids` in one transaction.

        All ids and the update payload are validated first; if any id fails
        nothing is written. Returns (applied, results) with one entry per id.
        """
        if not isinstance(form_ids, list) or not form_ids:
            raise ValidationError('Form IDs are required')
        if not isinstance(updates, dict) or not any(field in updates for field in self.fields):
            raise ValidationError(f"updates must include one of: {', '.join(self.fields)}")

        unknown = sorted(set(updates) - set(self.fields))
        if unknown:
            raise ValidationError(f"Unsupported update fields: {', '.join(unknown)}")

        # Validate the payload once against a detached record
        probe = FormSubmission()
        self.apply_fields(probe, updates, partial=True)
        if probe.assigned_to_id is not None and self.session.get(User, probe.assigned_to_id) is None:
            raise ValidationError('Assigned user not found')

        results = []
        targets = []
        for form_id in form_ids:
            entry = {'id': form_id}
            try:
                targets.append(self.get(as_int(form_id, 'formIds')))
            except ServiceError as e:
                entry.update(success=False, error=e.message)
            else:
                entry['success'] = True
            results.append(entry)

        if len(targets) != len(form_ids):
            logger.warning(f"Bulk update rejected: {len(form_ids) - len(targets)} invalid id(s)")
            return False, results

        now = utcnow()
        try:
            for submission in targets:
                self.apply_fields(submission, updates, partial=True)
                submission.last_updated = now
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(f"Bulk updated {len(targets)} form submissions")
        return True, results

    # -- aggregation ------------------------------------------------------

    def stats(self, now=None) -> Dict[str, Any]:
        return {
            'total': self.count(),
            'byStatus': self.count_by(FormSubmission.status, FormStatus),
            'byPriority': self.count_by(FormSubmission.priority, Priority),
            'byType': self.count_by(FormSubmission.type, FormType),
            'recentCount': self.count(FormSubmission.submitted_at >= days_ago(RECENT_DAYS, now)),
        }

    def recent(self, limit: int = 5) -> List[FormSubmission]:
        return FormSubmission.query.order_by(
            FormSubmission.submitted_at.desc(), FormSubmission.id.desc()
        ).limit(limit).all()

    def intake(self, form_type: FormType, customer_info: Dict[str, Any], form_data: Dict[str, Any],
               priority: Priority = Priority.MEDIUM, tags: Optional[List[str]] = None) -> FormSubmission:
        """Store an already-validated public submission as NEW."""
        submission = FormSubmission(
            type=form_type,
            status=FormStatus.NEW,
            priority=priority,
            form_data=form_data,
            tags=tags or [],
        )
        submission.set_customer_info(customer_info)
        try:
            self.session.add(submission)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return submission
