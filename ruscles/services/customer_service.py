"""
Customer records are User rows with the USER role. They are never
hard-deleted; DELETE deactivates them.
"""

import logging
from typing import Any, Dict, Optional

from ruscles import bcrypt
from ruscles.exceptions import ConflictError, NotFoundError, ValidationError
from ruscles.models.enums import Role
from ruscles.models.form_submission import FormSubmission
from ruscles.models.project import Project
from ruscles.models.user import User
from ruscles.services.base import ResourceService, as_str, as_bool, as_email
from ruscles.utils.dates import start_of_month, start_of_year
from ruscles.utils.pagination import parse_bool_arg
from ruscles.utils.text import mask_email, name_from_email

logger = logging.getLogger(__name__)

RECENT_RELATED_LIMIT = 5


class CustomerService(ResourceService):
    model = User
    label = 'Customer'
    plural = 'customers'
    fields = {
        'name': ('name', as_str),
        'email': ('email', as_email),
        'phone': ('phone', as_str),
        'company': ('company', as_str),
        'isActive': ('is_active', as_bool),
    }
    required = ('name', 'email')
    defaults = {'is_active': True}
    search_columns = (User.name, User.email, User.phone, User.company)
    sort_columns = {
        'createdAt': User.created_at,
        'name': User.name,
        'email': User.email,
    }

    def conflict_message(self):
        return 'Customer with this email already exists'

    def base_query(self):
        return User.query.filter(User.role == Role.USER)

    def apply_filters(self, query, args):
        is_active = parse_bool_arg(args, 'isActive')
        if is_active is not None:
            query = query.filter(User.is_active == is_active)
        return query

    def get(self, record_id):
        customer = super().get(record_id)
        # Admin accounts are not managed through the customer endpoints
        if customer.role != Role.USER:
            raise NotFoundError('Customer not found')
        return customer

    def before_save(self, record, data):
        with self.session.no_autoflush:
            clash = User.query.filter(User.email == record.email, User.id != record.id).first()
        if clash:
            raise ConflictError(self.conflict_message())

    def create(self, data: Dict[str, Any], **attrs):
        return super().create(data, role=Role.USER, **attrs)

    def delete(self, record_id) -> None:
        customer = self.get(record_id)
        customer.is_active = False
        self.session.commit()
        logger.info(f"Deactivated customer {customer.id}")

    def to_detail(self, customer: User) -> Dict[str, Any]:
        """Customer with recent managed projects, assigned forms and counts."""
        data = customer.to_dict(include_counts=True)
        data['managedProjects'] = [
            project.to_summary()
            for project in customer.managed_projects.order_by(Project.created_at.desc()).limit(RECENT_RELATED_LIMIT)
        ]
        data['assignedForms'] = [
            form.to_dict(include_responses=None)
            for form in customer.assigned_forms.order_by(FormSubmission.submitted_at.desc()).limit(RECENT_RELATED_LIMIT)
        ]
        return data

    def stats(self, tz_name: str = 'UTC') -> Dict[str, Any]:
        customers = User.role == Role.USER
        total = self.count(customers)
        active = self.count(customers, User.is_active.is_(True))
        return {
            'total': total,
            'active': active,
            'inactive': total - active,
            'newThisMonth': self.count(customers, User.created_at >= start_of_month(tz_name)),
            'newThisYear': self.count(customers, User.created_at >= start_of_year(tz_name)),
        }

    def create_admin(self, email: str, password: str, name: Optional[str] = None,
                     min_password_length: int = 6) -> User:
        """Create an admin with a bcrypt password, or promote an existing user."""
        email = as_email(email, 'email')
        if not password or len(password) < min_password_length:
            raise ValidationError(f"Password must be at least {min_password_length} characters long")

        user = User.query.filter_by(email=email).first()
        if user is None:
            user = User(email=email, name=name or name_from_email(email))
            self.session.add(user)
        elif name:
            user.name = name

        user.role = Role.ADMIN
        user.is_active = True
        user.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')
        self.session.commit()
        logger.info(f"Admin account ready for {mask_email(email)}")
        return user
