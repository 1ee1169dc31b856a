from typing import Any, Dict

from ruscles.exceptions import ValidationError, NotFoundError
from ruscles.models.enums import ProjectStatus, Priority, parse_enum
from ruscles.models.project import Project
from ruscles.models.user import User
from ruscles.services.base import (
    ResourceService, as_str, as_int, as_float, as_datetime, as_str_list, as_enum
)


def as_progress(value, field):
    progress = as_int(value, field)
    if not 0 <= progress <= 100:
        raise ValidationError(f"{field} must be between 0 and 100")
    return progress


class ProjectService(ResourceService):
    """Service for customer jobs tracked from the admin area"""
    model = Project
    label = 'Project'
    plural = 'projects'
    fields = {
        'title': ('title', as_str),
        'description': ('description', as_str),
        'customerName': ('customer_name', as_str),
        'customerEmail': ('customer_email', as_str),
        'customerPhone': ('customer_phone', as_str),
        'projectType': ('project_type', as_str),
        'status': ('status', as_enum(ProjectStatus)),
        'priority': ('priority', as_enum(Priority)),
        'location': ('location', as_str),
        'startDate': ('start_date', as_datetime),
        'endDate': ('end_date', as_datetime),
        'estimatedHours': ('estimated_hours', as_float),
        'budget': ('budget', as_float),
        'progress': ('progress', as_progress),
        'notes': ('notes', as_str),
        'attachments': ('attachments', as_str_list),
        'tags': ('tags', as_str_list),
        'managerId': ('manager_id', as_int),
    }
    required = ('title', 'customerName', 'projectType')
    defaults = {
        'status': ProjectStatus.PLANNING,
        'priority': Priority.MEDIUM,
        'progress': 0,
        'attachments': list,
        'tags': list,
    }
    search_columns = (Project.title, Project.customer_name, Project.description)
    sort_columns = {
        'createdAt': Project.created_at,
        'startDate': Project.start_date,
        'title': Project.title,
        'status': Project.status,
        'progress': Project.progress,
    }

    def apply_filters(self, query, args):
        status = args.get('status')
        if status and status != 'all':
            query = query.filter(Project.status == parse_enum(ProjectStatus, status, 'status'))
        if args.get('type'):
            query = query.filter(Project.project_type == args['type'])
        return query

    def before_save(self, record, data):
        if record.manager_id is not None and self.session.get(User, record.manager_id) is None:
            raise NotFoundError('Manager not found')
        if record.start_date and record.end_date and record.end_date < record.start_date:
            raise ValidationError('endDate must not be before startDate')

    def stats(self) -> Dict[str, Any]:
        by_status = self.count_by(Project.status, ProjectStatus)
        return {
            'total': sum(by_status.values()),
            'active': by_status['IN_PROGRESS'] + by_status['ACTIVE'],
            'completed': by_status['COMPLETED'],
            'planning': by_status['PLANNING'],
            'inProgress': by_status['IN_PROGRESS'],
            'onHold': by_status['ON_HOLD'],
            'cancelled': by_status['CANCELLED'],
        }
