import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy import func

from ruscles.exceptions import ServiceError, ValidationError
from ruscles.models.testimonial import Testimonial
from ruscles.services.base import (
    ResourceService, as_str, as_bool, as_int, next_display_order
)
from ruscles.utils.dates import start_of_month, start_of_year
from ruscles.utils.pagination import parse_bool_arg

logger = logging.getLogger(__name__)


def as_rating(value, field):
    rating = as_int(value, field)
    if not 1 <= rating <= 5:
        raise ValidationError(f"{field} must be between 1 and 5")
    return rating


class TestimonialService(ResourceService):
    """Service for managing customer testimonials"""
    model = Testimonial
    label = 'Testimonial'
    plural = 'testimonials'
    fields = {
        'customerName': ('customer_name', as_str),
        'customerTitle': ('customer_title', as_str),
        'customerCompany': ('customer_company', as_str),
        'customerPhoto': ('customer_photo', as_str),
        'testimonialText': ('testimonial_text', as_str),
        'rating': ('rating', as_rating),
        'projectType': ('project_type', as_str),
        'isVisible': ('is_visible', as_bool),
        'isFeatured': ('is_featured', as_bool),
        'displayOrder': ('display_order', as_int),
    }
    required = ('customerName', 'testimonialText')
    defaults = {'is_visible': True, 'is_featured': False}
    keep_when_omitted = ('displayOrder',)
    search_columns = (Testimonial.customer_name, Testimonial.customer_company, Testimonial.testimonial_text)
    sort_columns = {
        'displayOrder': Testimonial.display_order,
        'createdAt': Testimonial.created_at,
        'customerName': Testimonial.customer_name,
        'rating': Testimonial.rating,
    }
    default_sort = ('displayOrder', 'asc')

    def apply_filters(self, query, args):
        is_visible = parse_bool_arg(args, 'isVisible')
        if is_visible is not None:
            query = query.filter(Testimonial.is_visible == is_visible)
        is_featured = parse_bool_arg(args, 'isFeatured')
        if is_featured is not None:
            query = query.filter(Testimonial.is_featured == is_featured)
        if args.get('projectType'):
            query = query.filter(Testimonial.project_type == args['projectType'])
        return query

    def before_save(self, record, data):
        if record.display_order is None:
            record.display_order = next_display_order(self.session, Testimonial)

    def reorder(self, items: List[Dict[str, Any]]) -> Tuple[bool, List[Dict[str, Any]]]:
        """
        Apply `[{id, displayOrder}]` in one transaction.

        Every item is validated before anything is written; if any item is
        invalid nothing changes. Returns (applied, results) where results
        holds one entry per submitted item.
        """
        if not isinstance(items, list) or not items:
            raise ValidationError('Invalid testimonials data')

        results = []
        updates = []
        for index, item in enumerate(items):
            entry = {'index': index, 'id': item.get('id') if isinstance(item, dict) else None}
            try:
                if not isinstance(item, dict) or item.get('id') is None or item.get('displayOrder') is None:
                    raise ValidationError('id and displayOrder are required')
                display_order = as_int(item['displayOrder'], 'displayOrder')
                testimonial = self.get(as_int(item['id'], 'id'))
            except ServiceError as e:
                entry.update(success=False, error=e.message)
            else:
                updates.append((testimonial, display_order))
                entry.update(success=True, displayOrder=display_order)
            results.append(entry)

        if len(updates) != len(items):
            logger.warning(f"Reorder rejected: {len(items) - len(updates)} invalid item(s)")
            return False, results

        try:
            for testimonial, display_order in updates:
                testimonial.display_order = display_order
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(f"Reordered {len(updates)} testimonials")
        return True, results

    def stats(self, tz_name: str = 'UTC') -> Dict[str, Any]:
        month_start = start_of_month(tz_name)
        year_start = start_of_year(tz_name)

        total = self.count()
        visible = self.count(Testimonial.is_visible.is_(True))
        average = self.session.query(func.avg(Testimonial.rating)).scalar()

        return {
            'total': total,
            'visible': visible,
            'hidden': total - visible,
            'featured': self.count(Testimonial.is_featured.is_(True)),
            'newThisMonth': self.count(Testimonial.created_at >= month_start),
            'newThisYear': self.count(Testimonial.created_at >= year_start),
            'averageRating': round(float(average), 1) if average is not None else 0,
            'projectTypeDistribution': self.distribution(Testimonial.project_type, 'projectType'),
        }
