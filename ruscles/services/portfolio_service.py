from typing import Any, Dict

from sqlalchemy import func

from ruscles.models.portfolio import PortfolioItem
from ruscles.services.base import (
    ResourceService, as_str, as_bool, as_int, as_float, as_datetime, as_str_list, next_display_order
)
from ruscles.utils.dates import start_of_month, start_of_year
from ruscles.utils.pagination import parse_bool_arg


class PortfolioService(ResourceService):
    """Service for managing completed-work portfolio items"""
    model = PortfolioItem
    label = 'Portfolio item'
    plural = 'portfolioItems'
    fields = {
        'title': ('title', as_str),
        'description': ('description', as_str),
        'serviceCategory': ('service_category', as_str),
        'images': ('images', as_str_list),
        'thumbnailImage': ('thumbnail_image', as_str),
        'completionDate': ('completion_date', as_datetime),
        'clientName': ('client_name', as_str),
        'projectValue': ('project_value', as_float),
        'location': ('location', as_str),
        'tags': ('tags', as_str_list),
        'isVisible': ('is_visible', as_bool),
        'isFeatured': ('is_featured', as_bool),
        'displayOrder': ('display_order', as_int),
    }
    required = ('title', 'description', 'serviceCategory', 'thumbnailImage')
    defaults = {'images': list, 'tags': list, 'is_visible': True, 'is_featured': False}
    keep_when_omitted = ('displayOrder',)
    search_columns = (PortfolioItem.title, PortfolioItem.description,
                      PortfolioItem.client_name, PortfolioItem.location)
    sort_columns = {
        'displayOrder': PortfolioItem.display_order,
        'createdAt': PortfolioItem.created_at,
        'completionDate': PortfolioItem.completion_date,
        'title': PortfolioItem.title,
        'projectValue': PortfolioItem.project_value,
    }
    default_sort = ('displayOrder', 'asc')

    def apply_filters(self, query, args):
        if args.get('category'):
            query = query.filter(PortfolioItem.service_category == args['category'])
        is_visible = parse_bool_arg(args, 'isVisible')
        if is_visible is not None:
            query = query.filter(PortfolioItem.is_visible == is_visible)
        is_featured = parse_bool_arg(args, 'isFeatured')
        if is_featured is not None:
            query = query.filter(PortfolioItem.is_featured == is_featured)
        return query

    def before_save(self, record, data):
        if record.display_order is None:
            record.display_order = next_display_order(self.session, PortfolioItem)

    def public_items(self, category=None):
        query = PortfolioItem.query.filter_by(is_visible=True)
        if category:
            query = query.filter_by(service_category=category)
        return query.order_by(
            PortfolioItem.is_featured.desc(),
            PortfolioItem.display_order.asc(),
            PortfolioItem.id.asc()
        ).all()

    def stats(self, tz_name: str = 'UTC') -> Dict[str, Any]:
        total = self.count()
        visible = self.count(PortfolioItem.is_visible.is_(True))
        total_value = self.session.query(func.sum(PortfolioItem.project_value)).scalar()

        return {
            'total': total,
            'visible': visible,
            'hidden': total - visible,
            'featured': self.count(PortfolioItem.is_featured.is_(True)),
            'newThisMonth': self.count(PortfolioItem.created_at >= start_of_month(tz_name)),
            'newThisYear': self.count(PortfolioItem.created_at >= start_of_year(tz_name)),
            'totalValue': float(total_value or 0),
            'categoryDistribution': self.distribution(PortfolioItem.service_category, 'category'),
        }
