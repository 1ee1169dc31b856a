"""
Business profile singleton and static page content.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from ruscles.exceptions import NotFoundError, ValidationError
from ruscles.middleware.validation import ValidationMiddleware
from ruscles.models.site import BusinessInfo, PageContent, BUSINESS_INFO_ID
from ruscles.schemas import BusinessInfoPayload, validate_document
from ruscles.utils.pagination import parse_page_args, paginate
from ruscles.utils.text import slugify

logger = logging.getLogger(__name__)

# wire name -> column
BUSINESS_INFO_FIELDS = {
    'companyName': 'company_name',
    'tagline': 'tagline',
    'description': 'description',
    'address': 'address',
    'phone': 'phone',
    'email': 'email',
    'website': 'website',
    'logo': 'logo',
    'socialMedia': 'social_media',
    'businessHours': 'business_hours',
    'services': 'services',
}


class BusinessInfoService:
    """The business profile is one row under BUSINESS_INFO_ID"""

    def __init__(self, session):
        self.session = session

    def get(self) -> Optional[BusinessInfo]:
        return self.session.get(BusinessInfo, BUSINESS_INFO_ID)

    def upsert(self, data: Dict[str, Any], updated_by: Optional[str]) -> Tuple[BusinessInfo, bool]:
        """Write the profile; returns (business_info, created)."""
        ValidationMiddleware.require_fields(data, ['companyName'])
        payload = validate_document(BusinessInfoPayload, data, 'business info')

        info = self.get()
        created = info is None
        if created:
            info = BusinessInfo(id=BUSINESS_INFO_ID)
            self.session.add(info)

        for wire, column in BUSINESS_INFO_FIELDS.items():
            default = {} if wire in ('socialMedia', 'businessHours', 'services') else None
            setattr(info, column, payload.get(wire, default))
        info.updated_by = updated_by

        try:
            self.session.commit()
        except IntegrityError:
            # Another writer created the row first; apply this write on top of it
            self.session.rollback()
            if not created:
                raise
            return self.upsert(data, updated_by)

        logger.info(f"Business info {'created' if created else 'updated'} by {updated_by}")
        return info, created


class PageContentService:
    """Static page records addressed by slug"""

    def __init__(self, session):
        self.session = session

    def list(self, args) -> Tuple[List[PageContent], Dict[str, int]]:
        page, limit = parse_page_args(args)
        return paginate(PageContent.query.order_by(PageContent.slug.asc()), page, limit)

    def get(self, slug: str) -> PageContent:
        page = PageContent.query.filter_by(slug=slug).first()
        if page is None:
            raise NotFoundError('Page not found')
        return page

    def upsert(self, slug: str, data: Dict[str, Any], updated_by: Optional[str]) -> Tuple[PageContent, bool]:
        normalised = slugify(slug)
        if not normalised or normalised != slug:
            raise ValidationError('slug must be lowercase letters, digits and hyphens')
        ValidationMiddleware.require_fields(data, ['title'])

        content = data.get('content') or ''
        if not isinstance(content, str):
            raise ValidationError('content must be a string')

        page = PageContent.query.filter_by(slug=slug).first()
        created = page is None
        if created:
            page = PageContent(slug=slug)
            self.session.add(page)

        page.title = str(data['title']).strip()
        page.content = content
        page.meta_description = data.get('metaDescription')
        page.updated_by = updated_by
        self.session.commit()
        logger.info(f"Page {slug} {'created' if created else 'updated'}")
        return page, created

    def delete(self, slug: str) -> None:
        page = self.get(slug)
        self.session.delete(page)
        self.session.commit()
        logger.info(f"Deleted page {slug}")
