"""
Database Service for health checks and development utilities

This service provides:
- A live connectivity check with per-table row counts
- Idempotent seeding of the admin user, business info and default settings
- A transactional wipe of every table, for development and tests
"""

import logging
from typing import Any, Dict

from sqlalchemy import text

from ruscles.models import (
    User, FormSubmission, FormResponse, Testimonial, PortfolioItem, BlogPost,
    Project, BusinessInfo, Setting, PageContent, BUSINESS_INFO_ID
)
from ruscles.models.enums import Role
from ruscles.utils.text import name_from_email

logger = logging.getLogger(__name__)

COUNTED_MODELS = {
    'users': User,
    'formSubmissions': FormSubmission,
    'formResponses': FormResponse,
    'testimonials': Testimonial,
    'portfolioItems': PortfolioItem,
    'blogPosts': BlogPost,
    'projects': Project,
    'settings': Setting,
    'pages': PageContent,
}

# Children before parents so foreign keys never block the wipe
RESET_ORDER = (
    FormResponse, FormSubmission, BlogPost, Project, Testimonial, PortfolioItem,
    Setting, PageContent, BusinessInfo, User,
)

DEFAULT_SETTINGS = (
    ('site_name', 'Ruscles', 'Name shown in the site header', True),
    ('contact_email', 'info@ruscles.com', 'Public contact address', True),
    ('emergency_phone', '', 'Number shown for emergency call-outs', True),
    ('notification_email', '', 'Where new inquiries are reported', False),
)

DEFAULT_PAGES = (
    ('about', 'About Us'),
    ('services', 'Our Services'),
    ('contact', 'Contact'),
)


class DatabaseService:
    def __init__(self, session):
        self.session = session

    def check_connection(self) -> bool:
        try:
            self.session.execute(text('SELECT 1'))
            return True
        except Exception as e:
            self.session.rollback()
            logger.error(f"Database connection check failed: {str(e)}")
            return False

    def table_counts(self) -> Dict[str, int]:
        return {name: self.session.query(model).count() for name, model in COUNTED_MODELS.items()}

    def seed(self, admin_email: str, company_name: str) -> Dict[str, Any]:
        """Insert missing seed rows; existing rows are left untouched."""
        summary = {'adminCreated': False, 'businessInfoCreated': False, 'settingsCreated': 0, 'pagesCreated': 0}
        admin_email = admin_email.strip().lower()

        try:
            admin = User.query.filter_by(email=admin_email).first()
            if admin is None:
                self.session.add(User(
                    email=admin_email,
                    name=name_from_email(admin_email),
                    role=Role.ADMIN,
                    is_active=True,
                ))
                summary['adminCreated'] = True

            if self.session.get(BusinessInfo, BUSINESS_INFO_ID) is None:
                self.session.add(BusinessInfo(
                    id=BUSINESS_INFO_ID,
                    company_name=company_name,
                    social_media={},
                    business_hours={},
                    services={},
                    updated_by='seed',
                ))
                summary['businessInfoCreated'] = True

            existing_keys = {key for (key,) in self.session.query(Setting.key).all()}
            for key, value, description, is_public in DEFAULT_SETTINGS:
                if key not in existing_keys:
                    self.session.add(Setting(key=key, value=value, description=description,
                                             is_public=is_public, updated_by='seed'))
                    summary['settingsCreated'] += 1

            existing_pages = {slug for (slug,) in self.session.query(PageContent.slug).all()}
            for slug, title in DEFAULT_PAGES:
                if slug not in existing_pages:
                    self.session.add(PageContent(slug=slug, title=title, content='', updated_by='seed'))
                    summary['pagesCreated'] += 1

            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(f"Database seeded: {summary}")
        return summary

    def reset(self) -> Dict[str, int]:
        """Delete every row in one transaction; returns rows removed per table."""
        removed = {}
        try:
            for model in RESET_ORDER:
                removed[model.__tablename__] = self.session.query(model).delete(synchronize_session=False)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.warning(f"Database reset, rows removed: {removed}")
        return removed
