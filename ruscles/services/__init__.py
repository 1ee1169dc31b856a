from .identity_service import IdentityService, AdminAccessPolicy, Principal
from .google_auth_service import GoogleAuthService, GoogleProfile
from .testimonial_service import TestimonialService
from .portfolio_service import PortfolioService
from .blog_service import BlogService
from .project_service import ProjectService
from .customer_service import CustomerService
from .form_service import FormService
from .contact_service import ContactService
from .settings_service import SettingsService
from .site_content_service import BusinessInfoService, PageContentService
from .dashboard_service import DashboardService
from .database_service import DatabaseService

__all__ = [
    'IdentityService',
    'AdminAccessPolicy',
    'Principal',
    'GoogleAuthService',
    'GoogleProfile',
    'TestimonialService',
    'PortfolioService',
    'BlogService',
    'ProjectService',
    'CustomerService',
    'FormService',
    'ContactService',
    'SettingsService',
    'BusinessInfoService',
    'PageContentService',
    'DashboardService',
    'DatabaseService',
]
