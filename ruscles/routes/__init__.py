from .auth import auth_bp
from .testimonials import testimonials_bp
from .portfolio import portfolio_bp
from .blog import blog_bp
from .customers import customers_bp
from .projects import projects_bp
from .forms import forms_bp
from .site import settings_bp, business_info_bp, pages_bp
from .dashboard import dashboard_bp
from .system import system_bp
from .contact import contact_bp
from .public import public_bp
from .admin_pages import admin_pages_bp

__all__ = [
    'auth_bp', 'testimonials_bp', 'portfolio_bp', 'blog_bp', 'customers_bp', 'projects_bp',
    'forms_bp', 'settings_bp', 'business_info_bp', 'pages_bp', 'dashboard_bp', 'system_bp',
    'contact_bp', 'public_bp', 'admin_pages_bp',
]
