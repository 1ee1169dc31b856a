from .user import User
from .form_submission import FormSubmission, FormResponse
from .testimonial import Testimonial
from .portfolio import PortfolioItem
from .blog import BlogPost
from .project import Project
from .site import BusinessInfo, Setting, PageContent, BUSINESS_INFO_ID

__all__ = [
    'User', 'FormSubmission', 'FormResponse', 'Testimonial', 'PortfolioItem',
    'BlogPost', 'Project', 'BusinessInfo', 'Setting', 'PageContent', 'BUSINESS_INFO_ID',
]
