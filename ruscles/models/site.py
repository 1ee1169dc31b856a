"""
Site-wide records edited from the admin area: the business profile, the
key-value settings store and static page content.
"""

from ruscles import db
from ruscles.utils.dates import utcnow, isoformat

# BusinessInfo is a single row under this primary key
BUSINESS_INFO_ID = 1


class BusinessInfo(db.Model):
    __tablename__ = 'business_info'

    id = db.Column(db.Integer, primary_key=True, default=BUSINESS_INFO_ID)
    company_name = db.Column(db.String(200), nullable=False)
    tagline = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)
    address = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    website = db.Column(db.String(255), nullable=True)
    logo = db.Column(db.String(512), nullable=True)
    social_media = db.Column(db.JSON, nullable=False, default=dict)
    business_hours = db.Column(db.JSON, nullable=False, default=dict)
    services = db.Column(db.JSON, nullable=False, default=dict)
    updated_by = db.Column(db.String(255), nullable=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'companyName': self.company_name,
            'tagline': self.tagline,
            'description': self.description,
            'address': self.address,
            'phone': self.phone,
            'email': self.email,
            'website': self.website,
            'logo': self.logo,
            'socialMedia': self.social_media or {},
            'businessHours': self.business_hours or {},
            'services': self.services or {},
            'updatedBy': self.updated_by,
            'updatedAt': isoformat(self.updated_at),
        }


class Setting(db.Model):
    __tablename__ = 'settings'

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(100), unique=True, nullable=False, index=True)
    value = db.Column(db.Text, nullable=False)
    description = db.Column(db.String(255), nullable=True)
    is_public = db.Column(db.Boolean, default=False, nullable=False)
    updated_by = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'key': self.key,
            'value': self.value,
            'description': self.description,
            'isPublic': self.is_public,
            'updatedBy': self.updated_by,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }


class PageContent(db.Model):
    __tablename__ = 'page_content'

    id = db.Column(db.Integer, primary_key=True)
    slug = db.Column(db.String(100), unique=True, nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False, default='')
    meta_description = db.Column(db.String(500), nullable=True)
    updated_by = db.Column(db.String(255), nullable=True)
    last_updated = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'slug': self.slug,
            'title': self.title,
            'content': self.content,
            'metaDescription': self.meta_description,
            'updatedBy': self.updated_by,
            'lastUpdated': isoformat(self.last_updated),
        }
