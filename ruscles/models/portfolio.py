from ruscles import db
from ruscles.utils.dates import utcnow, isoformat


class PortfolioItem(db.Model):
    __tablename__ = 'portfolio_items'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    service_category = db.Column(db.String(100), nullable=False, index=True)
    images = db.Column(db.JSON, nullable=False, default=list)
    thumbnail_image = db.Column(db.String(512), nullable=False)
    completion_date = db.Column(db.DateTime, nullable=True)
    client_name = db.Column(db.String(150), nullable=True)
    project_value = db.Column(db.Float, nullable=True)
    location = db.Column(db.String(200), nullable=True)
    tags = db.Column(db.JSON, nullable=False, default=list)

    is_visible = db.Column(db.Boolean, default=True, nullable=False, index=True)
    is_featured = db.Column(db.Boolean, default=False, nullable=False, index=True)
    display_order = db.Column(db.Integer, default=0, nullable=False, index=True)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'serviceCategory': self.service_category,
            'images': self.images or [],
            'thumbnailImage': self.thumbnail_image,
            'completionDate': isoformat(self.completion_date),
            'clientName': self.client_name,
            'projectValue': self.project_value,
            'location': self.location,
            'tags': self.tags or [],
            'isVisible': self.is_visible,
            'isFeatured': self.is_featured,
            'displayOrder': self.display_order,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
