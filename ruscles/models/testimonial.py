from ruscles import db
from ruscles.utils.dates import utcnow, isoformat


class Testimonial(db.Model):
    __tablename__ = 'testimonials'

    id = db.Column(db.Integer, primary_key=True)
    customer_name = db.Column(db.String(150), nullable=False)
    customer_title = db.Column(db.String(150), nullable=True)
    customer_company = db.Column(db.String(150), nullable=True)
    customer_photo = db.Column(db.String(512), nullable=True)
    testimonial_text = db.Column(db.Text, nullable=False)
    rating = db.Column(db.Integer, nullable=True)
    project_type = db.Column(db.String(100), nullable=True, index=True)

    is_visible = db.Column(db.Boolean, default=True, nullable=False, index=True)
    is_featured = db.Column(db.Boolean, default=False, nullable=False, index=True)

    # Manual sort order, client controlled; not unique
    display_order = db.Column(db.Integer, default=0, nullable=False, index=True)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'customerName': self.customer_name,
            'customerTitle': self.customer_title,
            'customerCompany': self.customer_company,
            'customerPhoto': self.customer_photo,
            'testimonialText': self.testimonial_text,
            'rating': self.rating,
            'projectType': self.project_type,
            'isVisible': self.is_visible,
            'isFeatured': self.is_featured,
            'displayOrder': self.display_order,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    @staticmethod
    def get_public():
        """Visible testimonials for the marketing site, featured first"""
        return Testimonial.query.filter_by(is_visible=True).order_by(
            Testimonial.is_featured.desc(),
            Testimonial.display_order.asc(),
            Testimonial.id.asc()
        ).all()
