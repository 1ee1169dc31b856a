from ruscles import db
from ruscles.models.enums import ContentStatus
from ruscles.utils.dates import utcnow, isoformat


class BlogPost(db.Model):
    __tablename__ = 'blog_posts'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    excerpt = db.Column(db.Text, nullable=True)
    status = db.Column(db.Enum(ContentStatus), nullable=False, default=ContentStatus.DRAFT, index=True)
    published_at = db.Column(db.DateTime, nullable=True, index=True)
    scheduled_for = db.Column(db.DateTime, nullable=True)

    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    author = db.relationship('User')

    tags = db.Column(db.JSON, nullable=False, default=list)
    categories = db.Column(db.JSON, nullable=False, default=list)
    featured_image = db.Column(db.String(512), nullable=True)
    seo_title = db.Column(db.String(255), nullable=True)
    seo_description = db.Column(db.String(500), nullable=True)
    reading_time = db.Column(db.Integer, nullable=True)
    view_count = db.Column(db.Integer, default=0, nullable=False)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'content': self.content,
            'excerpt': self.excerpt,
            'status': self.status.value,
            'publishedAt': isoformat(self.published_at),
            'scheduledFor': isoformat(self.scheduled_for),
            'author': self.author.to_summary() if self.author else None,
            'tags': self.tags or [],
            'categories': self.categories or [],
            'featuredImage': self.featured_image,
            'seoTitle': self.seo_title,
            'seoDescription': self.seo_description,
            'readingTime': self.reading_time,
            'viewCount': self.view_count,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
