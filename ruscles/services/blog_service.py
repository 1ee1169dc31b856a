import logging
from typing import Any, Dict

from ruscles.exceptions import ConflictError, NotFoundError, ValidationError
from ruscles.models.blog import BlogPost
from ruscles.models.enums import ContentStatus, parse_enum
from ruscles.services.base import (
    ResourceService, as_str, as_int, as_datetime, as_str_list, as_enum
)
from ruscles.utils.dates import utcnow
from ruscles.utils.text import slugify

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200


class BlogService(ResourceService):
    """Service for blog posts; slugs are derived from the title"""
    model = BlogPost
    label = 'Blog post'
    plural = 'posts'
    fields = {
        'title': ('title', as_str),
        'content': ('content', as_str),
        'excerpt': ('excerpt', as_str),
        'status': ('status', as_enum(ContentStatus)),
        'scheduledFor': ('scheduled_for', as_datetime),
        'tags': ('tags', as_str_list),
        'categories': ('categories', as_str_list),
        'featuredImage': ('featured_image', as_str),
        'seoTitle': ('seo_title', as_str),
        'seoDescription': ('seo_description', as_str),
        'readingTime': ('reading_time', as_int),
    }
    required = ('title', 'content')
    defaults = {'status': ContentStatus.DRAFT, 'tags': list, 'categories': list}
    search_columns = (BlogPost.title, BlogPost.content, BlogPost.excerpt)
    sort_columns = {
        'createdAt': BlogPost.created_at,
        'publishedAt': BlogPost.published_at,
        'title': BlogPost.title,
        'viewCount': BlogPost.view_count,
    }

    def conflict_message(self):
        return 'A blog post with this title already exists'

    def apply_filters(self, query, args):
        status = args.get('status')
        if status and status != 'all':
            query = query.filter(BlogPost.status == parse_enum(ContentStatus, status, 'status'))
        return query

    def _assign_slug(self, record):
        slug = slugify(record.title)
        if not slug:
            raise ValidationError('title must contain letters or digits')
        if slug == record.slug:
            return
        with self.session.no_autoflush:
            clash = BlogPost.query.filter(BlogPost.slug == slug, BlogPost.id != record.id).first()
        if clash:
            raise ConflictError(self.conflict_message())
        record.slug = slug

    def before_save(self, record, data):
        self._assign_slug(record)
        # published_at is stamped the first time a post goes live
        if record.status == ContentStatus.PUBLISHED and record.published_at is None:
            record.published_at = utcnow()
        if record.reading_time is None and record.content:
            record.reading_time = max(1, round(len(record.content.split()) / WORDS_PER_MINUTE))

    # -- public reads -----------------------------------------------------

    def published_query(self):
        return BlogPost.query.filter(BlogPost.status == ContentStatus.PUBLISHED)

    def get_published_by_slug(self, slug: str) -> BlogPost:
        post = self.published_query().filter(BlogPost.slug == slug).first()
        if post is None:
            raise NotFoundError('Blog post not found')
        post.view_count = (post.view_count or 0) + 1
        self.session.commit()
        return post

    def stats(self) -> Dict[str, Any]:
        by_status = self.count_by(BlogPost.status, ContentStatus)
        return {
            'total': sum(by_status.values()),
            'published': by_status['PUBLISHED'],
            'draft': by_status['DRAFT'],
            'scheduled': by_status['SCHEDULED'],
            'archived': by_status['ARCHIVED'],
        }
