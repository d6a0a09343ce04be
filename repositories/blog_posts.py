from models import BlogPost
from utils.errors import DuplicateKey
from utils.fields import BLOG_POST_FIELDS, blog_post_for_create
from .base import BaseRepository


class BlogPostRepository(BaseRepository):
    """Blog posts, listed by publication date then newest first"""

    fields = BLOG_POST_FIELDS
    conflict_field = 'slug'

    def get_by_slug(self, slug):
        row = BlogPost.query.filter_by(slug=slug).first()
        return self.fields.to_wire(row) if row is not None else None

    def get_published(self):
        return self._records(self._ordered().filter(BlogPost.published.is_(True)))

    def get_featured(self):
        # Drafts are never featured publicly
        return self._records(
            self._ordered().filter(BlogPost.featured.is_(True), BlogPost.published.is_(True)))

    def prepare_create(self, record):
        return blog_post_for_create(record)

    def check_unique(self, values, exclude_id=None):
        slug = values.get('slug')
        if not slug:
            return
        query = BlogPost.query.filter(BlogPost.slug == slug)
        if exclude_id is not None:
            query = query.filter(BlogPost.id != exclude_id)
        if query.first() is not None:
            raise DuplicateKey(self.entity, 'slug', slug)
