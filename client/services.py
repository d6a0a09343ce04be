"""
Services Module - Resilient content access for the site and admin store

Reads never raise: when the API call fails for any reason the last cached
snapshot is served instead, narrowed with the same filter the remote read
applies. Writes never fall back; they log and raise ServiceError.
"""

import logging
from collections import namedtuple
from datetime import datetime

from utils.dates import parse_datetime
from utils.errors import ServiceError
from utils.text import unique_sorted
from .cache import snapshot_collection

logger = logging.getLogger(__name__)

# Outcome of one read; error is None when the API answered
ReadResult = namedtuple('ReadResult', ['value', 'error'])

BLOG_POST_STATUSES = ('all', 'published', 'draft', 'featured')


def _instant(value):
    """Sort key for an ISO-8601 wire timestamp, unparseable values first"""
    if not value:
        return datetime.min
    try:
        return parse_datetime(value)
    except (TypeError, ValueError, AttributeError):
        return datetime.min


def sort_projects(projects):
    """order ascending, then createdAt descending"""
    ordered = sorted(projects, key=lambda p: _instant(p.get('createdAt')), reverse=True)
    return sorted(ordered, key=lambda p: p.get('order') or 0)


def sort_blog_posts(posts):
    """date descending (undated last), then createdAt descending"""
    ordered = sorted(posts, key=lambda p: _instant(p.get('createdAt')), reverse=True)
    return sorted(ordered, key=lambda p: (p.get('date') is not None, _instant(p.get('date'))), reverse=True)


def matches_search(post, term):
    """Case-insensitive substring match over title, excerpt and tags"""
    if not term:
        return True
    needle = term.lower()
    return (needle in (post.get('title') or '').lower()
            or needle in (post.get('excerpt') or '').lower()
            or any(needle in tag.lower() for tag in post.get('tags') or []))


def matches_status(post, status):
    if status not in BLOG_POST_STATUSES:
        raise ValueError(f"unknown blog post status {status!r}")
    if status == 'published':
        return bool(post.get('published'))
    if status == 'draft':
        return not post.get('published')
    if status == 'featured':
        return bool(post.get('featured'))
    return True


def _find(records, key, value):
    return next((r for r in records if r.get(key) == value), None)


class FallbackReader:
    """
    Wraps remote reads with a cache fallback

    Args:
        cache: Cache holding the content snapshot
        collection (str): Snapshot collection name ('projects', 'blogPosts')
        sort (callable): Listing order applied to cached records
    """

    def __init__(self, cache, collection, sort):
        self.cache = cache
        self.collection = collection
        self.sort = sort
        self.last_error = None

    def cached(self):
        return self.sort(snapshot_collection(self.cache, self.collection))

    def fetch(self, remote_call, select):
        """
        Run `remote_call`; on failure fall back to `select(cached records)`

        Args:
            remote_call (callable): Zero-argument API call
            select (callable): Filter applied to the cached records, the
                same predicate the remote read would have applied

        Returns:
            ReadResult: The value served and the error behind a fallback,
                reported for this call only
        """
        try:
            result = remote_call()
        except Exception as e:
            logger.warning(f"API unavailable, using cached {self.collection}: {str(e)}")
            self.last_error = e
            return ReadResult(select(self.cached()), e)
        self.last_error = None
        return ReadResult(result, None)

    def read(self, remote_call, select):
        return self.fetch(remote_call, select).value


class ContentService:
    """Shared write path"""

    entity_name = None

    def __init__(self, api, reader):
        self.api = api
        self.reader = reader

    @property
    def last_error(self):
        """Error behind the most recent fallback of any read on this service"""
        return self.reader.last_error

    def _write(self, verb, call, *args):
        try:
            return call(*args)
        except Exception as e:
            logger.error(f"Failed to {verb} {self.entity_name}: {str(e)}")
            raise ServiceError(f"Unable to {verb} {self.entity_name}: {str(e)}") from e

    def create(self, record):
        return self._write('create', self.api.create, record)

    def update(self, record_id, changes):
        return self._write('update', self.api.update, record_id, changes)

    def delete(self, record_id):
        self._write('delete', self.api.delete, record_id)
        return True


class ProjectService(ContentService):
    entity_name = 'project'

    def __init__(self, api, cache):
        super().__init__(api, FallbackReader(cache, 'projects', sort_projects))

    def get_all(self):
        return self.load_all().value

    def load_all(self):
        """get_all, reporting whether this particular call fell back"""
        return self.reader.fetch(self.api.get_all, lambda projects: projects)

    def get_by_id(self, project_id):
        return self.reader.read(
            lambda: self.api.get_by_id(project_id),
            lambda projects: _find(projects, 'id', project_id))

    def get_featured(self):
        return self.reader.read(
            self.api.get_featured,
            lambda projects: [p for p in projects if p.get('featured')])

    def get_technologies(self):
        """Sorted unique technologies across all projects"""
        return unique_sorted(p.get('technologies') for p in self.get_all())


class BlogPostService(ContentService):
    entity_name = 'blog post'

    def __init__(self, api, cache):
        super().__init__(api, FallbackReader(cache, 'blogPosts', sort_blog_posts))

    def get_all(self):
        return self.load_all().value

    def load_all(self):
        """get_all, reporting whether this particular call fell back"""
        return self.reader.fetch(self.api.get_all, lambda posts: posts)

    def get_by_id(self, post_id):
        return self.reader.read(
            lambda: self.api.get_by_id(post_id),
            lambda posts: _find(posts, 'id', post_id))

    def get_by_slug(self, slug):
        return self.reader.read(
            lambda: self.api.get_by_slug(slug),
            lambda posts: _find(posts, 'slug', slug))

    def get_featured(self):
        return self.reader.read(
            self.api.get_featured,
            lambda posts: [p for p in posts if p.get('featured') and p.get('published')])

    def get_published(self):
        return self.reader.read(
            self.api.get_published,
            lambda posts: [p for p in posts if p.get('published')])

    def get_by_tag(self, tag):
        """Published posts carrying exactly `tag` (case-sensitive)"""
        return [p for p in self.get_published() if tag in (p.get('tags') or [])]

    def get_tags(self):
        """Sorted unique tags of published posts"""
        return unique_sorted(p.get('tags') for p in self.get_published())

    def search(self, term='', tag=None):
        """
        Published posts matching a free-text term and, optionally, a tag

        Args:
            term (str): Case-insensitive substring of the title, excerpt or
                any tag; empty matches everything
            tag (str, optional): Exact, case-sensitive tag

        Returns:
            list: Matching posts in listing order
        """
        return [p for p in self.get_published()
                if matches_search(p, term) and (not tag or tag in (p.get('tags') or []))]
