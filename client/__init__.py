"""
Client Package - Browser-side half of the content layer
Handles: REST API client, cache-backed services, the admin state store
"""

from config import get_config
from .api import ApiClient, ProjectApi, BlogPostApi
from .cache import FileCache, MemoryCache, CONTENT_KEY, AUTH_KEY
from .services import ProjectService, BlogPostService
from .store import AdminStore


def build_store(conf=None, cache=None, session=None, max_workers=2):
    """
    Wire client, services and store from configuration

    Args:
        conf: Config class, defaults to the FLASK_ENV selection
        cache: Cache to use instead of a FileCache under CACHE_DIR
        session: requests-compatible session for the API client

    Returns:
        AdminStore: Unmounted store
    """
    conf = conf or get_config()
    cache = cache if cache is not None else FileCache(conf.CACHE_DIR)
    client = ApiClient(conf.API_BASE_URL, timeout=conf.API_TIMEOUT, session=session)
    return AdminStore(
        ProjectService(ProjectApi(client), cache),
        BlogPostService(BlogPostApi(client), cache),
        cache,
        max_workers=max_workers)


__all__ = [
    'ApiClient',
    'ProjectApi',
    'BlogPostApi',
    'FileCache',
    'MemoryCache',
    'CONTENT_KEY',
    'AUTH_KEY',
    'ProjectService',
    'BlogPostService',
    'AdminStore',
    'build_store'
]
