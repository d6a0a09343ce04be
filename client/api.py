"""
API Client - Typed, fail-fast access to the content REST API
Handles: URL building, JSON encoding, error normalization (no retries, no caching)
"""

import logging
from urllib.parse import quote

import requests

from utils.errors import ConfigurationError, RemoteError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10  # seconds, connect and read


class ApiClient:
    """
    Thin wrapper over a requests session

    Every failure surfaces as an ApiError: RemoteError for non-2xx responses,
    TransportError (status 0) for connection problems, timeouts and bodies
    that are not JSON. A client without a base URL can be built but every
    call raises ConfigurationError.
    """

    def __init__(self, base_url, timeout=DEFAULT_TIMEOUT, session=None):
        self.base_url = (base_url or '').rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        if not self.base_url:
            logger.warning('API base URL not configured. API requests will fail.')

    @property
    def configured(self):
        return bool(self.base_url)

    def request(self, method, path, payload=None):
        """
        Perform one API call

        Args:
            method (str): HTTP method
            path (str): Path below the base URL, starting with '/'
            payload (dict, optional): JSON body

        Returns:
            Decoded JSON, or None for an empty body
        """
        if not self.configured:
            raise ConfigurationError('API base URL is not configured', missing=['API_BASE_URL'])

        url = f'{self.base_url}{path}'
        try:
            response = self.session.request(
                method, url,
                json=payload,
                headers={'Accept': 'application/json'},
                timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug(f'{method} {url} failed: {str(e)}')
            raise TransportError() from e

        if not 200 <= response.status_code < 300:
            raise RemoteError(response.status_code, f'API request failed: {_error_message(response)}')

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError('API returned a response that is not JSON') from e

    def get(self, path):
        return self.request('GET', path)

    def post(self, path, payload):
        return self.request('POST', path, payload)

    def put(self, path, payload):
        return self.request('PUT', path, payload)

    def delete(self, path):
        return self.request('DELETE', path)


def _error_message(response):
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get('error'):
        return body['error']
    return response.reason or str(response.status_code)


def _segment(value):
    return quote(str(value), safe='')


class ProjectApi:
    """Project endpoints"""

    def __init__(self, client):
        self.client = client

    def get_all(self):
        return self.client.get('/projects')

    def get_by_id(self, project_id):
        return self.client.get(f'/projects/{_segment(project_id)}')

    def get_featured(self):
        return self.client.get('/projects/featured')

    def create(self, project):
        return self.client.post('/projects', project)

    def update(self, project_id, changes):
        return self.client.put(f'/projects/{_segment(project_id)}', changes)

    def delete(self, project_id):
        return self.client.delete(f'/projects/{_segment(project_id)}')


class BlogPostApi:
    """Blog post endpoints"""

    def __init__(self, client):
        self.client = client

    def get_all(self):
        return self.client.get('/blog-posts')

    def get_by_id(self, post_id):
        return self.client.get(f'/blog-posts/{_segment(post_id)}')

    def get_by_slug(self, slug):
        return self.client.get(f'/blog-posts/slug/{_segment(slug)}')

    def get_featured(self):
        return self.client.get('/blog-posts/featured')

    def get_published(self):
        return self.client.get('/blog-posts/published')

    def create(self, post):
        return self.client.post('/blog-posts', post)

    def update(self, post_id, changes):
        return self.client.put(f'/blog-posts/{_segment(post_id)}', changes)

    def delete(self, post_id):
        return self.client.delete(f'/blog-posts/{_segment(post_id)}')
