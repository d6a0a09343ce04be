import json

import pytest

from app import create_app
from extensions import db
from repositories import ProjectRepository, BlogPostRepository


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def project_repo(app):
    return ProjectRepository()


@pytest.fixture
def post_repo(app):
    return BlogPostRepository()


def make_project(**overrides):
    project = {
        'id': 'p1',
        'title': 'Neural Grid',
        'description': 'Realtime mesh visualiser',
        'technologies': ['React', 'Three.js', 'React'],
        'image': 'https://img.example/grid.png',
        'demoUrl': 'https://grid.example',
        'githubUrl': 'https://github.com/example/grid',
        'featured': False,
        'order': 0,
    }
    project.update(overrides)
    return project


def make_post(**overrides):
    post = {
        'id': 'b1',
        'title': 'Hacking the Mainframe',
        'excerpt': 'Notes from the edge',
        'content': '# Jacking in\n\nText.',
        'image': '',
        'date': '2024-03-01T00:00:00Z',
        'readTime': '5 min read',
        'tags': ['react', 'AI'],
        'featured': False,
        'published': True,
        'author': 'Cyber Dev',
        'slug': 'hacking-the-mainframe',
    }
    post.update(overrides)
    return post


class StubResponse:
    """Minimal stand-in for requests.Response"""

    def __init__(self, status_code=200, body=None, raw=None, reason='OK'):
        self.status_code = status_code
        self.reason = reason
        if raw is not None:
            self.content = raw
        elif body is None:
            self.content = b''
        else:
            self.content = json.dumps(body).encode('utf-8')

    def json(self):
        return json.loads(self.content)


class StubSession:
    """Replays queued responses (or raises queued exceptions) and records calls"""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def request(self, method, url, json=None, headers=None, timeout=None):
        self.calls.append({'method': method, 'url': url, 'json': json, 'timeout': timeout})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FlaskSession:
    """Routes requests-style calls into a Flask test client"""

    def __init__(self, test_client, base_url='http://localhost'):
        self.test_client = test_client
        self.base_url = base_url
        self.up = True

    def request(self, method, url, json=None, headers=None, timeout=None):
        import requests
        if not self.up:
            raise requests.ConnectionError('connection refused')
        path = url[len(self.base_url):] if url.startswith(self.base_url) else url
        response = self.test_client.open(path, method=method, json=json, headers=headers)
        return StubResponse(response.status_code, raw=response.get_data(), reason=response.status)
