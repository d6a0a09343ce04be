import pytest
import requests

from client.api import ApiClient, ProjectApi, BlogPostApi
from utils.errors import ApiError, ConfigurationError, RemoteError, TransportError
from conftest import StubResponse, StubSession, make_project

BASE_URL = 'http://api.test/api'


def test_unconfigured_client_fails_fast():
    session = StubSession()
    client = ApiClient('', session=session)

    assert not client.configured
    with pytest.raises(ConfigurationError):
        ProjectApi(client).get_all()
    assert session.calls == []


def test_get_decodes_json_and_uses_timeout():
    session = StubSession(StubResponse(200, [make_project()]))
    projects = ProjectApi(ApiClient(BASE_URL + '/', session=session)).get_all()

    assert projects == [make_project()]
    assert session.calls == [{
        'method': 'GET',
        'url': 'http://api.test/api/projects',
        'json': None,
        'timeout': 10,
    }]


def test_put_sends_partial_body():
    session = StubSession(StubResponse(200, make_project(featured=True)))
    ProjectApi(ApiClient(BASE_URL, session=session)).update('p1', {'featured': True})

    call = session.calls[0]
    assert call['method'] == 'PUT'
    assert call['url'] == 'http://api.test/api/projects/p1'
    assert call['json'] == {'featured': True}


def test_path_segments_are_escaped():
    session = StubSession(StubResponse(200, {}))
    BlogPostApi(ApiClient(BASE_URL, session=session)).get_by_slug('a b/c')
    assert session.calls[0]['url'] == 'http://api.test/api/blog-posts/slug/a%20b%2Fc'


def test_non_2xx_carries_status_and_server_message():
    session = StubSession(StubResponse(404, {'error': 'Project not found'}, reason='NOT FOUND'))
    with pytest.raises(RemoteError) as exc:
        ProjectApi(ApiClient(BASE_URL, session=session)).get_by_id('ghost')
    assert exc.value.status == 404
    assert 'Project not found' in str(exc.value)


def test_non_2xx_without_json_uses_reason():
    session = StubSession(StubResponse(502, raw=b'<html>bad gateway</html>', reason='Bad Gateway'))
    with pytest.raises(RemoteError) as exc:
        ProjectApi(ApiClient(BASE_URL, session=session)).get_all()
    assert exc.value.status == 502
    assert 'Bad Gateway' in str(exc.value)


@pytest.mark.parametrize('failure', [
    requests.ConnectionError('refused'),
    requests.Timeout('too slow'),
])
def test_transport_failures_have_status_zero(failure):
    session = StubSession(failure)
    with pytest.raises(TransportError) as exc:
        ProjectApi(ApiClient(BASE_URL, session=session)).get_all()
    assert exc.value.status == 0
    assert isinstance(exc.value, ApiError)
    assert exc.value.__cause__ is failure


def test_invalid_json_is_transport_error():
    session = StubSession(StubResponse(200, raw=b'<!doctype html>'))
    with pytest.raises(TransportError):
        ProjectApi(ApiClient(BASE_URL, session=session)).get_all()


def test_no_content_returns_none():
    session = StubSession(StubResponse(204))
    assert ProjectApi(ApiClient(BASE_URL, session=session)).delete('p1') is None
    assert session.calls[0]['method'] == 'DELETE'


def test_custom_timeout_is_passed_through():
    session = StubSession(StubResponse(200, []))
    BlogPostApi(ApiClient(BASE_URL, timeout=2.5, session=session)).get_published()
    assert session.calls[0]['timeout'] == 2.5
    assert session.calls[0]['url'] == 'http://api.test/api/blog-posts/published'
