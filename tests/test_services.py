import pytest

from client.cache import CONTENT_KEY, MemoryCache
from client.services import BlogPostService, ProjectService, sort_blog_posts, sort_projects
from utils.errors import RemoteError, ServiceError, TransportError
from conftest import make_project, make_post


class DownApi:
    """Every call fails as if the server were unreachable"""

    def __getattr__(self, name):
        def call(*args, **kwargs):
            raise TransportError()
        return call


class RecordingApi:
    """Returns canned results and records what was asked"""

    def __init__(self, **results):
        self.results = results
        self.calls = []

    def __getattr__(self, name):
        if name not in self.results:
            raise AttributeError(name)

        def call(*args):
            self.calls.append((name, args))
            return self.results[name]
        return call


def snapshot_cache():
    return MemoryCache({CONTENT_KEY: {
        'projects': [
            make_project(id='p2', order=2, featured=True, technologies=['Rust', 'React']),
            make_project(id='p1', order=1, featured=False, technologies=['Python']),
        ],
        'blogPosts': [
            make_post(id='A', slug='a', featured=True, published=False, tags=['draft']),
            make_post(id='B', slug='b', featured=True, published=True, tags=['react', 'AI']),
            make_post(id='C', slug='c', featured=False, published=True, tags=['rust'],
                      date='2024-05-01T00:00:00Z'),
        ],
        'aboutContent': {},
        'contactInfo': {},
    }})


class TestProjectFallback:

    def test_get_all_serves_cached_in_listing_order(self):
        service = ProjectService(DownApi(), snapshot_cache())
        assert [p['id'] for p in service.get_all()] == ['p1', 'p2']
        assert isinstance(service.last_error, TransportError)

    def test_get_featured_filters_cached(self):
        service = ProjectService(DownApi(), snapshot_cache())
        assert [p['id'] for p in service.get_featured()] == ['p2']

    def test_get_by_id(self):
        service = ProjectService(DownApi(), snapshot_cache())
        assert service.get_by_id('p1')['id'] == 'p1'
        assert service.get_by_id('ghost') is None

    def test_empty_cache_gives_empty_results(self):
        service = ProjectService(DownApi(), MemoryCache())
        assert service.get_all() == []
        assert service.get_featured() == []
        assert service.get_by_id('p1') is None

    def test_malformed_snapshot_is_ignored(self):
        service = ProjectService(DownApi(), MemoryCache({CONTENT_KEY: {'projects': 'oops'}}))
        assert service.get_all() == []

    def test_remote_errors_also_fall_back(self):
        class NotFoundApi(DownApi):
            def get_by_id(self, project_id):
                raise RemoteError(404, 'Project not found')

        service = ProjectService(NotFoundApi(), snapshot_cache())
        assert service.get_by_id('p2')['id'] == 'p2'
        assert service.last_error.status == 404

    def test_technologies(self):
        service = ProjectService(DownApi(), snapshot_cache())
        assert service.get_technologies() == ['Python', 'React', 'Rust']

    def test_remote_success_clears_last_error(self):
        api = RecordingApi(get_all=[make_project()])
        service = ProjectService(api, snapshot_cache())
        service.reader.last_error = TransportError()

        assert service.get_all() == [make_project()]
        assert service.last_error is None

    def test_cached_results_are_copies(self):
        cache = snapshot_cache()
        service = ProjectService(DownApi(), cache)
        service.get_all()[0]['title'] = 'mutated'
        assert service.get_by_id('p1')['title'] == 'Neural Grid'


class TestBlogPostFallback:

    def test_get_all_includes_drafts(self):
        service = BlogPostService(DownApi(), snapshot_cache())
        assert [p['id'] for p in service.get_all()] == ['C', 'A', 'B']

    def test_featured_excludes_drafts(self):
        service = BlogPostService(DownApi(), snapshot_cache())
        assert [p['id'] for p in service.get_featured()] == ['B']

    def test_published(self):
        service = BlogPostService(DownApi(), snapshot_cache())
        assert {p['id'] for p in service.get_published()} == {'B', 'C'}

    def test_get_by_slug(self):
        service = BlogPostService(DownApi(), snapshot_cache())
        assert service.get_by_slug('c')['id'] == 'C'
        assert service.get_by_slug('zzz') is None

    def test_tags_come_from_published_posts(self):
        service = BlogPostService(DownApi(), snapshot_cache())
        assert service.get_tags() == ['AI', 'react', 'rust']
        assert [p['id'] for p in service.get_by_tag('rust')] == ['C']
        assert service.get_by_tag('draft') == []
        assert service.get_by_tag('ai') == []

    def test_remote_read_passes_through(self):
        api = RecordingApi(get_by_slug=make_post())
        service = BlogPostService(api, MemoryCache())
        assert service.get_by_slug('hacking-the-mainframe')['id'] == 'b1'
        assert api.calls == [('get_by_slug', ('hacking-the-mainframe',))]


class TestWrites:

    @pytest.mark.parametrize('service_class', [ProjectService, BlogPostService])
    def test_writes_raise_service_error(self, service_class):
        service = service_class(DownApi(), snapshot_cache())
        for write, args in (('create', ({'id': 'x'},)), ('update', ('x', {'title': 'y'})), ('delete', ('x',))):
            with pytest.raises(ServiceError) as exc:
                getattr(service, write)(*args)
            assert isinstance(exc.value.__cause__, TransportError)

    def test_writes_never_touch_the_cache(self):
        cache = snapshot_cache()
        before = cache.get(CONTENT_KEY)
        with pytest.raises(ServiceError):
            ProjectService(DownApi(), cache).delete('p1')
        assert cache.get(CONTENT_KEY) == before

    def test_successful_writes(self):
        api = RecordingApi(create=make_project(), update=make_project(featured=True), delete=None)
        service = ProjectService(api, MemoryCache())

        assert service.create(make_project()) == make_project()
        assert service.update('p1', {'featured': True})['featured'] is True
        assert service.delete('p1') is True
        assert [name for name, _ in api.calls] == ['create', 'update', 'delete']


def test_sort_projects():
    projects = [
        {'id': 'a', 'order': 1, 'createdAt': '2024-01-01T00:00:00Z'},
        {'id': 'b', 'order': 0, 'createdAt': '2024-01-01T00:00:00Z'},
        {'id': 'c', 'order': 1, 'createdAt': '2024-02-01T00:00:00Z'},
    ]
    assert [p['id'] for p in sort_projects(projects)] == ['b', 'c', 'a']


def test_sort_blog_posts_puts_undated_last():
    posts = [
        {'id': 'undated', 'date': None, 'createdAt': '2024-09-01T00:00:00Z'},
        {'id': 'old', 'date': '2023-01-01T00:00:00Z', 'createdAt': '2024-01-01T00:00:00Z'},
        {'id': 'new', 'date': '2024-01-01T00:00:00Z', 'createdAt': '2024-01-01T00:00:00Z'},
    ]
    assert [p['id'] for p in sort_blog_posts(posts)] == ['new', 'old', 'undated']


def test_sort_blog_posts_compares_instants_not_strings():
    posts = [
        {'id': 'earlier', 'date': '2024-01-01T00:00:00Z', 'createdAt': '2024-01-01T00:00:00Z'},
        {'id': 'later', 'date': '2024-01-01T00:00:00.500000Z', 'createdAt': '2024-01-01T00:00:00Z'},
    ]
    assert [p['id'] for p in sort_blog_posts(posts)] == ['later', 'earlier']


def test_sort_projects_ties_on_sub_second_created_at():
    projects = [
        {'id': 'whole', 'order': 0, 'createdAt': '2024-01-01T00:00:00Z'},
        {'id': 'fraction', 'order': 0, 'createdAt': '2024-01-01T00:00:00.250000Z'},
        {'id': 'offset', 'order': 0, 'createdAt': '2024-01-01T01:00:00+02:00'},
    ]
    assert [p['id'] for p in sort_projects(projects)] == ['fraction', 'whole', 'offset']


class TestReadResult:

    def test_fallback_reports_its_own_error(self):
        service = ProjectService(DownApi(), snapshot_cache())
        result = service.load_all()
        assert [p['id'] for p in result.value] == ['p1', 'p2']
        assert isinstance(result.error, TransportError)

    def test_remote_success_has_no_error(self):
        service = ProjectService(RecordingApi(get_all=[]), snapshot_cache())
        value, error = service.load_all()
        assert value == []
        assert error is None


class TestSearch:

    def test_search_over_cached_posts(self):
        service = BlogPostService(DownApi(), snapshot_cache())
        assert [p['id'] for p in service.search('REACT')] == ['B']
        assert [p['id'] for p in service.search('edge')] == ['C', 'B']
        assert service.search('draft') == []
        assert [p['id'] for p in service.search('', tag='rust')] == ['C']
        assert service.search('react', tag='rust') == []

    def test_search_over_remote_posts(self):
        api = RecordingApi(get_published=[
            make_post(id='r1', title='Neon Nights', tags=['synthwave']),
            make_post(id='r2', title='Quiet Code', excerpt='Nothing neon here', tags=['calm']),
        ])
        service = BlogPostService(api, MemoryCache())

        assert [p['id'] for p in service.search('neon')] == ['r1', 'r2']
        assert [p['id'] for p in service.search('SYNTH')] == ['r1']
        assert [p['id'] for p in service.search('neon', tag='calm')] == ['r2']
        assert service.last_error is None
