"""
Admin Store - Single source of truth for loaded portfolio content

Every change goes through a named action and the pure `reduce` function,
which returns a new AdminState. The store then runs the side effects:
mirroring content to the cache snapshot, persisting the session user and
notifying subscribers. The snapshot is a best-effort backup and is not
transactional with the remote write that preceded it.
"""

import copy
import logging
import threading
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

from utils.dates import format_datetime, utcnow
from .cache import AUTH_KEY, CONTENT_KEY
from .services import matches_search, matches_status

logger = logging.getLogger(__name__)

LOAD_ERROR = 'Failed to load data from database'

AdminState = namedtuple('AdminState', [
    'user',
    'is_authenticated',
    'projects',
    'blog_posts',
    'about_content',
    'contact_info',
    'loading',
    'error',
])

CONTENT_FIELDS = ('projects', 'blog_posts', 'about_content', 'contact_info')

# Actions, one per named transition
SetUser = namedtuple('SetUser', ['user'])
UpdateUser = namedtuple('UpdateUser', ['changes'])
SetProjects = namedtuple('SetProjects', ['projects'])
AddProject = namedtuple('AddProject', ['project'])
UpdateProject = namedtuple('UpdateProject', ['project'])
DeleteProject = namedtuple('DeleteProject', ['project_id'])
SetBlogPosts = namedtuple('SetBlogPosts', ['blog_posts'])
AddBlogPost = namedtuple('AddBlogPost', ['blog_post'])
UpdateBlogPost = namedtuple('UpdateBlogPost', ['blog_post'])
DeleteBlogPost = namedtuple('DeleteBlogPost', ['blog_post_id'])
SetAboutContent = namedtuple('SetAboutContent', ['about_content'])
SetContactInfo = namedtuple('SetContactInfo', ['contact_info'])
HydrateContent = namedtuple('HydrateContent', ['projects', 'blog_posts', 'about_content', 'contact_info'])
SetLoading = namedtuple('SetLoading', ['loading'])
SetError = namedtuple('SetError', ['error'])
Logout = namedtuple('Logout', [])


DEFAULT_ABOUT_CONTENT = {
    'title': 'Digital Architect',
    'subtitle': 'Full Stack Developer & Digital Artist',
    'description': [
        "Greetings, fellow digital wanderer. I'm a full-stack developer and digital artist "
        "who thrives at the intersection of cutting-edge technology and creative expression.",
    ],
    'stats': {'projects': 50, 'years': 5, 'linesOfCode': 100000},
    'skills': [
        {'id': '1', 'category': 'Frontend Development', 'icon': 'Code',
         'technologies': ['React', 'TypeScript', 'Next.js', 'Tailwind CSS'], 'color': 'cyber-blue'},
        {'id': '2', 'category': 'Backend Development', 'icon': 'Zap',
         'technologies': ['Node.js', 'Python', 'PostgreSQL', 'Redis'], 'color': 'cyber-green'},
    ],
    'avatar': '',
    'updatedAt': None,
}

DEFAULT_CONTACT_INFO = {
    'email': 'contact@cyberdev.com',
    'phone': '',
    'location': 'Neo Tokyo, Cyber District',
    'discord': '',
    'socialLinks': {'github': '#', 'linkedin': '#', 'twitter': '#'},
    'responseTime': {'email': 'Within 24 hours', 'projects': 'Same day', 'urgent': 'Within 2 hours'},
    'updatedAt': None,
}


def initial_state():
    return AdminState(
        user=None,
        is_authenticated=False,
        projects=(),
        blog_posts=(),
        about_content=copy.deepcopy(DEFAULT_ABOUT_CONTENT),
        contact_info=copy.deepcopy(DEFAULT_CONTACT_INFO),
        loading=False,
        error=None,
    )


def _records(items):
    return tuple(copy.deepcopy(item) for item in items)


def _replace_by_id(items, record):
    return tuple(copy.deepcopy(record) if item['id'] == record['id'] else item for item in items)


def _without_id(items, record_id):
    return tuple(item for item in items if item['id'] != record_id)


def reduce(state, action):
    """
    Apply one action and return the next state

    Args:
        state (AdminState): Current state, never modified
        action: One of the action tuples above

    Returns:
        AdminState: New state (the same object for unknown actions)
    """
    kind = type(action)
    if kind is SetUser:
        user = copy.deepcopy(action.user)
        return state._replace(user=user, is_authenticated=user is not None)
    if kind is UpdateUser:
        if state.user is None:
            return state
        return state._replace(user={**state.user, **copy.deepcopy(action.changes)})
    if kind is SetProjects:
        return state._replace(projects=_records(action.projects))
    if kind is AddProject:
        return state._replace(projects=state.projects + _records([action.project]))
    if kind is UpdateProject:
        return state._replace(projects=_replace_by_id(state.projects, action.project))
    if kind is DeleteProject:
        return state._replace(projects=_without_id(state.projects, action.project_id))
    if kind is SetBlogPosts:
        return state._replace(blog_posts=_records(action.blog_posts))
    if kind is AddBlogPost:
        return state._replace(blog_posts=state.blog_posts + _records([action.blog_post]))
    if kind is UpdateBlogPost:
        return state._replace(blog_posts=_replace_by_id(state.blog_posts, action.blog_post))
    if kind is DeleteBlogPost:
        return state._replace(blog_posts=_without_id(state.blog_posts, action.blog_post_id))
    if kind is SetAboutContent:
        return state._replace(about_content=copy.deepcopy(action.about_content))
    if kind is SetContactInfo:
        return state._replace(contact_info=copy.deepcopy(action.contact_info))
    if kind is HydrateContent:
        return state._replace(
            projects=_records(action.projects),
            blog_posts=_records(action.blog_posts),
            about_content=copy.deepcopy(action.about_content),
            contact_info=copy.deepcopy(action.contact_info))
    if kind is SetLoading:
        return state._replace(loading=bool(action.loading))
    if kind is SetError:
        return state._replace(error=action.error)
    if kind is Logout:
        # Session only; loaded content stays, it is the public site's data too
        return state._replace(user=None, is_authenticated=False, error=None)
    return state


def content_snapshot(state):
    """JSON-ready aggregate stored under the content cache key"""
    return {
        'projects': [copy.deepcopy(p) for p in state.projects],
        'blogPosts': [copy.deepcopy(p) for p in state.blog_posts],
        'aboutContent': copy.deepcopy(state.about_content),
        'contactInfo': copy.deepcopy(state.contact_info),
    }


def filter_blog_posts(posts, term='', status='all'):
    """Posts matching a free-text term and a status (all, published, draft, featured)"""
    return [p for p in posts if matches_search(p, term) and matches_status(p, status)]


def count_blog_posts(posts):
    return {
        'total': len(posts),
        'published': sum(1 for p in posts if p.get('published')),
        'drafts': sum(1 for p in posts if not p.get('published')),
        'featured': sum(1 for p in posts if p.get('featured')),
    }


class AdminStore:
    """
    Reducer-driven store fed by the project and blog post services

    Args:
        project_service: ProjectService (or anything with its interface)
        blog_post_service: BlogPostService
        cache: Cache for the content snapshot and the session user
        max_workers (int): Parallel loads in load_data
    """

    def __init__(self, project_service, blog_post_service, cache, max_workers=2):
        self.max_workers = max_workers
        self.project_service = project_service
        self.blog_post_service = blog_post_service
        self.cache = cache
        self.state = initial_state()
        self._listeners = []
        self._lock = threading.RLock()

    def subscribe(self, listener):
        """Call `listener(state, action)` after every dispatch; returns an unsubscribe callable"""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
        return unsubscribe

    def dispatch(self, action):
        with self._lock:
            previous = self.state
            self.state = reduce(previous, action)
            current = self.state
            self._persist(previous, current)
            listeners = list(self._listeners)
        for listener in listeners:
            listener(current, action)
        return current

    def _persist(self, previous, current):
        content_changed = any(getattr(previous, name) is not getattr(current, name) for name in CONTENT_FIELDS)
        try:
            if content_changed:
                self.cache.set(CONTENT_KEY, content_snapshot(current))
            if previous.user is not current.user:
                if current.user is not None:
                    self.cache.set(AUTH_KEY, current.user)
                else:
                    self.cache.remove(AUTH_KEY)
        except Exception as e:
            logger.warning(f"Failed to persist admin state to cache: {str(e)}")

    # Lifecycle

    def mount(self):
        """Restore the session and cached content, then load from the API"""
        user = self.cache.get(AUTH_KEY)
        if isinstance(user, dict):
            self.dispatch(SetUser(user))

        snapshot = self.cache.get(CONTENT_KEY)
        if isinstance(snapshot, dict):
            self.dispatch(HydrateContent(
                projects=snapshot.get('projects') or [],
                blog_posts=snapshot.get('blogPosts') or [],
                about_content=snapshot.get('aboutContent') or self.state.about_content,
                contact_info=snapshot.get('contactInfo') or self.state.contact_info))

        self.load_data()
        return self.state

    def load_data(self):
        """
        Load projects and blog posts in parallel

        Never raises. When either service had to fall back to the cache the
        error slot is set so the UI can show a notice.
        """
        self.dispatch(SetLoading(True))
        self.dispatch(SetError(None))
        try:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                projects_future = pool.submit(self.project_service.load_all)
                posts_future = pool.submit(self.blog_post_service.load_all)
                projects, projects_error = projects_future.result()
                blog_posts, posts_error = posts_future.result()

            self.dispatch(SetProjects(projects))
            self.dispatch(SetBlogPosts(blog_posts))
            if projects_error is not None or posts_error is not None:
                self.dispatch(SetError(LOAD_ERROR))
        except Exception as e:
            logger.error(f"Error loading data from database: {str(e)}")
            self.dispatch(SetError(LOAD_ERROR))
        finally:
            self.dispatch(SetLoading(False))

    # Session

    def login(self, user):
        """Start a session for `user`, stamping lastLogin"""
        return self.dispatch(SetUser({**user, 'lastLogin': format_datetime(utcnow())}))

    def logout(self):
        return self.dispatch(Logout())

    def update_user(self, changes):
        return self.dispatch(UpdateUser(changes))

    # Views over loaded content

    def find_blog_posts(self, term='', status='all'):
        return filter_blog_posts(self.state.blog_posts, term, status)

    def blog_post_stats(self):
        return count_blog_posts(self.state.blog_posts)

    # Content writes

    def _write(self, description, call, action_for):
        try:
            result = call()
        except Exception as e:
            logger.error(f"Error trying to {description}: {str(e)}")
            self.dispatch(SetError(f"Failed to {description}"))
            raise
        self.dispatch(action_for(result))
        return result

    def add_project(self, project):
        return self._write('add project', lambda: self.project_service.create(project), AddProject)

    def update_project(self, project_id, changes):
        return self._write('update project',
                           lambda: self.project_service.update(project_id, changes), UpdateProject)

    def delete_project(self, project_id):
        return self._write('delete project',
                           lambda: self.project_service.delete(project_id),
                           lambda _: DeleteProject(project_id))

    def add_blog_post(self, post):
        return self._write('add blog post', lambda: self.blog_post_service.create(post), AddBlogPost)

    def update_blog_post(self, post_id, changes):
        return self._write('update blog post',
                           lambda: self.blog_post_service.update(post_id, changes), UpdateBlogPost)

    def delete_blog_post(self, post_id):
        return self._write('delete blog post',
                           lambda: self.blog_post_service.delete(post_id),
                           lambda _: DeleteBlogPost(post_id))

    def set_about_content(self, about_content):
        return self.dispatch(SetAboutContent({**about_content, 'updatedAt': format_datetime(utcnow())}))

    def set_contact_info(self, contact_info):
        return self.dispatch(SetContactInfo({**contact_info, 'updatedAt': format_datetime(utcnow())}))
