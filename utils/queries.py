"""
Queries Module - One read per page section, cached per request by query name
The cache lives on flask.g, so every page view fetches fresh rows while
sections sharing a query (the footer and the contact page both list
contact links) hit the backend once.
"""

from functools import wraps
from flask import g
from .data import table


class QueryError(Exception):
    def __init__(self, key, message):
        super().__init__(f'{key}: {message}')
        self.key = key
        self.message = message


HOME_CONTENT_DEFAULTS = {
    'featured_work_title': 'Featured Work',
    'featured_work_description': 'Explore innovative solutions crafted with precision and creativity.',
    'philosophy_title': 'Philosophy',
    'philosophy_description': 'Merging technical excellence with creative innovation to build experiences that matter.',
}
HOME_CONTENT_SECTION = 'parallax_sections'
ABOUT_SECTIONS = ('bio', 'education', 'expertise')
FEATURED_PROJECTS_LIMIT = 6
UNCATEGORIZED = 'Uncategorized'


def _query_cache():
    if '_query_cache' not in g:
        g._query_cache = {}
    return g._query_cache


def cached_query(key_func):
    """Cache a query function's result under a query name for this request"""
    def decorator(fetch):
        @wraps(fetch)
        def wrapper(*args):
            key = key_func(*args) if callable(key_func) else key_func
            cache = _query_cache()
            if key not in cache:
                result = fetch(*args)
                if result.error is not None:
                    raise QueryError(key, result.error.message)
                cache[key] = result.data
            return cache[key]
        return wrapper
    return decorator


def clear_query_cache():
    g.pop('_query_cache', None)


@cached_query('profile')
def get_profile():
    return table('profiles').select().order('created_at').limit(1).maybe_single().execute()


@cached_query('home-content')
def _home_content_row():
    return (table('home_content').select()
            .eq('section', HOME_CONTENT_SECTION).maybe_single().execute())


def get_home_content():
    """Parallax section texts merged over the built-in defaults"""
    content = dict(HOME_CONTENT_DEFAULTS)
    row = _home_content_row()
    if row and isinstance(row.get('content'), dict):
        content.update({k: v for k, v in row['content'].items() if v})
    return content


@cached_query('featured-projects')
def get_featured_projects():
    return (table('projects').select()
            .eq('visible', True).eq('featured', True)
            .order('display_order').limit(FEATURED_PROJECTS_LIMIT).execute())


@cached_query('hero-stats')
def get_hero_stats():
    return table('hero_stats').select().order('display_order').execute()


@cached_query('resume')
def get_resume():
    return (table('resume').select()
            .order('updated_at', desc=True).limit(1).maybe_single().execute())


@cached_query('projects')
def get_projects():
    return table('projects').select().eq('visible', True).order('display_order').execute()


@cached_query(lambda project_id: f'project:{project_id}')
def get_project(project_id):
    return table('projects').select().eq('id', project_id).maybe_single().execute()


@cached_query('about-content')
def _about_rows():
    return table('about_content').select().execute()


def get_about_content():
    """Section name -> text"""
    return {row['section']: row['content'] for row in _about_rows()}


@cached_query('contact-info')
def get_contact_info():
    return table('contact_info').select().eq('visible', True).order('display_order').execute()


def project_categories(projects):
    """'All' followed by distinct categories in first-seen order"""
    categories = ['All']
    for project in projects:
        category = project.get('category') or UNCATEGORIZED
        if category not in categories:
            categories.append(category)
    return categories


def filter_by_category(projects, category):
    if not category or category == 'All':
        return list(projects)
    return [p for p in projects if (p.get('category') or UNCATEGORIZED) == category]


def split_title(title):
    """Rotating hero titles from a 'A | B' profile title"""
    if not title:
        return ['Innovator', 'Problem Solver']
    return [t.strip() for t in title.split('|') if t.strip()]


def split_expertise(expertise):
    return [s.strip() for s in (expertise or '').split(',') if s.strip()]
