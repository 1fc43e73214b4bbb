"""
Utils Package - Centralized utility modules initialization
"""

from .decorators import admin_required, has_role
from .data import table, DataError, Result
from .storage import bucket, StorageError
from .queries import (
    QueryError,
    get_profile,
    get_home_content,
    get_featured_projects,
    get_hero_stats,
    get_resume,
    get_projects,
    get_project,
    get_about_content,
    get_contact_info
)
from .security import (
    get_admin_credentials,
    verify_password,
    authenticate,
    ensure_admin_account
)
from .helpers import (
    allowed_image,
    parse_bool,
    parse_int,
    parse_tags
)
from .clock import NixieClock, format_display
from .contact import ContactForm, submit_contact_form, ContactConfigurationError
from .icons import render_icon, ICON_NAMES

__all__ = [
    # Decorators
    'admin_required',
    'has_role',

    # Data
    'table',
    'DataError',
    'Result',
    'bucket',
    'StorageError',

    # Queries
    'QueryError',
    'get_profile',
    'get_home_content',
    'get_featured_projects',
    'get_hero_stats',
    'get_resume',
    'get_projects',
    'get_project',
    'get_about_content',
    'get_contact_info',

    # Security
    'get_admin_credentials',
    'verify_password',
    'authenticate',
    'ensure_admin_account',

    # Helpers
    'allowed_image',
    'parse_bool',
    'parse_int',
    'parse_tags',

    # Widgets
    'NixieClock',
    'format_display',
    'ContactForm',
    'submit_contact_form',
    'ContactConfigurationError',
    'render_icon',
    'ICON_NAMES'
]
