"""
Admin Blueprint - Content management
Handles: Profile, hero stats, home content, about, projects, contact links, resume
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')

from . import routes
