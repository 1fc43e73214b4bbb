"""
Pages Blueprint - Public site
Handles: Home, About, Projects, Project detail, Contact, clock widget, stored files
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes
