"""
Auth Blueprint - Authentication
Handles: Admin sign in and sign out
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

from . import routes
