"""
Decorators Module - Authentication and authorization decorators
"""

from functools import wraps
from flask import redirect, url_for, flash, current_app
from flask_login import current_user
from extensions import login_manager


def has_role(user_id, role):
    """Role lookup against the user_roles table"""
    from .data import table

    result = table('user_roles').select().eq('user_id', user_id).eq('role', role).execute()
    if result.error is not None:
        current_app.logger.error(f"Role lookup failed for {user_id}: {result.error.message}")
        return False
    return bool(result.data)


def admin_required(f):
    """Decorator to require a signed-in user holding the admin role"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return login_manager.unauthorized()
        if not has_role(current_user.id, 'admin'):
            flash("You don't have admin permissions", 'error')
            return redirect(url_for('pages.index'))
        return f(*args, **kwargs)
    return decorated_function
