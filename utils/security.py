"""
Security Module - Admin credentials, password checks and account bootstrap
"""

from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash
from extensions import db


def get_admin_credentials():
    """Load admin credentials from configuration safely"""
    email = current_app.config.get('ADMIN_EMAIL')
    password = current_app.config.get('ADMIN_PASSWORD')
    if not email or not password:
        return {'email': None, 'password': None}
    return {'email': email.strip().lower(), 'password': password}


def verify_password(password, password_hash):
    """Verify password against hash"""
    return check_password_hash(password_hash, password or '')


def create_account(email, password, role=None):
    """Create a login account, optionally granting a role"""
    from models import User, UserRole

    user = User(email=email.strip().lower(), password_hash=generate_password_hash(password))
    db.session.add(user)
    db.session.flush()
    if role:
        db.session.add(UserRole(user_id=user.id, role=role))
    db.session.commit()
    return user


def authenticate(email, password):
    """Return the matching User or None"""
    from models import User

    if not email or not password:
        return None
    user = User.query.filter_by(email=email.strip().lower()).first()
    if user and verify_password(password, user.password_hash):
        return user
    return None


def ensure_admin_account():
    """Create the configured admin account and role on first start"""
    from models import User, UserRole

    credentials = get_admin_credentials()
    if not credentials['email']:
        current_app.logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set; skipping admin bootstrap")
        return None

    user = User.query.filter_by(email=credentials['email']).first()
    if not user:
        user = create_account(credentials['email'], credentials['password'], role='admin')
        current_app.logger.info(f"✓ Created admin account {user.email}")
    elif not UserRole.query.filter_by(user_id=user.id, role='admin').first():
        db.session.add(UserRole(user_id=user.id, role='admin'))
        db.session.commit()
        current_app.logger.info(f"✓ Granted admin role to {user.email}")
    return user


__all__ = [
    'get_admin_credentials',
    'verify_password',
    'create_account',
    'authenticate',
    'ensure_admin_account'
]
