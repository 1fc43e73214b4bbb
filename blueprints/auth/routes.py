"""
Auth Routes - Authentication
"""

from flask import render_template, redirect, url_for, request, flash, current_app
from flask_login import login_user, logout_user, login_required, current_user
from utils.security import authenticate
from . import auth_bp


@auth_bp.route('', methods=['GET', 'POST'])
def login():
    """Admin sign in"""
    if current_user.is_authenticated:
        return redirect(url_for('admin.dashboard'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip()
        password = request.form.get('password', '')

        user = authenticate(email, password)
        if user:
            login_user(user, remember=True)
            current_app.logger.info(f"Sign in: {user.email}")
            flash('Signed in successfully', 'success')
            return redirect(url_for('admin.dashboard'))

        current_app.logger.warning(f"Failed sign in for {email or '<empty>'}")
        flash('Invalid credentials. Please try again.', 'error')

    return render_template('auth/login.html')


@auth_bp.route('/logout')
@login_required
def logout():
    """Sign out current user"""
    logout_user()
    flash('Signed out', 'success')
    return redirect(url_for('pages.index'))
