"""
Pages Routes - Public site
"""

import os
from flask import render_template, request, flash, current_app, abort, jsonify, send_from_directory
from utils.clock import NixieClock
from utils.contact import ContactForm, ContactConfigurationError, submit_contact_form
from utils.queries import (
    QueryError, get_profile, get_home_content, get_featured_projects, get_hero_stats,
    get_resume, get_projects, get_project, get_about_content, get_contact_info,
    project_categories, filter_by_category, split_title, split_expertise
)
from utils.storage import BUCKETS, storage_root
from . import pages_bp


def load_section(fetch, default, *args):
    """Run one section query; a failure becomes a notice and an empty section"""
    try:
        return fetch(*args)
    except QueryError as e:
        current_app.logger.error(f"Query {e.key} failed: {e.message}")
        flash(e.message, 'error')
        return default


@pages_bp.route('/')
def index():
    """Home page - hero, stats, featured work, philosophy"""
    profile = load_section(get_profile, None)
    return render_template('pages/home.html',
                           profile=profile,
                           titles=split_title(profile.get('title') if profile else None),
                           home_content=load_section(get_home_content, {}),
                           featured_projects=load_section(get_featured_projects, []),
                           hero_stats=load_section(get_hero_stats, []),
                           resume=load_section(get_resume, None),
                           clock=NixieClock())


@pages_bp.route('/about')
def about():
    """About page - bio, education, expertise"""
    content = load_section(get_about_content, {})
    return render_template('pages/about.html',
                           about=content,
                           expertise=split_expertise(content.get('expertise')))


@pages_bp.route('/projects')
def projects():
    """Visible projects with a category filter"""
    all_projects = load_section(get_projects, [])
    categories = project_categories(all_projects)
    selected = request.args.get('category', 'All')
    if selected not in categories:
        selected = 'All'
    return render_template('pages/projects.html',
                           projects=filter_by_category(all_projects, selected),
                           categories=categories,
                           selected_category=selected)


@pages_bp.route('/project/<project_id>')
def project_detail(project_id):
    """Project detail page"""
    project = load_section(get_project, None, project_id)
    if not project:
        abort(404)
    return render_template('pages/project_detail.html', project=project)


@pages_bp.route('/contact', methods=['GET', 'POST'])
def contact():
    """Contact links and the WhatsApp hand-off form"""
    contacts = load_section(get_contact_info, [])
    form = ContactForm()
    handoff_url = None

    if request.method == 'POST':
        form = ContactForm.from_mapping(request.form)
        try:
            handoff_url = submit_contact_form(form, contacts)
        except ContactConfigurationError as e:
            current_app.logger.warning("Contact form submitted without a WhatsApp contact configured")
            flash(str(e), 'error')
        else:
            if handoff_url:
                # Deep link goes out in this response, never in the session cookie
                flash("Opening WhatsApp. You'll be redirected to WhatsApp to send your message.", 'success')

    return render_template('pages/contact.html',
                           contacts=contacts,
                           form=form,
                           handoff_url=handoff_url)


@pages_bp.route('/clock')
def clock():
    """Current nixie display string, polled by the widget"""
    payload = NixieClock().to_dict()
    payload['refresh_seconds'] = current_app.config.get('CLOCK_REFRESH_SECONDS', payload['refresh_seconds'])
    return jsonify(payload)


@pages_bp.route('/storage/<bucket_name>/<path:filename>')
def storage_object(bucket_name, filename):
    """Serve a public object from a storage bucket"""
    if bucket_name not in BUCKETS:
        abort(404)
    return send_from_directory(os.path.join(storage_root(), bucket_name), filename)


@pages_bp.route('/robots.txt')
def robots():
    """Generate robots.txt for SEO"""
    robots_txt = (
        "User-agent: *\n"
        "Allow: /\n"
        "Disallow: /admin/\n"
        "Disallow: /auth\n"
    )
    response = current_app.make_response(robots_txt)
    response.headers['Content-Type'] = 'text/plain; charset=utf-8'
    return response
