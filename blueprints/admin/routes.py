"""
Admin Routes - Content management tabs
Every tab reads rows through the table client and writes them back one
request at a time. "Save all" forms issue one request per row with no
rollback: a failed row is logged and the loop moves on.
"""

import mimetypes
import uuid
from datetime import datetime
from flask import render_template, redirect, url_for, request, flash, current_app
from flask_login import current_user
from utils.data import table
from utils.decorators import admin_required
from utils.helpers import allowed_image, file_extension, timestamp_ms, parse_bool, parse_int, parse_tags, blank_to_none
from utils.icons import ICON_NAMES
from utils.queries import HOME_CONTENT_DEFAULTS, HOME_CONTENT_SECTION, ABOUT_SECTIONS
from utils.storage import bucket, object_name_from_url, StorageError
from . import admin_bp

ADMIN_TABS = (
    ('profile', 'Profile'),
    ('hero', 'Hero Stats'),
    ('home', 'Home'),
    ('about', 'About'),
    ('projects', 'Projects'),
    ('contact', 'Contact'),
    ('resume', 'Resume'),
)
PROFILE_BUCKET = 'profile-images'
PROJECT_BUCKET = 'project-images'


def render_tab(tab, **context):
    return render_template(f'admin/{tab}.html', tabs=ADMIN_TABS, active_tab=tab, **context)


def load_rows(query):
    """Run a read for a tab; errors are shown verbatim and yield no rows"""
    result = query.execute()
    if result.error is not None:
        flash(result.error.message, 'error')
        return []
    return result.data


def indexed_rows(form, prefix, fields):
    """
    Collect repeated form groups named '<prefix>-<i>-<field>'

    Returns:
        list: one dict per group, in index order
    """
    rows = []
    for index in range(parse_int(form.get(f'{prefix}-count'), 0)):
        row = {field: form.get(f'{prefix}-{index}-{field}', '') for field in fields}
        rows.append(row)
    return rows


def save_rows(table_name, rows):
    """
    Update rows carrying an id, insert the rest; one request per row

    Returns:
        tuple: (saved count, list of failure messages)
    """
    saved, failures = 0, []
    for row in rows:
        row_id = row.pop('id', None)
        if row_id:
            result = table(table_name).update(row).eq('id', row_id).execute()
        else:
            result = table(table_name).insert(row).execute()
        if result.error is not None:
            current_app.logger.warning(f"Save of {table_name} row {row_id or '<new>'} failed: {result.error.message}")
            failures.append(result.error.message)
        else:
            saved += 1
    return saved, failures


def upload_image(bucket_name, file, name_prefix=None):
    """Store an uploaded image and return its public URL, or None if rejected"""
    if not file or not file.filename:
        return None
    if not allowed_image(file.filename):
        flash(f'Unsupported image type: {file.filename}', 'error')
        return None
    prefix = name_prefix or f'{timestamp_ms()}-{uuid.uuid4().hex[:8]}'
    object_name = f'{prefix}.{file_extension(file.filename)}'
    store = bucket(bucket_name)
    stored = store.upload(object_name, file.read())
    return store.get_public_url(stored)


@admin_bp.route('/')
@admin_required
def dashboard():
    """Admin landing - first tab"""
    return redirect(url_for('admin.profile'))


# Profile

@admin_bp.route('/profile', methods=['GET', 'POST'])
@admin_required
def profile():
    """Edit the site owner's profile"""
    result = table('profiles').select().eq('id', current_user.id).maybe_single().execute()
    if result.error is not None:
        flash(result.error.message, 'error')
    current = result.data or {}

    if request.method == 'POST':
        image_url = current.get('profile_image_url')
        try:
            uploaded = upload_image(PROFILE_BUCKET, request.files.get('photo'),
                                    name_prefix=f'{current_user.id}-{timestamp_ms()}')
        except StorageError as e:
            flash(e.message, 'error')
            return redirect(url_for('admin.profile'))
        if uploaded:
            image_url = uploaded

        result = table('profiles').upsert({
            'id': current_user.id,
            'email': current_user.email,
            'full_name': blank_to_none(request.form.get('full_name')),
            'title': blank_to_none(request.form.get('title')),
            'profile_image_url': image_url,
        }, on_conflict='id').execute()

        if result.error is not None:
            flash(result.error.message, 'error')
        else:
            flash('Profile updated successfully', 'success')
        return redirect(url_for('admin.profile'))

    return render_tab('profile', profile=current)


# Hero stats

@admin_bp.route('/hero', methods=['GET', 'POST'])
@admin_required
def hero():
    """Hero stats - save all"""
    if request.method == 'POST':
        rows = []
        for row in indexed_rows(request.form, 'stat', ('id', 'label', 'value', 'display_order')):
            if not row['label'].strip() or not row['value'].strip():
                continue
            rows.append({
                'id': row['id'] or None,
                'label': row['label'].strip(),
                'value': row['value'].strip(),
                'display_order': parse_int(row['display_order']),
            })
        # Failed rows are only logged; the success notice is shown regardless
        save_rows('hero_stats', rows)
        flash('Hero stats updated successfully', 'success')
        return redirect(url_for('admin.hero'))

    stats = load_rows(table('hero_stats').select().order('display_order'))
    return render_tab('hero', stats=stats)


@admin_bp.route('/hero/<stat_id>/delete', methods=['POST'])
@admin_required
def delete_hero_stat(stat_id):
    result = table('hero_stats').delete().eq('id', stat_id).execute()
    if result.error is not None:
        flash(result.error.message, 'error')
    else:
        flash('Stat removed', 'success')
    return redirect(url_for('admin.hero'))


# Home content

@admin_bp.route('/home', methods=['GET', 'POST'])
@admin_required
def home():
    """Parallax sections shown on the home page"""
    if request.method == 'POST':
        content = {field: request.form.get(field, '').strip() for field in HOME_CONTENT_DEFAULTS}
        existing = table('home_content').select().eq('section', HOME_CONTENT_SECTION).maybe_single().execute()
        if existing.error is not None:
            flash(existing.error.message, 'error')
            return redirect(url_for('admin.home'))

        if existing.data:
            result = (table('home_content')
                      .update({'content': content, 'updated_at': datetime.utcnow()})
                      .eq('id', existing.data['id']).execute())
        else:
            result = table('home_content').insert({'section': HOME_CONTENT_SECTION, 'content': content}).execute()

        if result.error is not None:
            flash(result.error.message, 'error')
        else:
            flash('Home page content saved successfully', 'success')
        return redirect(url_for('admin.home'))

    result = table('home_content').select().eq('section', HOME_CONTENT_SECTION).maybe_single().execute()
    if result.error is not None:
        flash(result.error.message, 'error')
    content = dict(HOME_CONTENT_DEFAULTS)
    if result.data and isinstance(result.data.get('content'), dict):
        content.update(result.data['content'])
    return render_tab('home', content=content)


# About

@admin_bp.route('/about', methods=['GET', 'POST'])
@admin_required
def about():
    """Bio, education and expertise sections"""
    if request.method == 'POST':
        failed = False
        for section in ABOUT_SECTIONS:
            result = (table('about_content')
                      .upsert({'section': section, 'content': request.form.get(section, '')},
                              on_conflict='section')
                      .execute())
            if result.error is not None:
                current_app.logger.warning(f"About section {section} not saved: {result.error.message}")
                failed = True
        if failed:
            flash('Some sections could not be saved', 'error')
        else:
            flash('About content updated successfully', 'success')
        return redirect(url_for('admin.about'))

    rows = load_rows(table('about_content').select())
    content = {row['section']: row['content'] for row in rows}
    return render_tab('about', content=content, sections=ABOUT_SECTIONS)


# Projects

PROJECT_FIELDS = ('title', 'description', 'detailed_description', 'category',
                  'github_url', 'live_url')


@admin_bp.route('/projects')
@admin_required
def projects():
    rows = load_rows(table('projects').select().order('display_order'))
    return render_tab('projects', projects=rows, next_order=len(rows))


@admin_bp.route('/projects/save', methods=['POST'])
@admin_required
def save_project():
    """Insert or update one project, including its images"""
    form = request.form
    project_id = form.get('id') or None

    values = {field: form.get(field, '').strip() for field in PROJECT_FIELDS}
    values['category'] = values['category'] or 'Uncategorized'
    values['detailed_description'] = values['detailed_description'] or None
    values['github_url'] = values['github_url'] or None
    values['live_url'] = values['live_url'] or None
    values['tags'] = parse_tags(form.get('tags'))
    values['featured'] = parse_bool(form.get('featured'))
    values['visible'] = parse_bool(form.get('visible'))
    values['display_order'] = parse_int(form.get('display_order'))

    removed = set(form.getlist('remove_images'))
    images = [url for url in form.getlist('project_images') if url and url not in removed]
    thumbnail_url = form.get('thumbnail_url') or None

    try:
        uploaded_thumbnail = upload_image(PROJECT_BUCKET, request.files.get('thumbnail'))
        if uploaded_thumbnail:
            thumbnail_url = uploaded_thumbnail
        for file in request.files.getlist('gallery_images'):
            url = upload_image(PROJECT_BUCKET, file)
            if url:
                images.append(url)
    except StorageError as e:
        flash(e.message, 'error')
        return redirect(url_for('admin.projects'))

    values['thumbnail_url'] = thumbnail_url
    values['project_images'] = images

    if project_id:
        result = table('projects').update(values).eq('id', project_id).execute()
    else:
        result = table('projects').insert(values).execute()

    if result.error is not None:
        flash(result.error.message, 'error')
    else:
        flash('Project saved successfully', 'success')
    return redirect(url_for('admin.projects'))


@admin_bp.route('/projects/<project_id>/delete', methods=['POST'])
@admin_required
def delete_project(project_id):
    result = table('projects').delete().eq('id', project_id).execute()
    if result.error is not None:
        flash(result.error.message, 'error')
    else:
        flash('Project deleted', 'success')
    return redirect(url_for('admin.projects'))


# Contact links

CONTACT_FIELDS = ('id', 'platform', 'label', 'url', 'icon', 'phone', 'visible', 'display_order')


@admin_bp.route('/contact', methods=['GET', 'POST'])
@admin_required
def contact():
    """Contact links and the WhatsApp phone - save all"""
    if request.method == 'POST':
        rows = []
        for row in indexed_rows(request.form, 'contact', CONTACT_FIELDS):
            if not row['platform'].strip() or not row['url'].strip():
                continue
            rows.append({
                'id': row['id'] or None,
                'platform': row['platform'].strip(),
                'label': row['label'].strip(),
                'url': row['url'].strip(),
                'icon': row['icon'] if row['icon'] in ICON_NAMES else 'Mail',
                'phone': blank_to_none(row['phone']),
                'visible': parse_bool(row['visible']),
                'display_order': parse_int(row['display_order']),
            })
        # Failed rows are only logged; the success notice is shown regardless
        save_rows('contact_info', rows)
        flash('Contact info updated successfully', 'success')
        return redirect(url_for('admin.contact'))

    contacts = load_rows(table('contact_info').select().order('display_order'))
    return render_tab('contact', contacts=contacts, icon_names=ICON_NAMES)


@admin_bp.route('/contact/<contact_id>/delete', methods=['POST'])
@admin_required
def delete_contact(contact_id):
    result = table('contact_info').delete().eq('id', contact_id).execute()
    if result.error is not None:
        flash(result.error.message, 'error')
    else:
        flash('Contact removed', 'success')
    return redirect(url_for('admin.contact'))


# Resume

RESUME_EXTENSIONS = {'pdf', 'doc', 'docx'}


def current_resume():
    result = table('resume').select().order('updated_at', desc=True).limit(1).maybe_single().execute()
    if result.error is not None:
        flash(result.error.message, 'error')
    return result.data


def resume_mimetype(file):
    if file.mimetype and file.mimetype != 'application/octet-stream':
        return file.mimetype
    return mimetypes.guess_type(file.filename)[0]


@admin_bp.route('/resume')
@admin_required
def resume():
    return render_tab('resume', resume=current_resume())


@admin_bp.route('/resume/upload', methods=['POST'])
@admin_required
def upload_resume():
    """Replace the stored resume file"""
    file = request.files.get('resume')
    if not file or not file.filename:
        flash('Choose a file to upload', 'error')
        return redirect(url_for('admin.resume'))

    data = file.read()
    if len(data) > current_app.config['RESUME_MAX_BYTES']:
        flash('File size must be less than 10MB', 'error')
        return redirect(url_for('admin.resume'))
    if (resume_mimetype(file) not in current_app.config['RESUME_MIME_TYPES']
            or file_extension(file.filename) not in RESUME_EXTENSIONS):
        flash('Only PDF and Word documents are allowed', 'error')
        return redirect(url_for('admin.resume'))

    existing = current_resume()
    store = bucket(PROJECT_BUCKET)
    try:
        old_name = object_name_from_url(existing['file_url']) if existing else None
        if old_name:
            store.remove([old_name])
        stored = store.upload(f'resume-{timestamp_ms()}.{file_extension(file.filename)}', data, upsert=True)
    except StorageError as e:
        flash(e.message, 'error')
        return redirect(url_for('admin.resume'))

    values = {'file_name': file.filename, 'file_url': store.get_public_url(stored)}
    if existing:
        values['updated_at'] = datetime.utcnow()
        result = table('resume').update(values).eq('id', existing['id']).execute()
    else:
        result = table('resume').insert(values).execute()

    if result.error is not None:
        flash(result.error.message, 'error')
    else:
        current_app.logger.info(f"Resume replaced with {stored}")
        flash('Resume uploaded successfully', 'success')
    return redirect(url_for('admin.resume'))


@admin_bp.route('/resume/delete', methods=['POST'])
@admin_required
def delete_resume():
    existing = current_resume()
    if not existing:
        flash('No resume to delete', 'error')
        return redirect(url_for('admin.resume'))

    old_name = object_name_from_url(existing['file_url'])
    try:
        if old_name:
            bucket(PROJECT_BUCKET).remove([old_name])
    except StorageError as e:
        flash(e.message, 'error')
        return redirect(url_for('admin.resume'))

    result = table('resume').delete().eq('id', existing['id']).execute()
    if result.error is not None:
        flash(result.error.message, 'error')
    else:
        flash('Resume deleted successfully', 'success')
    return redirect(url_for('admin.resume'))
