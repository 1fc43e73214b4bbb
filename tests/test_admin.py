import os

from extensions import db
from utils.data import table
from utils.storage import storage_root


def rows(app, table_name):
    with app.app_context():
        return table(table_name).select().order('display_order').execute().data


def test_anonymous_users_are_sent_to_sign_in(client):
    response = client.get('/admin/profile')
    assert response.status_code == 302
    assert response.headers['Location'].startswith('/auth')


def test_signed_in_user_without_admin_role(app, client):
    from utils.security import create_account
    with app.app_context():
        create_account('guest@mail.com', 'guest-password')

    client.post('/auth', data={'email': 'guest@mail.com', 'password': 'guest-password'})
    response = client.get('/admin/profile')
    assert response.status_code == 302
    assert response.headers['Location'] == '/'


def test_wrong_password_is_rejected(client, admin_user):
    response = client.post('/auth', data={'email': admin_user['email'], 'password': 'nope'})
    assert response.status_code == 200
    assert 'Invalid credentials' in response.get_data(as_text=True)


def test_dashboard_opens_profile_tab(admin_client):
    response = admin_client.get('/admin/')
    assert response.headers['Location'] == '/admin/profile'


def test_profile_upsert_with_photo(app, admin_client, admin_user, upload):
    response = admin_client.post('/admin/profile', data={
        'full_name': 'Ada Lovelace',
        'title': 'Engineer | Writer',
        'photo': upload(b'png', 'me.png'),
    }, content_type='multipart/form-data')
    assert response.status_code == 302

    admin_client.post('/admin/profile', data={'full_name': 'Ada King', 'title': ''})

    with app.app_context():
        profiles = table('profiles').select().execute().data
    assert len(profiles) == 1
    profile = profiles[0]
    assert profile['id'] == admin_user['id']
    assert profile['full_name'] == 'Ada King'
    assert profile['title'] is None
    assert profile['profile_image_url'].startswith(f"/storage/profile-images/{admin_user['id']}-")
    assert profile['profile_image_url'].endswith('.png')


def test_hero_save_all_skips_blank_rows(app, admin_client):
    admin_client.post('/admin/hero', data={
        'stat-count': '3',
        'stat-0-id': '', 'stat-0-label': 'Years', 'stat-0-value': '10+', 'stat-0-display_order': '0',
        'stat-1-id': '', 'stat-1-label': '', 'stat-1-value': '', 'stat-1-display_order': '1',
        'stat-2-id': '', 'stat-2-label': 'Clients', 'stat-2-value': '40', 'stat-2-display_order': '2',
    })
    stats = rows(app, 'hero_stats')
    assert [(s['label'], s['value']) for s in stats] == [('Years', '10+'), ('Clients', '40')]

    admin_client.post('/admin/hero', data={
        'stat-count': '1',
        'stat-0-id': stats[0]['id'], 'stat-0-label': 'Years', 'stat-0-value': '11+',
        'stat-0-display_order': '0',
    })
    stats = rows(app, 'hero_stats')
    assert [s['value'] for s in stats] == ['11+', '40']

    admin_client.post(f"/admin/hero/{stats[1]['id']}/delete")
    assert [s['label'] for s in rows(app, 'hero_stats')] == ['Years']


def test_save_rows_keeps_going_after_a_failure(app):
    from blueprints.admin.routes import save_rows

    with app.app_context():
        saved, failures = save_rows('hero_stats', [
            {'label': 'A', 'value': '1'},
            {'label': 'B', 'value': '2', 'colour': 'red'},
            {'label': 'C', 'value': '3'},
        ])
    assert saved == 2
    assert len(failures) == 1
    assert 'colour' in failures[0]
    assert sorted(s['label'] for s in rows(app, 'hero_stats')) == ['A', 'C']


def test_home_content_created_then_updated(app, admin_client):
    admin_client.post('/admin/home', data={'featured_work_title': 'Selected Work',
                                           'philosophy_title': 'Craft'})
    admin_client.post('/admin/home', data={'featured_work_title': 'Recent Work',
                                           'philosophy_title': 'Craft'})
    with app.app_context():
        content_rows = table('home_content').select().execute().data
    assert len(content_rows) == 1
    assert content_rows[0]['section'] == 'parallax_sections'
    assert content_rows[0]['content']['featured_work_title'] == 'Recent Work'

    body = admin_client.get('/admin/home').get_data(as_text=True)
    assert 'Recent Work' in body


def test_about_sections_upserted(app, admin_client):
    admin_client.post('/admin/about', data={'bio': 'First', 'education': 'MIT', 'expertise': 'Python'})
    admin_client.post('/admin/about', data={'bio': 'Second', 'education': 'MIT', 'expertise': 'Python'})
    with app.app_context():
        about = {r['section']: r['content'] for r in table('about_content').select().execute().data}
    assert about == {'bio': 'Second', 'education': 'MIT', 'expertise': 'Python'}


def test_project_create_update_and_delete(app, admin_client, upload):
    admin_client.post('/admin/projects/save', data={
        'title': 'Engine',
        'description': 'Computes',
        'category': '',
        'tags': 'Python, , SQL',
        'featured': 'true',
        'visible': 'true',
        'display_order': '2',
        'thumbnail': upload(b'thumb', 'thumb.png'),
        'gallery_images': [upload(b'one', 'one.png'), upload(b'two', 'two.jpg')],
    }, content_type='multipart/form-data')

    project = rows(app, 'projects')[0]
    assert project['category'] == 'Uncategorized'
    assert project['tags'] == ['Python', 'SQL']
    assert project['featured'] is True and project['visible'] is True
    assert project['thumbnail_url'].startswith('/storage/project-images/')
    assert len(project['project_images']) == 2

    removed = project['project_images'][0]
    admin_client.post('/admin/projects/save', data={
        'id': project['id'],
        'title': 'Engine v2',
        'description': 'Computes',
        'category': 'Hardware',
        'tags': 'Python',
        'display_order': '2',
        'thumbnail_url': project['thumbnail_url'],
        'project_images': project['project_images'],
        'remove_images': [removed],
    })

    updated = rows(app, 'projects')[0]
    assert updated['title'] == 'Engine v2'
    assert updated['featured'] is False and updated['visible'] is False
    assert updated['project_images'] == [project['project_images'][1]]
    assert updated['thumbnail_url'] == project['thumbnail_url']

    admin_client.post(f"/admin/projects/{project['id']}/delete")
    assert rows(app, 'projects') == []


def test_unsupported_image_is_rejected(app, admin_client, upload):
    response = admin_client.post('/admin/projects/save', data={
        'title': 'Engine', 'description': 'd', 'visible': 'true',
        'thumbnail': upload(b'exe', 'virus.exe'),
    }, content_type='multipart/form-data', follow_redirects=True)
    assert 'Unsupported image type' in response.get_data(as_text=True)
    assert rows(app, 'projects')[0]['thumbnail_url'] is None


def test_contact_save_all(app, admin_client):
    admin_client.post('/admin/contact', data={
        'contact-count': '3',
        'contact-0-id': '', 'contact-0-platform': 'whatsapp', 'contact-0-label': 'Chat',
        'contact-0-url': 'https://wa.me/15550100', 'contact-0-icon': 'MessageCircle',
        'contact-0-phone': '+1 555 0100', 'contact-0-visible': 'true', 'contact-0-display_order': '0',
        'contact-1-id': '', 'contact-1-platform': 'github', 'contact-1-label': 'Code',
        'contact-1-url': '', 'contact-1-icon': 'Github', 'contact-1-display_order': '1',
        'contact-2-id': '', 'contact-2-platform': 'blog', 'contact-2-label': 'Blog',
        'contact-2-url': 'https://blog.example.org', 'contact-2-icon': 'Rss',
        'contact-2-display_order': '2',
    })
    contacts = rows(app, 'contact_info')
    assert [c['platform'] for c in contacts] == ['whatsapp', 'blog']
    assert contacts[0]['phone'] == '+1 555 0100'
    assert contacts[0]['visible'] is True
    assert contacts[1]['icon'] == 'Mail'
    assert contacts[1]['visible'] is False

    admin_client.post(f"/admin/contact/{contacts[1]['id']}/delete")
    assert [c['platform'] for c in rows(app, 'contact_info')] == ['whatsapp']


def resume_rows(app):
    with app.app_context():
        return table('resume').select().execute().data


def test_resume_upload_replaces_previous_file(app, admin_client, upload):
    admin_client.post('/admin/resume/upload', data={'resume': upload(b'%PDF-1', 'cv.pdf')},
                      content_type='multipart/form-data')
    first = resume_rows(app)
    assert len(first) == 1
    assert first[0]['file_name'] == 'cv.pdf'

    admin_client.post('/admin/resume/upload', data={'resume': upload(b'%PDF-2', 'cv-2024.pdf')},
                      content_type='multipart/form-data')
    second = resume_rows(app)
    assert len(second) == 1
    assert second[0]['id'] == first[0]['id']
    assert second[0]['file_name'] == 'cv-2024.pdf'

    with app.app_context():
        stored = os.listdir(os.path.join(storage_root(), 'project-images'))
    assert stored == [second[0]['file_url'].rsplit('/', 1)[1]]


def test_resume_rejects_other_types(app, admin_client, upload):
    response = admin_client.post('/admin/resume/upload', data={'resume': upload(b'hi', 'notes.txt')},
                                 content_type='multipart/form-data', follow_redirects=True)
    assert 'Only PDF and Word documents are allowed' in response.get_data(as_text=True)
    assert resume_rows(app) == []


def test_resume_size_limit(app, admin_client, upload):
    app.config['RESUME_MAX_BYTES'] = 4
    response = admin_client.post('/admin/resume/upload', data={'resume': upload(b'%PDF-1.7', 'cv.pdf')},
                                 content_type='multipart/form-data', follow_redirects=True)
    assert 'File size must be less than 10MB' in response.get_data(as_text=True)
    assert resume_rows(app) == []


def test_resume_delete(app, admin_client, upload):
    admin_client.post('/admin/resume/upload', data={'resume': upload(b'%PDF-1', 'cv.pdf')},
                      content_type='multipart/form-data')
    response = admin_client.post('/admin/resume/delete', follow_redirects=True)
    assert 'Resume deleted successfully' in response.get_data(as_text=True)
    assert resume_rows(app) == []
    with app.app_context():
        assert os.listdir(os.path.join(storage_root(), 'project-images')) == []


def test_logout(admin_client):
    response = admin_client.get('/auth/logout')
    assert response.headers['Location'] == '/'
    assert admin_client.get('/admin/profile').status_code == 302


def test_admin_role_is_checked_each_request(app, admin_client, admin_user):
    from models import UserRole
    with app.app_context():
        UserRole.query.filter_by(user_id=admin_user['id']).delete()
        db.session.commit()
    response = admin_client.get('/admin/profile')
    assert response.headers['Location'] == '/'


def test_svg_images_are_not_accepted(app, admin_client, upload):
    from utils.helpers import allowed_image
    with app.app_context():
        assert not allowed_image('logo.svg')
        assert allowed_image('logo.PNG')

    svg = b'<svg xmlns="http://www.w3.org/2000/svg"><script>alert(1)</script></svg>'
    response = admin_client.post('/admin/profile', data={
        'full_name': 'Ada', 'photo': upload(svg, 'me.svg'),
    }, content_type='multipart/form-data', follow_redirects=True)
    assert 'Unsupported image type' in response.get_data(as_text=True)

    with app.app_context():
        assert table('profiles').select().execute().data[0]['profile_image_url'] is None
        assert not os.path.exists(os.path.join(storage_root(), 'profile-images'))
