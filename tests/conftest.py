import io
import os

# The module-level app in app.py is built on import; keep it in memory.
os.environ.setdefault('FLASK_ENV', 'testing')

import pytest

from app import create_app
from extensions import db


ADMIN_EMAIL = 'owner@mail.com'
ADMIN_PASSWORD = 'correct-horse'


@pytest.fixture
def app(tmp_path):
    app = create_app('testing')
    app.config.update(
        SECRET_KEY='test-secret',
        UPLOAD_FOLDER=str(tmp_path / 'storage'),
    )
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def insert_rows(app):
    """Insert rows through the table client and return them"""
    from utils.data import table

    def _insert(table_name, *rows):
        with app.app_context():
            result = table(table_name).insert(list(rows)).execute()
            assert result.error is None, result.error
            return result.data
    return _insert


@pytest.fixture
def admin_user(app):
    from utils.security import create_account

    with app.app_context():
        user = create_account(ADMIN_EMAIL, ADMIN_PASSWORD, role='admin')
        return {'id': user.id, 'email': user.email}


@pytest.fixture
def admin_client(client, admin_user):
    response = client.post('/auth', data={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    assert response.status_code == 302
    return client


@pytest.fixture
def upload():
    def _upload(content, filename):
        return (io.BytesIO(content), filename)
    return _upload
