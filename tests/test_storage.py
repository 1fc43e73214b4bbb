import os

import pytest

from utils.storage import Bucket, StorageError, bucket, object_name_from_url, storage_root


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield


def test_upload_and_public_url(ctx):
    store = bucket('project-images')
    name = store.upload('shot.png', b'png-bytes')
    assert name == 'shot.png'
    assert store.get_public_url(name) == '/storage/project-images/shot.png'
    assert os.path.exists(os.path.join(storage_root(), 'project-images', 'shot.png'))


def test_existing_object_needs_upsert(ctx):
    store = bucket('profile-images')
    store.upload('me.png', b'one')
    with pytest.raises(StorageError):
        store.upload('me.png', b'two')
    store.upload('me.png', b'three', upsert=True)
    with open(os.path.join(store.folder, 'me.png'), 'rb') as f:
        assert f.read() == b'three'


def test_paths_are_sanitized(ctx):
    store = bucket('project-images')
    assert store.upload('../../etc/passwd', b'x') == 'etc_passwd'


def test_remove_ignores_missing_objects(ctx):
    store = bucket('project-images')
    store.upload('a.png', b'a')
    assert store.remove(['a.png', 'missing.png']) == ['a.png']


def test_unknown_bucket():
    with pytest.raises(StorageError):
        Bucket('private')


def test_object_name_from_url():
    assert object_name_from_url('/storage/project-images/resume-1.pdf') == 'resume-1.pdf'
    assert object_name_from_url('') is None


def test_objects_are_served(app, client):
    with app.app_context():
        bucket('project-images').upload('thumb.png', b'thumb')
    response = client.get('/storage/project-images/thumb.png')
    assert response.status_code == 200
    assert response.data == b'thumb'
    assert client.get('/storage/private/thumb.png').status_code == 404
    assert client.get('/storage/project-images/nope.png').status_code == 404
