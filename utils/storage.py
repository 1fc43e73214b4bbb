"""
Storage Module - Public object buckets on the local filesystem
Admin tabs upload images and resume files here; pages link to them
through get_public_url().
"""

import os
from flask import current_app
from werkzeug.utils import secure_filename
from .data import DataError

BUCKETS = ('profile-images', 'project-images')


class StorageError(DataError):
    pass


def storage_root():
    """Absolute folder holding all buckets"""
    return os.path.join(current_app.root_path, current_app.config['UPLOAD_FOLDER'])


class Bucket:
    def __init__(self, name):
        if name not in BUCKETS:
            raise StorageError(f'Bucket not found: {name}')
        self.name = name

    @property
    def folder(self):
        return os.path.join(storage_root(), self.name)

    def _object_path(self, path):
        filename = secure_filename(path)
        if not filename:
            raise StorageError(f'Invalid object path: {path!r}')
        return filename, os.path.join(self.folder, filename)

    def upload(self, path, data, upsert=False):
        """
        Store bytes under path

        Returns:
            str: the stored (sanitized) object name

        Raises:
            StorageError: object exists and upsert is False, or write failed
        """
        filename, full_path = self._object_path(path)
        if os.path.exists(full_path) and not upsert:
            raise StorageError(f'The resource already exists: {self.name}/{filename}')
        try:
            os.makedirs(self.folder, exist_ok=True)
            with open(full_path, 'wb') as f:
                f.write(data)
        except OSError as e:
            current_app.logger.error(f"Error writing {self.name}/{filename}: {str(e)}")
            raise StorageError(f'Upload failed: {e.strerror or e}') from e
        current_app.logger.info(f"Stored {self.name}/{filename} ({len(data)} bytes)")
        return filename

    def get_public_url(self, path):
        return f'/storage/{self.name}/{secure_filename(path)}'

    def remove(self, paths):
        """Delete objects, ignoring ones already gone. Returns removed names."""
        removed = []
        for path in paths:
            filename, full_path = self._object_path(path)
            if os.path.exists(full_path):
                os.remove(full_path)
                removed.append(filename)
        return removed


def bucket(name):
    return Bucket(name)


def object_name_from_url(url):
    """Last path segment of a public URL, i.e. the stored object name"""
    if not url:
        return None
    return url.rstrip('/').split('/')[-1] or None
