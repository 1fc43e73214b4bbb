"""
Helpers Module - Utility functions for common operations
"""

import time
from flask import current_app


def file_extension(filename):
    if not filename or '.' not in filename:
        return ''
    return filename.rsplit('.', 1)[1].lower()


def allowed_image(filename):
    """Check if file extension is an allowed image type"""
    allowed_extensions = current_app.config.get('ALLOWED_IMAGE_EXTENSIONS', set())
    return file_extension(filename) in allowed_extensions


def timestamp_ms():
    return int(time.time() * 1000)


def parse_bool(value):
    """Checkbox / form value to bool"""
    return str(value).strip().lower() in ('1', 'true', 'on', 'yes')


def parse_int(value, default=0):
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def parse_tags(value):
    """Comma-separated input to a list of trimmed tags"""
    return [t.strip() for t in (value or '').split(',') if t.strip()]


def blank_to_none(value):
    value = (value or '').strip()
    return value or None


__all__ = [
    'file_extension',
    'allowed_image',
    'timestamp_ms',
    'parse_bool',
    'parse_int',
    'parse_tags',
    'blank_to_none'
]
