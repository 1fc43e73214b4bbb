"""
Contact Module - Contact form validation and WhatsApp hand-off
Nothing is stored server-side: a valid submission becomes a wa.me deep
link pre-filled with the visitor's message.
"""

import re
from urllib.parse import quote
from email_validator import validate_email, EmailNotValidError
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

WHATSAPP_PLATFORM = 'whatsapp'
WHATSAPP_BASE_URL = 'https://wa.me/'
FIELDS = ('name', 'email', 'message')

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
MESSAGE_MAX_LENGTH = 1000


class ContactConfigurationError(Exception):
    """No WhatsApp contact with a phone number is configured"""

    message = 'WhatsApp contact not configured'

    def __str__(self):
        return self.message


def _required_text(value, label, max_length):
    if not value:
        raise PydanticCustomError('required', '{label} is required', {'label': label})
    if len(value) > max_length:
        raise PydanticCustomError(
            'too_long', '{label} must be at most {max_length} characters',
            {'label': label, 'max_length': max_length})
    return value


class ContactSubmission(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str
    email: str
    message: str

    @field_validator('name')
    @classmethod
    def check_name(cls, value):
        return _required_text(value, 'Name', NAME_MAX_LENGTH)

    @field_validator('email')
    @classmethod
    def check_email(cls, value):
        if len(value) > EMAIL_MAX_LENGTH:
            raise PydanticCustomError(
                'too_long', 'Email must be at most {max_length} characters',
                {'max_length': EMAIL_MAX_LENGTH})
        try:
            validate_email(value, check_deliverability=False, test_environment=True)
        except EmailNotValidError:
            raise PydanticCustomError('invalid_email', 'Invalid email address') from None
        return value

    @field_validator('message')
    @classmethod
    def check_message(cls, value):
        return _required_text(value, 'Message', MESSAGE_MAX_LENGTH)


class ContactForm:
    """Form state: raw field values plus field name -> error message"""

    def __init__(self, name='', email='', message=''):
        self.data = {'name': name, 'email': email, 'message': message}
        self.errors = {}
        self.cleaned = None

    @classmethod
    def from_mapping(cls, mapping):
        return cls(**{field: mapping.get(field, '') or '' for field in FIELDS})

    def validate(self):
        """Check all fields at once; populate errors and return True when valid"""
        try:
            self.cleaned = ContactSubmission(**self.data)
        except ValidationError as e:
            self.cleaned = None
            self.errors = {}
            for error in e.errors():
                field = str(error['loc'][0]) if error['loc'] else None
                if field and field not in self.errors:
                    self.errors[field] = error['msg']
            return False
        self.errors = {}
        return True

    def reset(self):
        self.data = {field: '' for field in FIELDS}
        self.errors = {}
        self.cleaned = None


def encode_component(value):
    """Percent-encode like JavaScript's encodeURIComponent"""
    return quote(value, safe="!~*'()")


def phone_digits(phone):
    return re.sub(r'[^0-9]', '', phone or '')


def find_whatsapp_contact(contacts):
    for contact in contacts or []:
        if (contact.get('platform') or '').lower() == WHATSAPP_PLATFORM:
            return contact
    return None


def build_whatsapp_url(phone, name, email, message):
    """wa.me deep link with the message pre-filled"""
    text = (f"Hi, I'm {encode_component(name)}.%0A%0A"
            f"Email: {encode_component(email)}%0A%0A"
            f"Message: {encode_component(message)}")
    return f'{WHATSAPP_BASE_URL}{phone_digits(phone)}?text={text}'


def submit_contact_form(form, contacts):
    """
    Validate the form and build the hand-off link

    Args:
        form (ContactForm): submitted values
        contacts (list): visible contact_info rows

    Returns:
        str or None: deep link, or None when validation failed (form.errors set)

    Raises:
        ContactConfigurationError: fields are valid but no WhatsApp phone is configured
    """
    if not form.validate():
        return None

    whatsapp = find_whatsapp_contact(contacts)
    if not whatsapp or not phone_digits(whatsapp.get('phone')):
        raise ContactConfigurationError()

    cleaned = form.cleaned
    url = build_whatsapp_url(whatsapp['phone'], cleaned.name, cleaned.email, cleaned.message)
    form.reset()
    return url
