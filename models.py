from extensions import db
from datetime import datetime
from flask_login import UserMixin
from sqlalchemy import JSON
import uuid

# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


def _uuid():
    return str(uuid.uuid4())


class User(UserMixin, db.Model):
    """Authentication account. Admin rights come from UserRole rows."""
    __tablename__ = 'users'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class UserRole(db.Model):
    __tablename__ = 'user_roles'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='user')  # admin, user
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('user_id', 'role', name='uq_user_roles_user_role'),
    )


class Profile(db.Model):
    __tablename__ = 'profiles'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    email = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(255))
    title = db.Column(db.String(255))  # "Innovator | Problem Solver"
    profile_image_url = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    detailed_description = db.Column(db.Text)
    category = db.Column(db.String(100))
    tags = db.Column(SafeJSON, default=list)
    thumbnail_url = db.Column(db.String(500))
    project_images = db.Column(SafeJSON, default=list)
    github_url = db.Column(db.String(500))
    live_url = db.Column(db.String(500))
    featured = db.Column(db.Boolean, default=False)
    visible = db.Column(db.Boolean, nullable=False, default=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class ContactInfo(db.Model):
    __tablename__ = 'contact_info'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    platform = db.Column(db.String(100), nullable=False)  # email, github, whatsapp, ...
    label = db.Column(db.String(255), nullable=False)
    url = db.Column(db.String(500), nullable=False)
    icon = db.Column(db.String(50), nullable=False, default='Mail')
    phone = db.Column(db.String(50))  # WhatsApp hand-off target
    visible = db.Column(db.Boolean, nullable=False, default=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class AboutContent(db.Model):
    __tablename__ = 'about_content'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    section = db.Column(db.String(100), unique=True, nullable=False)  # bio, education, expertise
    content = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class HomeContent(db.Model):
    __tablename__ = 'home_content'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    section = db.Column(db.String(100), unique=True, nullable=False)
    content = db.Column(SafeJSON, nullable=False, default=dict)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class HeroStat(db.Model):
    __tablename__ = 'hero_stats'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    label = db.Column(db.String(255), nullable=False)
    value = db.Column(db.String(100), nullable=False)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Resume(db.Model):
    __tablename__ = 'resume'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    file_name = db.Column(db.String(255), nullable=False)
    file_url = db.Column(db.String(500), nullable=False)
    uploaded_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# Table name -> model, the closed set the data client may address
TABLES = {
    model.__tablename__: model
    for model in (Profile, Project, ContactInfo, AboutContent,
                  HomeContent, HeroStat, Resume, UserRole)
}
