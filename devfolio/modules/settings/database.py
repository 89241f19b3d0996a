"""
Settings Database
=================

Single-row table holding the public site links.
"""

from sqlalchemy import select, func
from devfolio.core import db


class Settings(db.Model):
    __tablename__ = 'settings'

    id = db.Column(db.Integer, primary_key=True)
    github_url = db.Column(db.Text)
    linkedin_url = db.Column(db.Text)
    resume_url = db.Column(db.Text)
    email = db.Column(db.Text)
    updated_at = db.Column(db.DateTime, nullable=False, server_default=func.now())

    def to_dict(self):
        return {
            'id': self.id,
            'githubUrl': self.github_url,
            'linkedinUrl': self.linkedin_url,
            'resumeUrl': self.resume_url,
            'email': self.email,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }


# camelCase body key -> column
SETTINGS_FIELDS = {
    'githubUrl': 'github_url',
    'linkedinUrl': 'linkedin_url',
    'resumeUrl': 'resume_url',
    'email': 'email',
}


def get_settings():
    """Get the settings row, or None before the first save"""
    return db.session.execute(select(Settings).order_by(Settings.id).limit(1)).scalar_one_or_none()


def update_settings(values):
    """Set the given columns, creating the row on first save"""
    settings = get_settings()
    if settings:
        for column, value in values.items():
            setattr(settings, column, value)
        settings.updated_at = func.now()
    else:
        settings = Settings(**values)
        db.session.add(settings)

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return settings
