from sqlalchemy import func
from devfolio.core import db, Config


class Project(db.Model):
    __tablename__ = Config.PROJECTS_TABLE

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.Text, nullable=False)
    link = db.Column(db.Text, nullable=False)
    tags = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now(), index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'imageUrl': self.image_url,
            'link': self.link,
            'tags': list(self.tags or []),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
