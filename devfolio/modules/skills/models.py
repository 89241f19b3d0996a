from sqlalchemy import func
from devfolio.core import db, Config


class Skill(db.Model):
    __tablename__ = Config.SKILLS_TABLE

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    level = db.Column(db.Integer, nullable=False)
    # Comma separated labels, e.g. "Frontend,Tools"
    category = db.Column(db.Text, nullable=False, default='Other', server_default='Other')
    order = db.Column(db.Integer, nullable=False, default=0, server_default='0', index=True)
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'level': self.level,
            'category': self.category,
            'order': self.order,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
