import uuid
from sqlalchemy import select, func, false
from devfolio.core import db, Config


class User(db.Model):
    __tablename__ = Config.USERS_TABLE

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = db.Column(db.Text, unique=True, nullable=False)
    name = db.Column(db.Text, nullable=False)
    google_id = db.Column(db.Text, unique=True)
    avatar = db.Column(db.Text)
    is_allowed = db.Column(db.Boolean, nullable=False, default=False, server_default=false())
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'googleId': self.google_id,
            'avatar': self.avatar,
            'isAllowed': self.is_allowed,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }


class UserDatabase:
    """Persistence for the admin account that signs in with Google"""

    @staticmethod
    def get_user_by_email(email):
        return db.session.execute(select(User).where(User.email == email)).scalar_one_or_none()

    @staticmethod
    def get_allowed_user(user_id):
        """Get user by ID, only if the account is still allowed"""
        user = db.session.get(User, user_id)
        if user and user.is_allowed:
            return user
        return None

    @staticmethod
    def upsert_google_user(email, name, google_id, avatar):
        """Create or refresh the user record from verified Google claims"""
        user = UserDatabase.get_user_by_email(email)
        if user:
            user.name = name or user.name
            user.google_id = google_id
            user.avatar = avatar
            user.is_allowed = True
        else:
            user = User(
                email=email,
                name=name or 'User',
                google_id=google_id,
                avatar=avatar,
                is_allowed=True,
            )
            db.session.add(user)

        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return user
