from devfolio.core import db


class Profile(db.Model):
    __tablename__ = 'profile'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    title = db.Column(db.Text, nullable=False)
    bio = db.Column(db.Text, nullable=False)
    email = db.Column(db.Text, nullable=False)
    github = db.Column(db.Text)
    linkedin = db.Column(db.Text)
    twitter = db.Column(db.Text)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'title': self.title,
            'bio': self.bio,
            'email': self.email,
            'github': self.github,
            'linkedin': self.linkedin,
            'twitter': self.twitter,
        }
