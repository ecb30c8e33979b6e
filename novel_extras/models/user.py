from novel_extras.extensions import db


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    token = db.Column(db.String(32), nullable=False, unique=True)
    email = db.Column(db.String(128), nullable=True, unique=True)
    user_name = db.Column(db.String(64), nullable=False, unique=True)
    display_name = db.Column(db.String(64), nullable=False, unique=True)
    disabled = db.Column(db.Boolean, nullable=False, default=False)
    last_checked_mentions_timestamp = db.Column(db.BigInteger, nullable=False, default=0)

    comments = db.relationship('Comment', backref='user', lazy='dynamic')
