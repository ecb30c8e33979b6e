from novel_extras.extensions import db


class Chapter(db.Model):
    __tablename__ = 'chapters'

    id = db.Column(db.Integer, primary_key=True)
    relative_path = db.Column(db.String(1024), nullable=False, unique=True)
    visit_count = db.Column(db.BigInteger, nullable=False, default=0, server_default='0')

    visits = db.relationship('Visit', backref='chapter', lazy='dynamic')
    comments = db.relationship('Comment', backref='chapter', lazy='dynamic')
