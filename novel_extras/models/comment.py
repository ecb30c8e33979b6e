from novel_extras.extensions import db


class Comment(db.Model):
    __tablename__ = 'comments'

    id = db.Column(db.Integer, primary_key=True)
    chapter_id = db.Column(db.Integer, db.ForeignKey('chapters.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    content = db.Column(db.String(4096), nullable=False)
    deleted = db.Column(db.Boolean, nullable=False, default=False)
    create_timestamp = db.Column(db.BigInteger, nullable=False)
    update_timestamp = db.Column(db.BigInteger, nullable=False)

    mentions = db.relationship('Mention', backref='comment', lazy='dynamic')

    __table_args__ = (
        db.Index('ix_comments_chapter', 'chapter_id'),
        db.Index('ix_comments_user', 'user_id'),
    )
