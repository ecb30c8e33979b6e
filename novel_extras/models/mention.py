from novel_extras.extensions import db


class Mention(db.Model):
    __tablename__ = 'mentions'

    id = db.Column(db.Integer, primary_key=True)
    from_comment_id = db.Column(db.Integer, db.ForeignKey('comments.id'), nullable=False)
    mentioned_user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    timestamp = db.Column(db.BigInteger, nullable=False)

    __table_args__ = (
        db.Index('ix_mentions_user_timestamp', 'mentioned_user_id', 'timestamp'),
    )
