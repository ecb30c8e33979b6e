from novel_extras.extensions import db


class Vote(db.Model):
    __tablename__ = 'votes'

    id = db.Column(db.Integer, primary_key=True)
    # Event partition key, e.g. 'wtcup_2021'
    event = db.Column(db.String(32), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    chapter_vote_id = db.Column(db.SmallInteger, nullable=False)
    rating = db.Column(db.SmallInteger, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('event', 'user_id', 'chapter_vote_id', name='uq_vote_event_user_candidate'),
        db.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_vote_rating'),
    )
