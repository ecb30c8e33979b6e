from novel_extras.extensions import db


class Visit(db.Model):
    __tablename__ = 'visits'

    id = db.Column(db.Integer, primary_key=True)
    chapter_id = db.Column(db.Integer, db.ForeignKey('chapters.id'), nullable=False)
    # Milliseconds since epoch
    timestamp = db.Column(db.BigInteger, nullable=False)

    __table_args__ = (
        db.Index('ix_visits_timestamp', 'timestamp'),
        db.Index('ix_visits_chapter', 'chapter_id'),
    )
