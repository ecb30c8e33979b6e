"""Vote ledger for the yearly chapter cups."""
from dataclasses import dataclass

from novel_extras.extensions import db
from novel_extras.models.vote import Vote
from novel_extras.services.sql import dialect_insert

MIN_RATING = 0
MAX_RATING = 5


@dataclass(frozen=True)
class VoteEvent:
    """A time-boxed vote over candidate ids ``min_id..max_id`` (inclusive)."""
    key: str
    min_id: int
    max_id: int
    start_ts: int
    end_ts: int

    def is_open(self, now):
        return self.start_ts <= now <= self.end_ts

    def is_closed(self, now):
        return now > self.end_ts

    def accepts(self, candidate_id):
        return self.min_id <= candidate_id <= self.max_id


def is_rating(rating):
    return MIN_RATING <= rating <= MAX_RATING


def vote(event: VoteEvent, user, candidate_id, rating):
    """Set, change or (rating 0) clear ``user``'s rating of ``candidate_id``.

    Returns True when exactly one row was written or removed.
    """
    if rating == 0:
        statement = (
            db.delete(Vote)
            .where(
                Vote.event == event.key,
                Vote.user_id == user.id,
                Vote.chapter_vote_id == candidate_id,
            )
            .execution_options(synchronize_session=False)
        )
    else:
        statement = (
            dialect_insert(Vote)
            .values(event=event.key, user_id=user.id, chapter_vote_id=candidate_id, rating=rating)
        )
        statement = statement.on_conflict_do_update(
            index_elements=['event', 'user_id', 'chapter_vote_id'],
            set_={'rating': statement.excluded.rating},
        )

    result = db.session.execute(statement)
    db.session.commit()
    return result.rowcount == 1


def get_votes(event: VoteEvent, user):
    rows = db.session.execute(
        db.select(Vote.chapter_vote_id, Vote.rating)
        .where(Vote.event == event.key, Vote.user_id == user.id)
        .order_by(Vote.chapter_vote_id.asc())
    ).all()
    return [{'chapter_vote_id': candidate_id, 'rating': rating} for candidate_id, rating in rows]
