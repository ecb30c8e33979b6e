"""Chapter directory, visit ledger and the visit leaderboards."""
import logging
from enum import Enum

from sqlalchemy import func, desc

from novel_extras.api import common
from novel_extras.extensions import db
from novel_extras.models.chapter import Chapter
from novel_extras.models.visit import Visit
from novel_extras.services.sql import dialect_insert

logger = logging.getLogger(__name__)

PAGE_SIZE = 50

_HOUR_MS = 1000 * 3600
_DAY_MS = _HOUR_MS * 24


class TimeFrame(Enum):
    """Leaderboard windows. Fixed lengths, not calendar aware."""
    HOUR = _HOUR_MS
    DAY = _DAY_MS
    WEEK = _DAY_MS * 7
    MONTH = _DAY_MS * 30
    YEAR = _DAY_MS * 365

    @property
    def milliseconds(self):
        return self.value


def _page_offset(page):
    return (max(page, 1) - 1) * PAGE_SIZE


def _to_dict(relative_path, visit_count):
    return {'relative_path': relative_path, 'visit_count': visit_count}


def find_chapter(relative_path):
    return db.session.execute(
        db.select(Chapter).filter_by(relative_path=relative_path)
    ).scalar_one_or_none()


def get_or_create_chapter(relative_path):
    """Return the chapter for ``relative_path``, inserting it on first sight.

    Concurrent first visits are absorbed by ON CONFLICT DO NOTHING on the
    unique path, so exactly one row ever exists per path.
    """
    chapter = find_chapter(relative_path)
    if chapter is not None:
        return chapter

    db.session.execute(
        dialect_insert(Chapter)
        .values(relative_path=relative_path, visit_count=0)
        .on_conflict_do_nothing(index_elements=['relative_path'])
    )
    logger.debug('Created chapter %s', relative_path)
    return find_chapter(relative_path)


def record_visit(relative_path):
    """Log one visit and bump the chapter counter in a single transaction.

    Returns False without writing anything if the path is not a valid page name.
    """
    if not common.is_page_name(relative_path):
        return False

    try:
        chapter = get_or_create_chapter(relative_path)
        db.session.add(Visit(chapter_id=chapter.id, timestamp=common.current_timestamp()))
        db.session.execute(
            db.update(Chapter)
            .where(Chapter.id == chapter.id)
            .values(visit_count=Chapter.visit_count + 1)
        )
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return True


def list_chapters(page):
    """One page of chapters by all-time visit count."""
    rows = db.session.execute(
        db.select(Chapter.relative_path, Chapter.visit_count)
        .order_by(Chapter.visit_count.desc(), Chapter.id.asc())
        .offset(_page_offset(page))
        .limit(PAGE_SIZE)
    ).all()
    return [_to_dict(path, count) for path, count in rows]


def list_all_chapters():
    rows = db.session.execute(
        db.select(Chapter.relative_path, Chapter.visit_count).order_by(Chapter.id.asc())
    ).all()
    return [_to_dict(path, count) for path, count in rows]


def list_recent_chapters(page, time_frame: TimeFrame):
    """One page of chapters ranked by visits inside the trailing window."""
    since = common.current_timestamp() - time_frame.milliseconds
    visit_count = func.count(Visit.id).label('visit_count')
    rows = db.session.execute(
        db.select(Chapter.relative_path, visit_count)
        .select_from(Visit)
        .join(Chapter, Visit.chapter_id == Chapter.id)
        .where(Visit.timestamp > since)
        .group_by(Chapter.id, Chapter.relative_path)
        .order_by(desc(visit_count), Chapter.id.asc())
        .offset(_page_offset(page))
        .limit(PAGE_SIZE)
    ).all()
    return [_to_dict(path, count) for path, count in rows]
