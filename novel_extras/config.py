import os
from dotenv import load_dotenv

from novel_extras.services.votes import VoteEvent

load_dotenv()

DEFAULT_CORS_ORIGINS = (
    'http://127.0.0.1:2333,'
    'http://localhost:2333,'
    'https://wt.tepis.me,'
    'https://wt.bgme.me,'
    'https://rbq.desi,'
    'https://wt.makai.city,'
    'https://wt.0w0.bid'
)


def _fix_db_url(url):
    """Fix common DATABASE_URL issues for SQLAlchemy compatibility."""
    if not url:
        return 'sqlite:///app.db'
    # Heroku-style URLs use postgres:// but SQLAlchemy requires postgresql://
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def _split_origins(value):
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    SQLALCHEMY_DATABASE_URI = _fix_db_url(os.environ.get('DATABASE_URL', ''))
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = _split_origins(os.environ.get('CORS_ORIGINS', DEFAULT_CORS_ORIGINS))

    # Yearly cup votes. Each event is one partition of the votes table.
    VOTE_EVENTS = {
        'wtcup_2021': VoteEvent(
            key='wtcup_2021',
            min_id=32,
            max_id=69,
            start_ts=1640962800000,
            end_ts=1643382000000,
        ),
    }
    ACTIVE_VOTE_EVENT = os.environ.get('ACTIVE_VOTE_EVENT', 'wtcup_2021')


class DevConfig(Config):
    DEBUG = True


class ProdConfig(Config):
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
