from sqlalchemy.dialects import postgresql, sqlite

from novel_extras.extensions import db

_INSERTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


def dialect_insert(model):
    """INSERT construct supporting ON CONFLICT for the bound database."""
    name = db.engine.dialect.name
    try:
        return _INSERTS[name](model)
    except KeyError:
        raise RuntimeError(f'ON CONFLICT upserts are not supported on {name}') from None
