import json
import time

import pytest

import novel_extras.api.common as common_module
from novel_extras import create_app
from novel_extras.config import TestConfig
from novel_extras.extensions import db as _db


class FakeClock:
    """Stand-in for current_timestamp(): strictly increasing, manually advanceable."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        self.now += 1
        return self.now

    def advance(self, milliseconds):
        self.now += milliseconds


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock(int(time.time() * 1000))
    monkeypatch.setattr(common_module, 'current_timestamp', fake)
    return fake


@pytest.fixture
def app(clock):
    """Create a test Flask application with SQLite in-memory database."""
    application = create_app(TestConfig)

    with application.app_context():
        _db.create_all()

        yield application

        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type='application/json')


@pytest.fixture
def register(client):
    """Register a user and return its token."""
    def _register(display_name, email=None):
        payload = {'display_name': display_name}
        if email is not None:
            payload['email'] = email
        resp = post_json(client, '/user/register', payload)
        data = resp.get_json()
        assert data['success'] is True, data
        return data['token']
    return _register
