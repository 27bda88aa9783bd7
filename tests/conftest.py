import pytest

from bookmarkdb import create_app
from bookmarkdb.bootstrap import ensure_default_user
from bookmarkdb.config import TestConfig
from bookmarkdb.extensions import db


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.drop_all()
        db.create_all()
        ensure_default_user()
    yield app
    with app.app_context():
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user_id(app):
    with app.app_context():
        return ensure_default_user().id
