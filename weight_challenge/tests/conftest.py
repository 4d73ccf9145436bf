import pytest
from datetime import date
from weight_challenge.app import create_app, db
from weight_challenge.store import ParticipantStore

@pytest.fixture
def app():
    """Create application for the tests."""
    app = create_app('testing')

    # Create tables
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    """Create a test client for the app."""
    return app.test_client()

@pytest.fixture
def store(app):
    return ParticipantStore()

@pytest.fixture
def ana(store):
    """A participant aiming to go from 100 kg down to 80 kg."""
    return store.create_participant('ana1', 'Ana', 100, 80, created_on=date(2024, 1, 1))
