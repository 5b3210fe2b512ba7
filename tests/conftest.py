import re

import pytest

from app import create_app
from config import TestingConfig
from extensions import db as _db
from sample_data import ensure_admin, seed_demo_data, DEMO_TEACHER_PASSWORD

CSRF_INPUT = re.compile(r'name="csrf_token" value="([^"]*)"')

CLASSES_URL = '/admin/classes'
SUBJECTS_URL = '/admin/subjects'


def extract_token(response):
    """Return the first CSRF token rendered into the page, as a browser would submit it."""
    match = CSRF_INPUT.search(response.get_data(as_text=True))
    assert match, 'page did not render a csrf_token field'
    return match.group(1)


def login(client, username, password):
    token = extract_token(client.get('/login'))
    return client.post('/login', data={
        'username': username,
        'password': password,
        'csrf_token': token,
    })


def post_form(client, url, data):
    """Load ``url`` for a fresh token, then POST ``data`` with it."""
    token = extract_token(client.get(url))
    return client.post(url, data=dict(data, csrf_token=token))


@pytest.fixture
def app():
    application = create_app(TestingConfig)
    with application.app_context():
        _db.create_all()
        yield application
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def demo(db):
    """Admin, three teachers (ids 1-3), classes R3A/R3B with students, four subjects."""
    return seed_demo_data(admin_password='admin')


@pytest.fixture
def admin_only(db):
    ensure_admin(password='admin')
    db.session.commit()


@pytest.fixture
def admin_client(client, demo):
    response = login(client, 'admin', 'admin')
    assert response.status_code == 302
    return client


@pytest.fixture
def teacher_client(client, demo):
    response = login(client, 'janez.novak', DEMO_TEACHER_PASSWORD)
    assert response.status_code == 302
    return client
