import os
import sys
import pytest

# Ensure the backend root (containing the `snakeboard` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from snakeboard import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    DATABASE_URL = 'sqlite://'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SCORES_BACKEND = 'sql'
    CORS_ALLOWED_ORIGINS = ['http://localhost:5173']


def _make_app(config_class):
    application = create_app(config_class)
    with application.app_context():
        # Ensure models are imported so tables are created
        import snakeboard.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def flask_app():
    yield from _make_app(TestConfig)


@pytest.fixture()
def file_app(tmp_path):
    class FileConfig(TestConfig):
        SCORES_BACKEND = 'file'
        SCORES_FILE = str(tmp_path / 'data' / 'scores.json')

    yield from _make_app(FileConfig)


@pytest.fixture()
def unconfigured_app():
    class NoDatabaseConfig(TestConfig):
        DATABASE_URL = None
        SCORES_BACKEND = 'sql'

    yield from _make_app(NoDatabaseConfig)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
