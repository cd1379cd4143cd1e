import os


def _database_url():
    url = os.environ.get('DATABASE_URL')
    # SQLAlchemy only accepts the postgresql:// scheme
    if url and url.startswith('postgres://'):
        url = 'postgresql://' + url[len('postgres://'):]
    return url


def _scores_file():
    if os.environ.get('SCORES_FILE'):
        return os.environ['SCORES_FILE']
    if os.environ.get('VERCEL'):
        return os.path.join('/tmp', 'scores.json')
    return os.path.join(os.getcwd(), 'data', 'scores.json')


def _allowed_origins():
    raw = os.environ.get('CORS_ALLOWED_ORIGINS')
    if raw:
        return [o.strip() for o in raw.split(',') if o.strip()]
    return [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    DATABASE_URL = _database_url()
    # Flask-SQLAlchemy needs a URI even when scores live in a JSON file
    SQLALCHEMY_DATABASE_URI = DATABASE_URL or 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}
    # Leaderboard storage: 'file' or 'sql'
    SCORES_BACKEND = os.environ.get('SCORES_BACKEND') or ('sql' if DATABASE_URL else 'file')
    SCORES_FILE = _scores_file()
    CORS_ALLOWED_ORIGINS = _allowed_origins()
