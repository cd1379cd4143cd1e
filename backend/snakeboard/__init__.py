from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, resources={r"/api/*": {"origins": allowed_origins}})

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from snakeboard.main import main
    flask_app.register_blueprint(main)

    from snakeboard.api.scores import scores
    flask_app.register_blueprint(scores, url_prefix='/api')

    from snakeboard.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    # Build the leaderboard store once; handlers read it from app.extensions
    from snakeboard.services.leaderboard import StorageUnavailable, create_score_store
    try:
        store = create_score_store(flask_app.config, db)
        flask_app.logger.info(f"[store-init] backend={type(store).__name__}")
    except StorageUnavailable as exc:
        flask_app.logger.warning(f"[store-init] leaderboard disabled: {exc.reason}")
        store = None
    flask_app.extensions['score_store'] = store

    def _require_store():
        store = flask_app.extensions.get('score_store')
        if store is None:
            raise click.ClickException('Leaderboard store is not configured')
        return store

    @click.command('scores-reset')
    def scores_reset_command():
        """Removes every entry from the configured leaderboard."""
        with flask_app.app_context():
            _require_store().reset()
            click.echo('Leaderboard has been reset!')

    @click.command('scores-top')
    @click.option('--limit', default=10, show_default=True, help='Number of entries to show.')
    def scores_top_command(limit):
        """Prints the current leaderboard."""
        with flask_app.app_context():
            entries = _require_store().list(limit)
            if not entries:
                click.echo('No scores yet.')
            for rank, entry in enumerate(entries, start=1):
                click.echo(f"{rank:>3}. {entry.name:<24} {entry.score:>6}")

    flask_app.cli.add_command(scores_reset_command)
    flask_app.cli.add_command(scores_top_command)

    return flask_app
