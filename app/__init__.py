from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from dotenv import load_dotenv
from flask_cors import CORS
from flask_socketio import SocketIO
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.utils.errors import StoreUnavailable

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO()

logger = logging.getLogger(__name__)


def create_app(config_object='app.config.config.Config'):
    load_dotenv()
    app = Flask(__name__, static_folder=None)
    app.config.from_object(config_object)

    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'))

    origins = list(app.config['CORS_ORIGINS'])
    if app.config.get('FRONTEND_URL'):
        origins.insert(0, app.config['FRONTEND_URL'])

    CORS(
        app,
        origins=origins,
        methods=app.config['CORS_METHODS'],
        allow_headers=app.config['CORS_HEADERS'],
        supports_credentials=True
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    socketio.init_app(
        app,
        cors_allowed_origins=origins,
        async_mode=app.config['SOCKETIO_ASYNC_MODE']
    )

    from app.utils.uploads import UploadStore
    app.extensions['upload_store'] = UploadStore(
        app.config['UPLOAD_FOLDER'],
        max_size=app.config['MAX_UPLOAD_SIZE']
    )

    # Import models
    from app.models.employee_request import EmployeeRequest  # noqa: F401

    # Import routes
    from app.routes.requests import requests_bp
    from app.routes.files import files_bp
    from app.routes.pages import pages_bp

    # Register blueprints
    app.register_blueprint(requests_bp, url_prefix='/api/requests')
    app.register_blueprint(files_bp)
    app.register_blueprint(pages_bp)

    register_error_handlers(app)
    initialize_database(app)

    return app


def initialize_database(app):
    """Create the requests table if it is missing; the service cannot run without it."""
    try:
        with app.app_context():
            db.create_all()
        logger.info("Database initialized")
    except SQLAlchemyError as e:
        error = StoreUnavailable(f"Database initialization failed: {str(e)}")
        logger.critical(str(error))
        raise SystemExit(1) from error


def register_error_handlers(app):
    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(413)
    def handle_request_too_large(e):
        return jsonify({"error": "File too large. Maximum size is 5MB"}), 413
