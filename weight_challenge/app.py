from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
import logging
import os
from dotenv import load_dotenv
from weight_challenge.core.dates import parse_date

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()

def create_app(config_name='development'):
    # Load environment variables
    load_dotenv()

    # Initialize Flask app
    app = Flask(__name__)

    # Configure the app based on environment
    if config_name == 'testing':
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'
        app.config['TESTING'] = True
    else:
        app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv('DATABASE_URL', 'sqlite:///weight_challenge.db')

    app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', 'dev-key-please-change')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['CHALLENGE_DEADLINE_MONTH'] = int(os.getenv('CHALLENGE_DEADLINE_MONTH', 12))
    app.config['CHALLENGE_DEADLINE_DAY'] = int(os.getenv('CHALLENGE_DEADLINE_DAY', 10))
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO').upper()
    # Fixed evaluation date, mainly for tests and demos
    app.config['CHALLENGE_TODAY'] = parse_today(os.getenv('CHALLENGE_TODAY'))

    configure_logging(app)

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    CORS(app)

    # Import routes after db initialization to avoid circular imports
    from weight_challenge.routes.participants import participants_bp
    from weight_challenge.routes.entries import entries_bp
    from weight_challenge.routes.leaderboard import leaderboard_bp

    # Register blueprints
    app.register_blueprint(participants_bp, url_prefix='/api/participants')
    app.register_blueprint(entries_bp, url_prefix='/api/participants')
    app.register_blueprint(leaderboard_bp, url_prefix='/api')

    from weight_challenge.session import init_app as init_session
    init_session(app)

    register_error_handlers(app)

    @app.cli.command('init-db')
    def init_db():
        """Create all tables."""
        db.create_all()
        print('Database initialized')

    return app

def parse_today(value):
    if not value:
        return None
    return parse_date(value)

def configure_logging(app):
    level = getattr(logging, app.config['LOG_LEVEL'], logging.INFO)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logging.getLogger('weight_challenge').setLevel(level)
    app.logger.setLevel(level)

def register_error_handlers(app):
    from weight_challenge.errors import ChallengeError

    @app.errorhandler(ChallengeError)
    def handle_challenge_error(e):
        return jsonify({'error': str(e)}), e.status_code

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({'error': 'Not found'}), 404

if __name__ == '__main__':
    create_app().run(debug=True)
