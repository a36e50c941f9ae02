"""
MediClarity Application Factory
"""
import logging
from datetime import datetime, timezone

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import get_config
from app.services.mail_service import Mailer
from app.services.openai_service import ReportSummarizer
from app.services.upload_service import UploadStore

cors = CORS()


def _configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def create_app(config_name='default'):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    _configure_logging(app)

    cors.init_app(app, resources={r"/api/*": {"origins": [app.config["CORS_ORIGIN"]]}})

    # Collaborators are built once from config and shared read-only by requests
    app.extensions["mediclarity"] = {
        "summarizer": ReportSummarizer.from_config(app.config),
        "mailer": Mailer.from_config(app.config),
        "uploads": UploadStore(app.config["UPLOAD_FOLDER"]),
    }

    from app.api import api_bp
    app.register_blueprint(api_bp)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"error": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def unhandled_error(e):
        app.logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500

    # Health check endpoint
    @app.route('/healthz')
    def healthz():
        """Health check for load balancers and monitoring"""
        services = app.extensions["mediclarity"]
        return jsonify({
            "status": "ok",
            "version": app.config["APP_VERSION"],
            "openai_ready": services["summarizer"].ready,
            "mail_ready": services["mailer"].ready,
            "timestamp": datetime.now(timezone.utc).isoformat()
        })

    # Version endpoint
    @app.route('/version')
    def version():
        """Version and build info"""
        return jsonify({
            "version": app.config["APP_VERSION"],
            "build_time": app.config["BUILD_TIME"],
            "git_commit": app.config["GIT_COMMIT"],
            "features": {
                "contact_email": True,
                "report_summary": True,
                "first_page_only": True,
            }
        })

    app.logger.info('MediClarity started (%s config)', config_name)
    return app
