import atexit
import logging
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from docsign.config import Settings, settings
from docsign.api.middleware import register_error_handlers
from docsign.api.routes import sign, uploads
from docsign.services.signing_service import SigningService
from docsign.services.worker_pool import WorkerPool
from docsign.utils.pdf_helpers import use_system_date_locale

logger = logging.getLogger(__name__)

API_TITLE = "DocSign PDF Field Flattening API"
API_VERSION = "1.0.0"


def _shutdown_pool(pool: WorkerPool) -> None:
    try:
        pool.shutdown(wait=False)
        logger.info("Transform workers shut down")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")


def create_app(config: Optional[Settings] = None) -> Flask:
    """Build the Flask app from an explicit settings object (module defaults otherwise)."""
    config = config or settings
    logging.basicConfig(level=config.log_level.upper())
    use_system_date_locale()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_body_size
    app.config["DOCSIGN_SETTINGS"] = config

    # CORS
    CORS(app, origins=config.get_cors_origins())

    signing_service = SigningService.from_settings(config)
    app.extensions[sign.SIGNING_SERVICE_KEY] = signing_service
    # Flask has no shutdown hook; stop the transform workers at interpreter exit
    atexit.register(_shutdown_pool, signing_service.pool)

    register_error_handlers(app)

    # Blueprints
    app.register_blueprint(sign.bp)
    app.register_blueprint(uploads.bp, url_prefix=config.uploads_url_prefix)

    @app.route("/")
    def root():
        return jsonify({"message": API_TITLE, "version": API_VERSION})

    @app.route("/health")
    def health():
        return jsonify({"status": "healthy"})

    logger.info(
        f"Application created (storage={config.storage_root}, "
        f"max_body_size={config.max_body_size}, origins={config.get_cors_origins()})"
    )
    return app


def run() -> None:
    """Serve with the built-in server on the configured port."""
    app = create_app(settings)
    app.run(host=settings.host, port=settings.port, debug=settings.is_dev())


if __name__ == "__main__":
    run()
