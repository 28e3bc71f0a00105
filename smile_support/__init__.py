# smile_support/__init__.py
import logging
from flask import Flask, jsonify
from dotenv import load_dotenv

from smile_support.config import Settings
from smile_support.routes import contact_bp, core
from smile_support.routes.contact_routes import EXTENSION_KEY
from smile_support.services.contact_service import ContactDependencies

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def create_app(settings=None, *, mailer_factory=None, verifier=None):
    """
    Application factory. Collaborators default to ones built from the environment;
    tests pass their own settings, mailer factory and verifier.
    """
    if settings is None:
        load_dotenv(dotenv_path=".env")
        settings = Settings.from_env()
        configure_logging(settings.log_level)

    app = Flask(__name__)
    app.url_map.strict_slashes = False
    app.json.ensure_ascii = False
    app.config["CONTACT_SETTINGS"] = settings

    app.extensions[EXTENSION_KEY] = ContactDependencies.from_settings(
        settings, mailer_factory=mailer_factory, verifier=verifier
    )

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return jsonify({"error": "Method not allowed"}), 405

    app.register_blueprint(core)
    app.register_blueprint(contact_bp)

    if not settings.recaptcha_secret_key:
        app.logger.warning("RECAPTCHA_SECRET_KEY not set, reCAPTCHA checks are skipped")
    return app
