#!/usr/bin/env python3
"""
YouTube MP3 Converter - Web Entry Point

Serves the conversion form, forwards submissions to the conversion handler
and renders the resulting download link or error message.
Also exposes /ping and /env-check for deployment verification.
"""

import logging
import sys
import threading
from typing import Optional

import structlog
from dotenv import load_dotenv
from flask import Flask, jsonify, render_template, request
from werkzeug.exceptions import InternalServerError

# Load environment variables from .env file
load_dotenv()

from config import AppConfig, load_config
from core.convert import handle_conversion
from core.result import ConversionResult, ConversionErrorKind

logger = structlog.get_logger(__name__)

NOT_FOUND_MESSAGE = "Page not found. Please try the converter on the home page."
SERVER_ERROR_MESSAGE = "Something went wrong! Please try again later."


def configure_logging(debug: bool = False):
    """Configure structured logging on top of the stdlib logging module"""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=True)
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def install_exception_hooks():
    """Log uncaught exceptions from any thread instead of dumping raw tracebacks"""

    def log_uncaught(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.error("Uncaught exception",
                     exc_info=(exc_type, exc_value, exc_traceback))

    def log_thread_uncaught(args):
        if args.exc_type is SystemExit:
            return
        logger.error("Uncaught exception in thread",
                     thread=getattr(args.thread, 'name', None),
                     exc_info=(args.exc_type, args.exc_value, args.exc_traceback))

    sys.excepthook = log_uncaught
    threading.excepthook = log_thread_uncaught


def create_app(app_config: Optional[AppConfig] = None, session=None) -> Flask:
    """Build the Flask application around an explicit configuration"""

    app_config = app_config or load_config()
    converter_config = app_config.converter
    server_config = app_config.server

    app = Flask(__name__, static_folder="static", template_folder="templates")

    @app.route("/ping")
    def ping():
        return "pong", 200, {'Content-Type': 'text/plain; charset=utf-8'}

    @app.route("/env-check")
    def env_check():
        return jsonify({
            'apiKeySet': bool(converter_config.api_key),
            'apiHostSet': bool(converter_config.api_host),
            'environment': server_config.environment or 'not set',
        })

    @app.route("/")
    def index():
        return render_template("index.html", success=None)

    @app.route("/convert-mp3", methods=["POST"])
    def convert_mp3():
        video_reference = request.form.get("videoID")

        try:
            result = handle_conversion(
                video_reference,
                converter_config.credentials(),
                session=session,
                endpoint_path=converter_config.endpoint_path
            )
        except Exception as e:
            logger.exception("General error while converting", error=str(e))
            result = ConversionResult.failed(ConversionErrorKind.UNEXPECTED)

        return render_template("index.html", **result.to_template_context())

    @app.errorhandler(404)
    def not_found(error):
        return render_template("index.html", success=False, error_message=NOT_FOUND_MESSAGE), 404

    @app.errorhandler(InternalServerError)
    def server_error(error):
        original = getattr(error, 'original_exception', None) or error
        logger.error("Unhandled request error",
                     path=request.path,
                     exc_info=(type(original), original, original.__traceback__))
        details = str(original) if server_config.is_development else None
        return render_template("error.html", error=SERVER_ERROR_MESSAGE, details=details), 500

    return app


def main():
    """Main entry point: read configuration and serve the converter"""

    app_config = load_config()
    configure_logging(app_config.debug)
    install_exception_hooks()

    if not app_config.converter.api_key:
        logger.warning("API_KEY environment variable is not set. API calls will fail.")

    app = create_app(app_config)

    print(f"🎵 YouTube MP3 Converter")
    print(f"🌐 Server is running on port {app_config.server.port}")
    logger.info("Server starting",
                port=app_config.server.port,
                api_key_configured=bool(app_config.converter.api_key),
                api_host=app_config.converter.api_host)

    app.run(
        host=app_config.server.host,
        port=app_config.server.port,
        threaded=True
    )


if __name__ == "__main__":
    main()
