"""Flask application factory for the webpify server."""

from __future__ import annotations

import logging
import sys

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from webpify_converter import ImageConverter, new_session

from .config import Config
from .routes import convert_bp

logger = logging.getLogger(__name__)


def create_app(
    config: Config | None = None,
    converter: ImageConverter | None = None,
) -> Flask:
    """Create and configure the Flask application."""
    if config is None:
        config = Config.load()

    config.ensure_directories()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    app = Flask(__name__)
    CORS(app, resources={r"/*": {"origins": "*"}})

    if converter is None:
        converter = ImageConverter(
            config.output_dir.resolve(),
            session=new_session(),
            fetch_timeout=config.fetch_timeout,
        )
    app.config["image_converter"] = converter
    app.config["output_dir"] = config.output_dir.resolve()

    app.register_blueprint(convert_bp)

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify({"success": False, "message": e.description}), e.code

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logger.info("webpify server initialized, writing to %s", app.config["output_dir"])
    return app


def main() -> None:
    """Entry point for running the development server."""
    config = Config.load()
    app = create_app(config)
    app.run(host=config.host, port=config.port, debug=False, use_reloader=False)


if __name__ == "__main__":
    main()
