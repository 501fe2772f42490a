"""Image conversion route."""

from __future__ import annotations

import logging

from flask import Blueprint, abort, current_app, jsonify, request

from webpify_shared.protocol import ProtocolError, parse_conversion_request

logger = logging.getLogger(__name__)

convert_bp = Blueprint("convert", __name__)


@convert_bp.post("/convert-image")
def convert_image():
    """Fetch an image URL and convert it to WebP."""
    converter = current_app.config["image_converter"]

    try:
        conversion = parse_conversion_request(request.get_json(silent=True))
    except ProtocolError as e:
        abort(400, description=str(e))

    logger.info(
        "Converting %s (ratio %s)", conversion.source_url, conversion.resize_ratio
    )
    result = converter.run(conversion)

    if not result.success:
        return jsonify(result.to_dict()), 500

    return jsonify(result.to_dict()), 200
