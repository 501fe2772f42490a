"""
webpify server - Flask API around the URL -> WebP converter

This app is deployed as a small HTTP service. It:
1. Accepts POST /convert-image with an image URL and resize ratio
2. Fetches and converts the image to WebP
3. Writes it to the output directory and reports path and dimensions

Deployment:
    pip install webpify
    webpify-server
    # or: flask --app webpify_server.app:create_app run
"""

from .app import create_app
from .config import Config

__all__ = ["create_app", "Config"]
