"""
Standalone variant of webpify. It:
1. Fetches one image (a built-in default URL unless --url is given)
2. Converts it to WebP with the same converter the server uses
3. Writes output/output-image-<N>.webp and exits

Deployment:
    pip install webpify
    webpify --url <image-url> --ratio 0.5
"""

from .cli import DEFAULT_IMAGE_URL, main

__all__ = ["DEFAULT_IMAGE_URL", "main"]
