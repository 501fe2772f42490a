"""Shared fixtures: in-memory images and a fake HTTP session."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Callable

import pytest
import requests
from PIL import Image

from webpify_converter import ImageConverter


class FakeResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200):
        self.content = content
        self.status_code = status_code


class FakeSession:
    """Maps URLs to responses or exceptions; records every URL requested."""

    def __init__(self, routes: dict[str, FakeResponse | Exception] | None = None):
        self.routes = routes or {}
        self.calls: list[str] = []

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        self.calls.append(url)
        target = self.routes.get(url)
        if target is None:
            raise requests.ConnectionError(f"Failed to resolve {url}")
        if isinstance(target, Exception):
            raise target
        return target


def image_bytes(fmt: str, size: tuple[int, int] = (64, 48), mode: str = "RGB") -> bytes:
    img = Image.new(mode, size)
    # Deterministic gradient so lossless checks compare real pixel data.
    px = img.load()
    for x in range(size[0]):
        for y in range(size[1]):
            if mode == "RGB":
                px[x, y] = ((x * 4) % 256, (y * 5) % 256, (x + y) % 256)
            elif mode == "RGBA":
                px[x, y] = ((x * 4) % 256, (y * 5) % 256, (x + y) % 256, 255)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return image_bytes("JPEG", size=(200, 120))


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    out = tmp_path / "output"
    out.mkdir()
    return out


@pytest.fixture
def make_converter(output_dir: Path) -> Callable[..., tuple[ImageConverter, FakeSession]]:
    def _make(routes: dict[str, FakeResponse | Exception] | None = None):
        session = FakeSession(routes)
        return ImageConverter(output_dir, session=session, fetch_timeout=5.0), session

    return _make
