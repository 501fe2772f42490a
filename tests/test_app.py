"""Tests for the Flask server and the /convert-image route."""

from __future__ import annotations

from pathlib import Path

import pytest
from flask.testing import FlaskClient

from conftest import FakeResponse, FakeSession
from webpify_converter import ImageConverter
from webpify_server import Config, create_app

PNG_URL = "https://images.test/source.png"


@pytest.fixture
def session(png_bytes: bytes) -> FakeSession:
    return FakeSession({PNG_URL: FakeResponse(png_bytes)})


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    return tmp_path / "server-output"


@pytest.fixture
def client(out_dir: Path, session: FakeSession) -> FlaskClient:
    config = Config(output_dir=out_dir)
    converter = ImageConverter(out_dir, session=session)
    app = create_app(config, converter=converter)
    app.config["TESTING"] = True
    return app.test_client()


def test_create_app_makes_output_dir(client: FlaskClient, out_dir: Path) -> None:
    assert out_dir.is_dir()


def test_health(client: FlaskClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_convert_success(client: FlaskClient, out_dir: Path) -> None:
    response = client.post("/convert-image", json={"imageUrl": PNG_URL, "resizeRatio": "0.5"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["dimensions"] == {"width": 32, "height": 24}
    assert Path(body["path"]) == out_dir / "output-image-1.webp"
    assert body["path"] in body["message"]
    assert (out_dir / "output-image-1.webp").is_file()


def test_convert_twice_increments_name(client: FlaskClient) -> None:
    first = client.post("/convert-image", json={"imageUrl": PNG_URL, "resizeRatio": 1})
    second = client.post("/convert-image", json={"imageUrl": PNG_URL, "resizeRatio": 1})

    assert Path(first.get_json()["path"]).name == "output-image-1.webp"
    assert Path(second.get_json()["path"]).name == "output-image-2.webp"


@pytest.mark.parametrize(
    "body",
    [
        {"imageUrl": PNG_URL},
        {"resizeRatio": 1},
        {},
    ],
)
def test_missing_fields_is_400_and_no_conversion(
    client: FlaskClient, session: FakeSession, out_dir: Path, body: dict
) -> None:
    response = client.post("/convert-image", json=body)

    assert response.status_code == 400
    assert response.get_json() == {
        "success": False,
        "message": "imageUrl and resizeRatio are required.",
    }
    assert session.calls == []
    assert list(out_dir.iterdir()) == []


def test_converter_not_invoked_on_missing_ratio(
    client: FlaskClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    converter = client.application.config["image_converter"]
    calls = []
    monkeypatch.setattr(converter, "run", lambda request: calls.append(request))

    response = client.post("/convert-image", json={"imageUrl": PNG_URL})

    assert response.status_code == 400
    assert calls == []


def test_non_json_body_is_400(client: FlaskClient) -> None:
    response = client.post("/convert-image", data="imageUrl=x", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json()["message"] == "imageUrl and resizeRatio are required."


@pytest.mark.parametrize("ratio", ["abc", 0, -1])
def test_bad_ratio_is_400(client: FlaskClient, session: FakeSession, ratio) -> None:
    response = client.post("/convert-image", json={"imageUrl": PNG_URL, "resizeRatio": ratio})

    assert response.status_code == 400
    assert response.get_json() == {
        "success": False,
        "message": "resizeRatio must be a positive number.",
    }
    assert session.calls == []


def test_unreachable_url_is_500(client: FlaskClient, out_dir: Path) -> None:
    response = client.post(
        "/convert-image",
        json={"imageUrl": "http://unreachable.test/x.png", "resizeRatio": 1},
    )

    assert response.status_code == 500
    body = response.get_json()
    assert body["success"] is False
    assert body["kind"] == "fetch"
    assert "unreachable.test" in body["error"]
    assert list(out_dir.iterdir()) == []


def test_unknown_route_is_json_404(client: FlaskClient) -> None:
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_wrong_method_is_json_405(client: FlaskClient) -> None:
    response = client.get("/convert-image")
    assert response.status_code == 405
    assert response.get_json()["success"] is False


def test_config_load_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WEBPIFY_PORT", "8081")
    monkeypatch.setenv("WEBPIFY_OUTPUT_DIR", str(tmp_path / "o"))
    monkeypatch.setenv("WEBPIFY_FETCH_TIMEOUT", "2.5")

    config = Config.load()

    assert config.port == 8081
    assert config.host == "0.0.0.0"
    assert config.output_dir == tmp_path / "o"
    assert config.fetch_timeout == 2.5


def test_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("WEBPIFY_HOST", "WEBPIFY_PORT", "WEBPIFY_OUTPUT_DIR", "WEBPIFY_FETCH_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    config = Config.load()

    assert config.port == 3000
    assert config.output_dir == Path("output")


def test_ensure_directories_keeps_existing_files(tmp_path: Path) -> None:
    out = tmp_path / "out"
    out.mkdir()
    (out / "output-image-5.webp").write_bytes(b"keep")

    Config(output_dir=out).ensure_directories()

    assert (out / "output-image-5.webp").read_bytes() == b"keep"


@pytest.mark.parametrize("ratio", ["1e308", 1e9])
def test_oversized_ratio_is_500_with_kind(client: FlaskClient, out_dir: Path, ratio) -> None:
    response = client.post("/convert-image", json={"imageUrl": PNG_URL, "resizeRatio": ratio})

    assert response.status_code == 500
    body = response.get_json()
    assert body["success"] is False
    assert body["kind"] == "decode"
    assert body["error"]
    assert list(out_dir.iterdir()) == []
