import pytest
from flask_jwt_extended import create_access_token

from config import Config
from monogram import create_app
from monogram.helpers.hashing import background_color
from monogram.helpers.raster import FontAsset, Rasterizer

from conftest import FakeEngine, open_png, png_bytes


def make_app(tmp_path, rasterizer):
    class TestConfig(Config):
        TESTING = True
        JWT_SECRET_KEY = "monogram-test-secret-key-with-enough-length"
        AVATARS_DIR = str(tmp_path / "avatars")
        MAX_AVATAR_SIZE = 512
        DEFAULT_AVATAR_SIZE = 48

    return create_app(TestConfig, rasterizer=rasterizer)


def auth(client, identity: str) -> dict:
    with client.application.app_context():
        token = create_access_token(identity=identity)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(tmp_path, drawing_rasterizer):
    return make_app(tmp_path, drawing_rasterizer).test_client()


def test_root(client) -> None:
    res = client.get("/api/")
    assert res.status_code == 200
    assert "message" in res.get_json()


def test_generated_avatar(client) -> None:
    res = client.get("/api/avatars/alice/64?name=Alice%20Smith")

    assert res.status_code == 200
    assert res.mimetype == "image/png"
    image = open_png(res.data)
    assert image.size == (64, 64)
    assert image.getpixel((0, 0)) == background_color("alice")


def test_svg_engine_works_without_font_file(tmp_path) -> None:
    rasterizer = Rasterizer(FontAsset(str(tmp_path / "NotoSans-Regular.ttf")), engine=FakeEngine(color=(9, 9, 9)))
    client = make_app(tmp_path, rasterizer).test_client()

    res = client.get("/api/avatars/alice/64?name=Alice%20Smith")

    assert res.status_code == 200
    assert open_png(res.data).getpixel((0, 0)) == (9, 9, 9)


def test_default_size(client) -> None:
    res = client.get("/api/avatars/alice")
    assert res.status_code == 200
    assert open_png(res.data).size == (48, 48)


@pytest.mark.parametrize("size", [0, 513])
def test_size_out_of_range(client, size: int) -> None:
    res = client.get(f"/api/avatars/alice/{size}")
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_guest_avatar(client) -> None:
    res = client.get("/api/avatars/guest/Jane%20Doe/32")
    assert res.status_code == 200
    assert open_png(res.data).getpixel((0, 0)) == background_color("Jane Doe")


def test_unavailable_avatar_is_404(tmp_path, unavailable_rasterizer) -> None:
    client = make_app(tmp_path, unavailable_rasterizer).test_client()
    assert client.get("/api/avatars/alice/64").status_code == 404
    assert client.get("/api/avatars/guest/alice/64").status_code == 404


def test_uploaded_avatar_wins(client) -> None:
    res = client.put(
        "/api/avatars/alice",
        data=png_bytes(color=(10, 20, 30)),
        content_type="image/png",
        headers=auth(client, "alice"),
    )
    assert res.status_code == 200

    res = client.get("/api/avatars/alice/16")
    assert res.status_code == 200
    assert open_png(res.data).getpixel((8, 8)) == (10, 20, 30)


def test_uploads_do_not_leak_between_identities(client) -> None:
    client.put("/api/avatars/a.64", data=png_bytes(color=(1, 1, 1)), content_type="image/png", headers=auth(client, "a.64"))

    res = client.get("/api/avatars/a/64")
    assert open_png(res.data).getpixel((0, 0)) == background_color("a")


def test_upload_rejects_garbage(client) -> None:
    headers = auth(client, "alice")
    res = client.put("/api/avatars/alice", data=b"garbage", content_type="image/png", headers=headers)
    assert res.status_code == 400
    res = client.put("/api/avatars/alice", data=b"", content_type="image/png", headers=headers)
    assert res.status_code == 400


def test_upload_requires_token(client) -> None:
    res = client.put("/api/avatars/alice", data=png_bytes(), content_type="image/png")
    assert res.status_code == 401


def test_upload_for_someone_else_is_forbidden(client) -> None:
    res = client.put("/api/avatars/alice", data=png_bytes(), content_type="image/png", headers=auth(client, "mallory"))
    assert res.status_code == 403
    assert client.delete("/api/avatars/alice", headers=auth(client, "mallory")).status_code == 403


def test_delete(client) -> None:
    headers = auth(client, "alice")
    client.put("/api/avatars/alice", data=png_bytes(), content_type="image/png", headers=headers)

    assert client.delete("/api/avatars/alice").status_code == 401
    assert client.delete("/api/avatars/alice", headers=headers).status_code == 200
    assert client.delete("/api/avatars/alice", headers=headers).status_code == 404
