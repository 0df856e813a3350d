import base64

from immoauto.core.config import get_settings


def test_upload_fetch_and_delete(client, make_user, png_b64):
    _, headers = make_user()
    r = client.post("/api/upload/images", json={"images": [png_b64]}, headers=headers)
    assert r.status_code == 201, r.text
    image = r.json()["data"][0]
    assert image["mimeType"] == "image/png"

    r = client.get(f"/api/upload/images/{image['id']}")
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert r.content == base64.b64decode(png_b64)

    _, stranger = make_user()
    assert client.delete(f"/api/upload/images/{image['id']}", headers=stranger).status_code == 403
    assert client.delete(f"/api/upload/images/{image['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/upload/images/{image['id']}").status_code == 404


def test_rejects_unsupported_and_invalid_data(client, make_user):
    _, headers = make_user()
    pdf = "data:application/pdf;base64," + base64.b64encode(b"%PDF-1.4").decode()
    r = client.post("/api/upload/images", json={"images": [pdf]}, headers=headers)
    assert r.status_code == 400
    assert "Unsupported file type" in r.json()["message"]

    plain = base64.b64encode(b"just some text").decode()
    assert client.post("/api/upload/images", json={"images": [plain]}, headers=headers).status_code == 400
    assert client.post("/api/upload/images", json={"images": ["%%%not-base64"]}, headers=headers).status_code == 400
    assert client.post("/api/upload/images", json={"images": []}, headers=headers).status_code == 400


def test_rejects_oversized_image(client, make_user, png_b64, monkeypatch):
    monkeypatch.setattr(get_settings(), "MAX_IMAGE_BYTES", 8)
    _, headers = make_user()
    r = client.post("/api/upload/images", json={"images": [png_b64]}, headers=headers)
    assert r.status_code == 400
    assert "maximum size" in r.json()["message"]


def test_upload_requires_auth(client, png_b64):
    assert client.post("/api/upload/images", json={"images": [png_b64]}).status_code == 401


def test_declared_type_must_match_content(client, make_user, jpeg_b64):
    _, headers = make_user()
    spoofed = "data:image/png;base64," + base64.b64encode(b"<html>not an image</html>").decode()
    r = client.post("/api/upload/images", json={"images": [spoofed]}, headers=headers)
    assert r.status_code == 400
    assert r.json()["message"] == "File is not a valid image"

    # Real JPEG bytes labelled as PNG.
    r = client.post("/api/upload/images", json={"images": [f"data:image/png;base64,{jpeg_b64}"]}, headers=headers)
    assert r.status_code == 400
    assert "does not match" in r.json()["message"]

    r = client.post("/api/upload/images", json={"images": [f"data:image/jpeg;base64,{jpeg_b64}"]}, headers=headers)
    assert r.status_code == 201
    assert r.json()["data"][0]["mimeType"] == "image/jpeg"


def test_truncated_image_is_rejected(client, make_user, png_b64):
    _, headers = make_user()
    truncated = base64.b64encode(base64.b64decode(png_b64)[:20]).decode()
    r = client.post("/api/upload/images", json={"images": [truncated]}, headers=headers)
    assert r.status_code == 400
