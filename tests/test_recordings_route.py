from core.settings import settings
from tests.conftest import ADMIN_HEADERS
from pathlib import Path
import json

def upload(client, content=b"\x1a\x45\xdf\xa3webm-bytes", headers=ADMIN_HEADERS):
  return client.post("/api/upload", files={"audio": ("clip.webm", content, "audio/webm")}, headers=headers)

def test_upload_requires_admin_token(client):
  assert upload(client, headers={}).status_code == 401
  assert upload(client, headers={"X-Admin-Token": "wrong"}).status_code == 401

def test_upload_without_file_is_rejected(client):
  response = client.post("/api/upload", headers=ADMIN_HEADERS)
  assert response.status_code == 400
  assert response.json() == {"detail": "No file"}

def test_upload_stores_blob_and_metadata(client):
  content = b"recorded-audio" * 10
  response = upload(client, content)

  assert response.status_code == 200
  body = response.json()
  assert body["ok"] is True
  meta = body["meta"]
  assert meta["filename"] == f"{meta['id']}.webm"
  assert meta["size"] == len(content)
  assert meta["createdAt"].endswith("Z")

  recordings = Path(settings.RECORDINGS_DIR)
  assert (recordings / meta["filename"]).read_bytes() == content
  assert json.loads((recordings / "index.json").read_text()) == [meta]

def test_listing_is_newest_first(client):
  first = upload(client, b"one").json()["meta"]
  second = upload(client, b"two").json()["meta"]

  assert first["id"] != second["id"]
  response = client.get("/api/recordings", headers=ADMIN_HEADERS)
  assert response.status_code == 200
  assert response.json() == [second, first]

def test_listing_requires_admin_token(client):
  assert client.get("/api/recordings").status_code == 401

def test_listing_with_corrupt_index_is_empty(client):
  Path(settings.RECORDINGS_DIR).mkdir(parents=True, exist_ok=True)
  (Path(settings.RECORDINGS_DIR) / "index.json").write_text("{not json")

  response = client.get("/api/recordings", headers=ADMIN_HEADERS)
  assert response.status_code == 200
  assert response.json() == []

def test_startup_creates_empty_index(client):
  index = Path(settings.RECORDINGS_DIR) / "index.json"
  assert json.loads(index.read_text()) == []
