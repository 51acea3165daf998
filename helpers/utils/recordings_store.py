from core.settings import settings
from schemas.recordings.recording_schema import RecordingMeta
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, List
import json
import logging
import shutil
import threading
import time

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.json"
RECORDING_EXTENSION = ".webm"

# Uploads are written from worker threads; the index is read-modify-write
_index_lock = threading.Lock()

def recordings_dir() -> Path:
  return Path(settings.RECORDINGS_DIR)

def index_path() -> Path:
  return recordings_dir() / INDEX_FILENAME

def ensure_recordings_dir():
  """Create the recordings folder and an empty index if they are missing."""
  recordings_dir().mkdir(parents=True, exist_ok=True)
  if not index_path().exists():
    index_path().write_text("[]")

def read_index() -> List[dict]:
  path = index_path()
  if not path.exists():
    return []
  try:
    entries = json.loads(path.read_text(encoding="utf-8") or "[]")
  except (OSError, ValueError) as e:
    logger.warning(f"Could not read recordings index {path}: {e}")
    return []
  if not isinstance(entries, list):
    logger.warning(f"Recordings index {path} is not a list, ignoring it")
    return []
  return entries

def write_index(entries: List[dict]):
  index_path().write_text(json.dumps(entries, indent=2), encoding="utf-8")

def _utc_timestamp() -> str:
  return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

def save_recording(source: BinaryIO) -> RecordingMeta:
  """
  Stream an uploaded blob to disk as <ms-timestamp>.webm and prepend its metadata to the index.
  """
  ensure_recordings_dir()

  with _index_lock:
    stamp = int(time.time() * 1000)
    while (recordings_dir() / f"{stamp}{RECORDING_EXTENSION}").exists():
      stamp += 1

    filename = f"{stamp}{RECORDING_EXTENSION}"
    path = recordings_dir() / filename
    with path.open("wb") as destination:
      shutil.copyfileobj(source, destination)

    meta = RecordingMeta(id=str(stamp), filename=filename, size=path.stat().st_size, created_at=_utc_timestamp())

    entries = read_index()
    entries.insert(0, meta.model_dump(by_alias=True))
    write_index(entries)

  logger.info(f"Saved recording {filename} ({meta.size} bytes)")
  return meta

def list_recordings() -> List[dict]:
  return read_index()
