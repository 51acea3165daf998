from helpers.middleware.authentication import validate_admin_token
from helpers.utils.recordings_store import save_recording, list_recordings
from fastapi.responses import JSONResponse
from fastapi import UploadFile, File, APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from typing import Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/upload")
async def upload_recording(audio: Optional[UploadFile] = File(None), _: bool = Depends(validate_admin_token)):
  if audio is None:
    raise HTTPException(status_code=400, detail="No file")

  await audio.seek(0)
  try:
    meta = await run_in_threadpool(save_recording, audio.file)
  except OSError as e:
    logger.error(f"Error saving recording: {e}")
    raise HTTPException(
      status_code=500,
      detail="Internal Server Error",
    ) from e

  return JSONResponse(status_code=200, content={
    "ok": True,
    "meta": meta.model_dump(by_alias=True)
  })

@router.get("/recordings")
async def get_recordings(_: bool = Depends(validate_admin_token)):
  return await run_in_threadpool(list_recordings)
