from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from core.settings import settings
from helpers.utils.recordings_store import ensure_recordings_dir
from .signaling.signaling_route import router as signaling_router
from .recordings.recordings_route import router as recordings_router

app = FastAPI()

app.add_middleware(
  CORSMiddleware,
  allow_origins=settings.CORS_ORIGINS,
  allow_methods=["GET", "POST"],
  allow_headers=["*"],  # Allow all headers
)

@app.on_event("startup")
async def startup_event():
  ensure_recordings_dir()

@app.get('/')
async def get_homepage():
  return "signaling server running"

app.include_router(signaling_router, tags=["signaling"])
app.include_router(recordings_router, prefix="/api", tags=["recordings"])

app.mount("/recordings", StaticFiles(directory=settings.RECORDINGS_DIR, check_dir=False), name="recordings")
