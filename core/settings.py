from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
  HOST: str = "0.0.0.0"
  PORT: int = 8080
  ADMIN_TOKEN: str = "supersecrettoken123"
  RECORDINGS_DIR: str = "recordings"
  CORS_ORIGINS: List[str] = ["*"]
  DEFAULT_ROOM: str = "default"
  LOG_LEVEL: str = "INFO"

  class Config:
    env_file = ".env"
    extra = "ignore"

settings = Settings()
