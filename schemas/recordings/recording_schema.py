from pydantic import BaseModel, ConfigDict, Field

class RecordingMeta(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  id: str
  filename: str
  size: int
  created_at: str = Field(alias="createdAt")  # ISO-8601 UTC, e.g. 2024-01-01T00:00:00.000Z
