from fastapi import Header, HTTPException, status
from core.settings import settings
from typing import Optional
import secrets

async def validate_admin_token(x_admin_token: Optional[str] = Header(None)):
  if not x_admin_token or not secrets.compare_digest(x_admin_token.encode(), settings.ADMIN_TOKEN.encode()):
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
  return True
