# api/models.py
from typing import Optional

from pydantic import BaseModel


class GenerateSignalRequest(BaseModel):
    # None (o ausente) → DEFAULT_ASSET
    asset: Optional[str] = None
