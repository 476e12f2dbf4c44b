"""System information models."""

from typing import Optional
from pydantic import BaseModel


class AdbInfo(BaseModel):
    path: str
    available: bool = False
    version: Optional[str] = None
    detail: str = ""
