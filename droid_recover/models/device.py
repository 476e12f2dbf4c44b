"""Device models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, computed_field


class AuthorizationState(str, Enum):
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"
    OTHER = "other"


class Device(BaseModel):
    id: str
    name: str = "Unknown Device"
    state: AuthorizationState = AuthorizationState.OTHER
    raw_state: str = ""  # adb's own token, e.g. "offline", "recovery"
    connected_at: datetime = Field(default_factory=datetime.now)

    @computed_field
    @property
    def status_text(self) -> str:
        if self.state == AuthorizationState.AUTHORIZED:
            return "Authorized"
        if self.state == AuthorizationState.UNAUTHORIZED:
            return "Unauthorized - Tap Allow on Phone"
        return self.raw_state

    @property
    def is_authorized(self) -> bool:
        return self.state == AuthorizationState.AUTHORIZED
