"""Abstract base scanner interface."""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import AsyncIterator, Awaitable, Callable, Optional

from ..models.scan import ScanConfig
from ..utils.adb import AdbClient


@dataclass
class ScanContext:
    """Everything a stage needs, threaded through every call."""

    client: AdbClient
    config: ScanConfig
    cancel: asyncio.Event = field(default_factory=asyncio.Event)
    has_root: bool = False
    progress_callback: Optional[Callable[[str], None]] = None
    on_checkpoint: Optional[Callable[[], Awaitable[None]]] = None

    @property
    def device_id(self) -> str:
        return self.config.device_id

    @property
    def storage_root(self) -> str:
        return self.config.storage_root

    @property
    def cancelled(self) -> bool:
        return self.cancel.is_set()

    def report(self, message: str) -> None:
        if self.progress_callback:
            self.progress_callback(message)

    async def checkpoint(self) -> None:
        """Let the owner push queued progress out between device commands."""
        if self.on_checkpoint:
            await self.on_checkpoint()


class BaseScanner(ABC):
    """Each discovery stage implements this interface."""

    source_id: str = ""
    name: str = ""
    description: str = ""

    @property
    def requires_root(self) -> bool:
        return False

    def should_run(self, ctx: ScanContext) -> bool:
        return ctx.has_root or not self.requires_root

    @abstractmethod
    async def scan(self, ctx: ScanContext) -> AsyncIterator[str]:
        """Yield candidate device paths."""
        ...
