"""Base use case."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

from listen.domain.error import UnavailableError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass

    async def run(self, request: Any, timeout: float | None = None) -> Any:
        """Execute the use case within an optional caller deadline.

        Args:
            request: Use case request
            timeout: Deadline in seconds, None for no deadline

        Returns:
            Use case response

        Raises:
            UnavailableError: If the deadline passes before completion
        """
        if timeout is None:
            return await self.execute(request)
        try:
            return await asyncio.wait_for(self.execute(request), timeout=timeout)
        except asyncio.TimeoutError:
            raise UnavailableError(f"Request did not complete within {timeout:g}s")
