"""Base classes shared by the analysis collaborators."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Coroutine, Generic, Optional, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")
T = TypeVar("T")


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run ``coro`` to completion from synchronous code.

    Code already running inside an event loop must ``await`` the coroutine
    instead; :func:`asyncio.run` refuses to nest loops.
    """

    return asyncio.run(coro)


class Agent(ABC, Generic[InputT, OutputT]):
    """A named analysis step with its own logger."""

    def __init__(self, name: str, logger: Optional[logging.Logger] = None) -> None:
        self._name = name
        self._logger = logger or logging.getLogger(name)

    @property
    def name(self) -> str:
        """Return the human readable name for the agent."""

        return self._name

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @abstractmethod
    def run(self, data: InputT) -> OutputT:
        """Execute the agent with ``data`` and return its output."""

        raise NotImplementedError


class AsyncAgent(Agent[InputT, OutputT]):
    """Agent whose work is I/O bound and implemented as a coroutine."""

    @abstractmethod
    async def arun(self, data: InputT) -> OutputT:
        raise NotImplementedError

    def run(self, data: InputT) -> OutputT:
        return run_async(self.arun(data))


__all__ = ["Agent", "AsyncAgent", "run_async"]
