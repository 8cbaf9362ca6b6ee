#!/usr/bin/env python3
"""
Registry of long-running child processes (e.g. `swift run` in the background).

Processes are keyed by an opaque token rather than the PID, so a stale
handle can never point at an unrelated process that reused the PID.
"""

import asyncio
import datetime
import logging
import os
import uuid
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from xcodebuild_mcp.exceptions import ProcessRegistryError

logger = logging.getLogger(__name__)

DEFAULT_GRACE_PERIOD = 5.0

Spawner = Callable[..., Awaitable[Any]]


@dataclass
class TrackedProcess:
    token: str
    process: Any
    label: str
    started_at: datetime.datetime = field(default_factory=datetime.datetime.now)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def pid(self) -> Optional[int]:
        return getattr(self.process, "pid", None)

    @property
    def is_running(self) -> bool:
        return self.process.returncode is None


class ProcessRegistry:
    def __init__(self, spawner: Spawner = asyncio.create_subprocess_exec):
        self._processes: Dict[str, TrackedProcess] = {}
        self._spawner = spawner

    async def spawn(self, command: List[str], label: str, cwd: Optional[str] = None,
                    env: Optional[Dict[str, str]] = None, **metadata) -> TrackedProcess:
        """
        Start a detached child process and track it.

        Raises:
            ProcessRegistryError: if the executable could not be started
        """
        if not command:
            raise ProcessRegistryError("Command must contain at least the executable")
        try:
            process = await self._spawner(
                *command,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
                cwd=cwd,
                env={**os.environ, **env} if env else None,
            )
        except OSError as e:
            raise ProcessRegistryError(f"Failed to start {command[0]}: {e}")
        return self.get(self.register(process, label, **metadata))

    def register(self, process: Any, label: str, **metadata) -> str:
        token = uuid.uuid4().hex
        self._processes[token] = TrackedProcess(token=token, process=process, label=label, metadata=metadata)
        logger.info("Tracking %s (pid %s) as %s", label, getattr(process, "pid", None), token)
        return token

    def get(self, token: str) -> Optional[TrackedProcess]:
        return self._processes.get(token)

    def list(self) -> List[TrackedProcess]:
        return sorted(self._processes.values(), key=lambda tracked: tracked.started_at)

    def release(self, token: str) -> Optional[TrackedProcess]:
        return self._processes.pop(token, None)

    async def terminate(self, token: str, grace_period: float = DEFAULT_GRACE_PERIOD) -> Optional[TrackedProcess]:
        """
        Stop a tracked process: SIGTERM first, SIGKILL once the grace period runs out.

        Returns:
            The released TrackedProcess, or None for an unknown token
        """
        tracked = self.release(token)
        if tracked is None:
            return None

        process = tracked.process
        if process.returncode is not None:
            return tracked

        try:
            process.terminate()
        except ProcessLookupError:
            return tracked

        try:
            await asyncio.wait_for(process.wait(), timeout=grace_period)
        except asyncio.TimeoutError:
            logger.warning("%s did not exit within %ss, killing it", tracked.label, grace_period)
            try:
                process.kill()
            except ProcessLookupError:
                return tracked
            await process.wait()
        return tracked

    async def force_terminate_all(self, grace_period: float = DEFAULT_GRACE_PERIOD) -> int:
        """Stop every tracked process, used at shutdown. Returns how many were tracked."""
        tokens = list(self._processes)
        for token in tokens:
            await self.terminate(token, grace_period)
        return len(tokens)


_default_registry = ProcessRegistry()


def get_process_registry() -> ProcessRegistry:
    return _default_registry
