#!/usr/bin/env python3
"""Filesystem seam used by validators, config persistence and project discovery"""

import asyncio
import os
import shutil
from pathlib import Path
from typing import List, Protocol


class FileSystemExecutor(Protocol):
    def exists(self, path: str) -> bool: ...

    async def is_dir(self, path: str) -> bool: ...

    async def read_file(self, path: str) -> str: ...

    async def write_file(self, path: str, content: str) -> None: ...

    async def mkdir(self, path: str, parents: bool = True) -> None: ...

    async def copy(self, src: str, dst: str) -> None: ...

    async def readdir(self, path: str) -> List[str]: ...


class DefaultFileSystemExecutor:
    """Direct delegation to the real filesystem."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    async def is_dir(self, path: str) -> bool:
        return await asyncio.to_thread(os.path.isdir, path)

    async def read_file(self, path: str) -> str:
        return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")

    async def write_file(self, path: str, content: str) -> None:
        await asyncio.to_thread(Path(path).write_text, content, encoding="utf-8")

    async def mkdir(self, path: str, parents: bool = True) -> None:
        await asyncio.to_thread(Path(path).mkdir, parents=parents, exist_ok=True)

    async def copy(self, src: str, dst: str) -> None:
        if os.path.isdir(src):
            await asyncio.to_thread(shutil.copytree, src, dst, dirs_exist_ok=True)
        else:
            await asyncio.to_thread(shutil.copy2, src, dst)

    async def readdir(self, path: str) -> List[str]:
        return sorted(await asyncio.to_thread(os.listdir, path))


_default_fs = DefaultFileSystemExecutor()


def get_default_file_system_executor() -> FileSystemExecutor:
    return _default_fs
