"""
Narrow async filesystem interface used by the credentials file merger.

``LocalFileSystem`` is the real implementation; tests substitute their own
object with the same four coroutines.
"""

import os
from typing import Protocol, Union

import aiofiles
import aiofiles.os
import aiofiles.ospath

PathLike = Union[str, "os.PathLike[str]"]


class FileSystem(Protocol):
    """Async filesystem operations needed to read-modify-write one file."""

    async def exists(self, path: PathLike) -> bool:
        ...

    async def makedirs(self, path: PathLike) -> None:
        ...

    async def read_text(self, path: PathLike) -> str:
        ...

    async def write_text(self, path: PathLike, text: str) -> None:
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk through aiofiles."""

    def __init__(self, file_mode: int = 0o600):
        self.file_mode = file_mode

    async def exists(self, path: PathLike) -> bool:
        return await aiofiles.ospath.exists(path)

    async def makedirs(self, path: PathLike) -> None:
        await aiofiles.os.makedirs(path, exist_ok=True)

    async def read_text(self, path: PathLike) -> str:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            return await f.read()

    def _opener(self, path: str, flags: int) -> int:
        return os.open(path, flags, self.file_mode)

    async def write_text(self, path: PathLike, text: str) -> None:
        """Write ``text`` to a sibling temp file, then replace the target with it."""
        tmp_path = f"{os.fspath(path)}.{os.getpid()}.tmp"
        if await aiofiles.ospath.exists(tmp_path):
            await aiofiles.os.remove(tmp_path)
        try:
            # Created with the final mode before any secret is written
            async with aiofiles.open(tmp_path, "w", encoding="utf-8", opener=self._opener) as f:
                await f.write(text)
            await aiofiles.os.replace(tmp_path, path)
        finally:
            if await aiofiles.ospath.exists(tmp_path):
                await aiofiles.os.remove(tmp_path)
