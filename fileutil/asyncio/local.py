import asyncio
import datetime
import functools
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Optional, Union

import aiofiles
import aiofiles.os
import aiofiles.tempfile
import yaml

from fileutil.asyncio.connector import AsyncConnector
from fileutil.local import NEW_FILE_PERM, NOT_FOUND_ERRORS, LocalConnector
from fileutil.utils.copy import DEFAULT_CHUNK_SIZE, CopyOutcome
from fileutil.utils.entry import EPOCH, FileInfo
from fileutil.utils.errors import ShortWriteError
from fileutil.utils.listing import FilesInfo


class AsyncLocalConnector(AsyncConnector):
    """Async local file system connector.

    Takes the same settings as ``LocalConnector``. Copy and find run the
    blocking implementation in the default executor.
    """

    def __init__(
        self,
        new_file_perm: Union[int, str] = NEW_FILE_PERM,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        hardlink: bool = True,
        encoding: str = 'utf-8'
    ):
        self._local = LocalConnector(new_file_perm, chunk_size, hardlink, encoding)
        self.new_file_perm = self._local.new_file_perm
        self.chunk_size = chunk_size
        self.hardlink = hardlink
        self.encoding = encoding

    @classmethod
    def from_yaml(cls, path: str) -> 'AsyncLocalConnector':
        """Creates class instance from configuration path.

        Parameters
        ----------
        path : str
            path to configuration file.

        Returns
        -------
        AsyncLocalConnector
            Class instance.
        """
        with open(path) as f:
            config = yaml.safe_load(f) or {}
        return cls(**config)

    @asynccontextmanager
    async def connect(self) -> AsyncGenerator['AsyncLocalConnector', None]:
        yield self

    async def get_file_info(self, path: str) -> FileInfo:
        return FileInfo.from_stat(path, await aiofiles.os.stat(path))

    async def exists(self, path: str, strict: bool = False) -> bool:
        try:
            await aiofiles.os.stat(path)
        except NOT_FOUND_ERRORS:
            return False
        except OSError:
            if strict:
                raise
        return True

    async def size(self, path: str) -> int:
        return await self._stat_or(path, lambda info: info.size, -1)

    async def mod_time(self, path: str) -> datetime.datetime:
        return await self._stat_or(path, lambda info: info.last_modified, EPOCH)

    async def mod_time_unix(self, path: str) -> int:
        return await self._stat_or(path, lambda info: info.mtime_ns // 1_000_000_000, -1)

    async def mod_time_unix_nano(self, path: str) -> int:
        return await self._stat_or(path, lambda info: info.mtime_ns, -1)

    async def mode(self, path: str) -> int:
        return await self._stat_or(path, lambda info: info.mode, 0)

    async def perm(self, path: str) -> int:
        return await self._stat_or(path, lambda info: info.perm, 0)

    async def read(self, path: str) -> bytes:
        async with aiofiles.open(path, 'rb') as f:
            return await f.read()

    async def write(self, path: str, data: bytes, perm: Optional[int] = None) -> None:
        async with aiofiles.open(path, 'wb', opener=self._opener(perm)) as f:
            await f.write(data)

    async def append(self, path: str, data: bytes, perm: Optional[int] = None) -> None:
        async with aiofiles.open(path, 'ab', buffering=0, opener=self._opener(perm)) as f:
            written = await f.write(data)
        if written is None or written < len(data):
            raise ShortWriteError(path, written or 0, len(data))

    async def temp_file(self) -> Any:
        return await aiofiles.tempfile.NamedTemporaryFile('w+b', delete=False)

    async def temp_name(self) -> str:
        return await self._run(self._local.temp_name)

    async def copy(
        self,
        src_path: str,
        dst_path: str,
        callback: Optional[Callable[[int], Any]] = None
    ) -> CopyOutcome:
        return await self._run(self._local.copy, src_path, dst_path, callback)

    async def find(self, pattern: str) -> FilesInfo:
        return await self._run(self._local.find, pattern)

    def _opener(self, perm: Optional[int]) -> Callable[[str, int], int]:
        mode = self.new_file_perm if perm is None else perm

        def opener(path: str, flags: int) -> int:
            return os.open(path, flags, mode)
        return opener

    @staticmethod
    async def _run(func: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(func, *args))

    @staticmethod
    async def _stat_or(path: str, getter: Callable[[FileInfo], Any], default: Any) -> Any:
        try:
            info = FileInfo.from_stat(path, await aiofiles.os.stat(path))
        except OSError:
            return default
        return getter(info)
