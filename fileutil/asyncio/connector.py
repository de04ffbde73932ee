import datetime
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from fileutil.utils.copy import CopyOutcome
from fileutil.utils.entry import FileInfo
from fileutil.utils.listing import FilesInfo


class AsyncConnector(ABC):
    """Abstract class for async file utility connector."""

    encoding = 'utf-8'

    @asynccontextmanager
    async def connect(self) -> AsyncGenerator['AsyncConnector', None]:
        """Connects to file system.

        Yields
        -------
        AsyncConnector
            Class instance
        """
        yield self

    @abstractmethod
    async def get_file_info(self, path: str) -> FileInfo:
        pass

    @abstractmethod
    async def exists(self, path: str, strict: bool = False) -> bool:
        pass

    @abstractmethod
    async def size(self, path: str) -> int:
        pass

    @abstractmethod
    async def mod_time(self, path: str) -> datetime.datetime:
        pass

    @abstractmethod
    async def mod_time_unix(self, path: str) -> int:
        pass

    @abstractmethod
    async def mod_time_unix_nano(self, path: str) -> int:
        pass

    @abstractmethod
    async def mode(self, path: str) -> int:
        pass

    @abstractmethod
    async def perm(self, path: str) -> int:
        pass

    @abstractmethod
    async def read(self, path: str) -> bytes:
        pass

    @abstractmethod
    async def write(self, path: str, data: bytes, perm: Optional[int] = None) -> None:
        pass

    @abstractmethod
    async def append(self, path: str, data: bytes, perm: Optional[int] = None) -> None:
        pass

    @abstractmethod
    async def temp_file(self) -> Any:
        pass

    @abstractmethod
    async def temp_name(self) -> str:
        pass

    @abstractmethod
    async def copy(self, src_path: str, dst_path: str) -> CopyOutcome:
        pass

    @abstractmethod
    async def find(self, pattern: str) -> FilesInfo:
        pass

    async def read_string(self, path: str) -> str:
        return (await self.read(path)).decode(self.encoding)

    async def write_string(self, path: str, content: str, perm: Optional[int] = None) -> None:
        await self.write(path, content.encode(self.encoding), perm)

    async def append_string(self, path: str, content: str, perm: Optional[int] = None) -> None:
        await self.append(path, content.encode(self.encoding), perm)

    async def get_contents(self, path: str) -> str:
        return await self.read_string(path)

    async def put_contents(self, path: str, content: str, perm: Optional[int] = None) -> None:
        await self.write_string(path, content, perm)

    async def append_contents(self, path: str, content: str, perm: Optional[int] = None) -> None:
        await self.append_string(path, content, perm)
