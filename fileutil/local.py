import datetime
import glob
import os
import tempfile
from typing import IO, Any, Callable, Optional, Union

import yaml

from fileutil.connector import Connector
from fileutil.utils.copy import DEFAULT_CHUNK_SIZE, CopyOutcome, copy_file
from fileutil.utils.entry import EPOCH, FileInfo
from fileutil.utils.errors import ShortWriteError
from fileutil.utils.listing import FilesInfo

NEW_FILE_PERM = 0o644

NOT_FOUND_ERRORS = (FileNotFoundError, NotADirectoryError)


def parse_perm(value: Union[int, str]) -> int:
    """Permission bits from an int or an octal string such as '0644'."""
    if isinstance(value, str):
        return int(value, 8)
    return int(value)


class LocalConnector(Connector):
    """Local file system connector.

    Attributes
    ----------
    new_file_perm : int, default=0o644
        Permission bits of files created by write and append.
    chunk_size : int, default=1024 * 1024
        Read size when a copy streams bytes.
    hardlink : bool, default=True
        Try a hardlink before streaming on copy.
    encoding : str, default='utf-8'
        Encoding of the string helpers.
    """

    def __init__(
        self,
        new_file_perm: Union[int, str] = NEW_FILE_PERM,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        hardlink: bool = True,
        encoding: str = 'utf-8'
    ):
        self.new_file_perm = parse_perm(new_file_perm)
        assert chunk_size > 0, f"invalid chunk size: {chunk_size}"
        self.chunk_size = chunk_size
        self.hardlink = hardlink
        self.encoding = encoding

    @classmethod
    def from_yaml(cls, path: str) -> 'LocalConnector':
        """Creates class instance from configuration path.

        Parameters
        ----------
        path : str
            path to configuration file.

        Returns
        -------
        LocalConnector
            Class instance.
        """
        with open(path) as f:
            config = yaml.safe_load(f) or {}
        return cls(**config)

    def get_file_info(self, path: str) -> FileInfo:
        return FileInfo.from_stat(path, os.stat(path))

    def exists(self, path: str, strict: bool = False) -> bool:
        try:
            os.stat(path)
        except NOT_FOUND_ERRORS:
            return False
        except OSError:
            if strict:
                raise
        return True

    def size(self, path: str) -> int:
        return self._stat_or(path, lambda info: info.size, -1)

    def mod_time(self, path: str) -> datetime.datetime:
        return self._stat_or(path, lambda info: info.last_modified, EPOCH)

    def mod_time_unix(self, path: str) -> int:
        return self._stat_or(path, lambda info: info.mtime_ns // 1_000_000_000, -1)

    def mod_time_unix_nano(self, path: str) -> int:
        return self._stat_or(path, lambda info: info.mtime_ns, -1)

    def mode(self, path: str) -> int:
        return self._stat_or(path, lambda info: info.mode, 0)

    def perm(self, path: str) -> int:
        return self._stat_or(path, lambda info: info.perm, 0)

    def read(self, path: str) -> bytes:
        with open(path, 'rb') as f:
            return f.read()

    def write(self, path: str, data: bytes, perm: Optional[int] = None) -> None:
        with self._open_for_write(path, os.O_TRUNC, perm) as f:
            f.write(data)

    def append(self, path: str, data: bytes, perm: Optional[int] = None) -> None:
        with self._open_for_write(path, os.O_APPEND, perm, buffering=0) as f:
            written = f.write(data)
        if written is None or written < len(data):
            raise ShortWriteError(path, written or 0, len(data))

    def temp_file(self) -> IO[bytes]:
        return tempfile.NamedTemporaryFile(delete=False)

    def temp_name(self) -> str:
        fd, name = tempfile.mkstemp()
        os.close(fd)
        return name

    def copy(
        self,
        src_path: str,
        dst_path: str,
        callback: Optional[Callable[[int], Any]] = None
    ) -> CopyOutcome:
        return copy_file(src_path, dst_path, self.chunk_size, link=self.hardlink, callback=callback)

    def find(self, pattern: str) -> FilesInfo:
        result = FilesInfo()
        for path in sorted(glob.glob(pattern, include_hidden=True)):
            try:
                result.append(self.get_file_info(path))
            except OSError:
                continue
        return result

    def _open_for_write(self, path: str, flag: int, perm: Optional[int], buffering: int = -1) -> IO[bytes]:
        mode = self.new_file_perm if perm is None else perm
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | flag, mode)
        return open(fd, 'wb', buffering=buffering)

    @staticmethod
    def _stat_or(path: str, getter: Callable[[FileInfo], Any], default: Any) -> Any:
        try:
            info = FileInfo.from_stat(path, os.stat(path))
        except OSError:
            return default
        return getter(info)
