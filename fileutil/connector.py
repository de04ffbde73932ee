import datetime
from abc import ABC, abstractmethod
from typing import IO, Optional

from fileutil.utils.copy import CopyOutcome
from fileutil.utils.entry import FileInfo
from fileutil.utils.listing import FilesInfo


class Connector(ABC):
    """Abstract class for file utility connector."""

    encoding = 'utf-8'

    @abstractmethod
    def get_file_info(self, path: str) -> FileInfo:
        """Get file metadata.

        Parameters
        ----------
        path : str
            File path.

        Returns
        -------
        FileInfo
            File metadata.
        """
        pass

    @abstractmethod
    def exists(self, path: str, strict: bool = False) -> bool:
        """Check whether path exists.

        Parameters
        ----------
        path : str
            File path.
        strict : bool, default=False
            Raise lookup errors other than not-found instead of reporting True.

        Returns
        -------
        bool
            False if nothing exists at path.
        """
        pass

    @abstractmethod
    def size(self, path: str) -> int:
        """File size in bytes, -1 if it cannot be determined."""
        pass

    @abstractmethod
    def mod_time(self, path: str) -> datetime.datetime:
        """Last modification time, the Unix epoch if it cannot be determined."""
        pass

    @abstractmethod
    def mod_time_unix(self, path: str) -> int:
        """Last modification Unix timestamp in seconds, -1 on failure."""
        pass

    @abstractmethod
    def mod_time_unix_nano(self, path: str) -> int:
        """Last modification Unix timestamp in nanoseconds, -1 on failure."""
        pass

    @abstractmethod
    def mode(self, path: str) -> int:
        """File mode bits, 0 on failure."""
        pass

    @abstractmethod
    def perm(self, path: str) -> int:
        """Permission bits, 0 on failure."""
        pass

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Read file contents.

        Parameters
        ----------
        path : str
            File path.

        Returns
        -------
        bytes
            File contents.
        """
        pass

    @abstractmethod
    def write(self, path: str, data: bytes, perm: Optional[int] = None) -> None:
        """Write file contents, replacing existing ones.

        Parameters
        ----------
        path : str
            File path.
        data : bytes
            Contents.
        perm : Optional[int], default=None
            Permission bits for a new file.
        """
        pass

    @abstractmethod
    def append(self, path: str, data: bytes, perm: Optional[int] = None) -> None:
        """Append to a file, creating it if needed.

        Parameters
        ----------
        path : str
            File path.
        data : bytes
            Contents.
        perm : Optional[int], default=None
            Permission bits for a new file.
        """
        pass

    @abstractmethod
    def temp_file(self) -> IO[bytes]:
        """Create a temporary file and return it opened for reading and writing."""
        pass

    @abstractmethod
    def temp_name(self) -> str:
        """Create a temporary file and return its path."""
        pass

    @abstractmethod
    def copy(self, src_path: str, dst_path: str) -> CopyOutcome:
        """Copy a regular file.

        Parameters
        ----------
        src_path : str
            Source path.
        dst_path : str
            Destination path.

        Returns
        -------
        CopyOutcome
            Way the copy was made.
        """
        pass

    @abstractmethod
    def find(self, pattern: str) -> FilesInfo:
        """Find files matching a glob pattern.

        Parameters
        ----------
        pattern : str
            Glob pattern.

        Returns
        -------
        FilesInfo
            Metadata of matching files.
        """
        pass

    def read_string(self, path: str) -> str:
        return self.read(path).decode(self.encoding)

    def write_string(self, path: str, content: str, perm: Optional[int] = None) -> None:
        self.write(path, content.encode(self.encoding), perm)

    def append_string(self, path: str, content: str, perm: Optional[int] = None) -> None:
        self.append(path, content.encode(self.encoding), perm)

    def get_contents(self, path: str) -> str:
        """Same as ``read_string``."""
        return self.read_string(path)

    def put_contents(self, path: str, content: str, perm: Optional[int] = None) -> None:
        """Same as ``write_string``."""
        self.write_string(path, content, perm)

    def append_contents(self, path: str, content: str, perm: Optional[int] = None) -> None:
        """Same as ``append_string``."""
        self.append_string(path, content, perm)
