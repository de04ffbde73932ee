import datetime
import os
import stat
from dataclasses import dataclass
from typing import Literal

EPOCH = datetime.datetime.fromtimestamp(0, tz=datetime.timezone.utc)


@dataclass(frozen=True)
class FileInfo:
    name: str
    path: str
    type: Literal['file', 'dir', 'other']
    size: int
    last_modified: datetime.datetime
    mtime_ns: int
    mode: int
    dev: int = 0
    ino: int = 0

    @classmethod
    def from_stat(cls, path: str, st: os.stat_result) -> 'FileInfo':
        """Creates a record from a stat result.

        Parameters
        ----------
        path : str
            Path the stat result belongs to.
        st : os.stat_result
            Result of ``os.stat``.

        Returns
        -------
        FileInfo
            Class instance.
        """
        if stat.S_ISREG(st.st_mode):
            file_type = 'file'
        elif stat.S_ISDIR(st.st_mode):
            file_type = 'dir'
        else:
            file_type = 'other'
        last_modified = EPOCH + datetime.timedelta(microseconds=st.st_mtime_ns // 1000)
        return cls(
            name=os.path.basename(os.path.normpath(path)),
            path=path,
            type=file_type,
            size=st.st_size,
            last_modified=last_modified,
            mtime_ns=st.st_mtime_ns,
            mode=st.st_mode,
            dev=st.st_dev,
            ino=st.st_ino
        )

    @property
    def is_regular(self) -> bool:
        return self.type == 'file'

    @property
    def is_dir(self) -> bool:
        return self.type == 'dir'

    @property
    def perm(self) -> int:
        return stat.S_IMODE(self.mode) & 0o777

    def same_file(self, other: 'FileInfo') -> bool:
        """Whether both records describe the same device and inode."""
        return self.dev == other.dev and self.ino == other.ino
