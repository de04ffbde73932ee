import logging
import os
import stat
from enum import Enum
from typing import IO, Any, Callable, Optional

from fileutil.utils.errors import NotRegularFileError, ShortWriteError, SyncError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024


class CopyOutcome(Enum):
    SAME_FILE = 'same_file'
    LINKED = 'linked'
    STREAMED = 'streamed'


def stream(
    reader: IO[bytes],
    writer: IO[bytes],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    callback: Optional[Callable[[int], Any]] = None
) -> int:
    """Copy everything from reader to writer.

    Parameters
    ----------
    reader : IO[bytes]
        Readable binary file.
    writer : IO[bytes]
        Writable binary file.
    chunk_size : int, default=1024 * 1024
        Bytes read per iteration.
    callback : Optional[Callable[[int], Any]], default=None
        Called with the size of every written chunk.

    Returns
    -------
    int
        Bytes copied.

    Raises
    ------
    ValueError
        chunk_size is not positive.
    ShortWriteError
        Writer accepted fewer bytes than were read.
    """
    if chunk_size <= 0:
        raise ValueError(f"invalid chunk size: {chunk_size}")
    total = 0
    chunk = reader.read(chunk_size)
    while chunk:
        written = writer.write(chunk)
        if written is None or written < len(chunk):
            raise ShortWriteError(getattr(writer, 'name', '<stream>'), total + (written or 0), total + len(chunk))
        total += written
        if callback is not None:
            callback(written)
        chunk = reader.read(chunk_size)
    return total


def copy_file(
    source: str,
    destination: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    link: bool = True,
    callback: Optional[Callable[[int], Any]] = None
) -> CopyOutcome:
    """Copy a regular file.

    Tries a hardlink first and falls back to streaming the bytes followed by
    an fsync of the destination.

    Parameters
    ----------
    source : str
        Source path.
    destination : str
        Destination path.
    chunk_size : int, default=1024 * 1024
        Bytes per read when streaming.
    link : bool, default=True
        Try a hardlink before streaming.
    callback : Optional[Callable[[int], Any]], default=None
        Progress callback, see ``stream``.

    Returns
    -------
    CopyOutcome
        Branch that completed the copy.
    """
    if chunk_size <= 0:
        raise ValueError(f"invalid chunk size: {chunk_size}")
    src_stat = os.stat(source)
    if not stat.S_ISREG(src_stat.st_mode):
        raise NotRegularFileError(source, 'cannot copy non-regular file')

    try:
        dst_stat = os.stat(destination)
    except FileNotFoundError:
        pass
    else:
        if not stat.S_ISREG(dst_stat.st_mode):
            raise NotRegularFileError(destination, 'cannot copy to non-regular file')
        if os.path.samestat(src_stat, dst_stat):
            logger.debug("'%s' and '%s' are the same file", source, destination)
            return CopyOutcome.SAME_FILE

    if link:
        try:
            os.link(source, destination)
        except OSError as err:
            logger.debug("cannot hardlink '%s' to '%s': %s", source, destination, err)
        else:
            logger.debug("hardlinked '%s' to '%s'", source, destination)
            return CopyOutcome.LINKED

    with open(source, 'rb') as src_file, open(destination, 'wb', buffering=0) as dst_file:
        size = stream(src_file, dst_file, chunk_size, callback)
        try:
            os.fsync(dst_file.fileno())
        except OSError as err:
            raise SyncError(destination) from err
    logger.debug("streamed %d bytes from '%s' to '%s'", size, source, destination)
    return CopyOutcome.STREAMED
