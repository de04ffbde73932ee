class FileUtilError(Exception):
    """Base class for fileutil errors."""


class NotRegularFileError(FileUtilError, ValueError):
    """Path exists but is not a regular file."""

    def __init__(self, path: str, message: str = 'not a regular file'):
        self.path = path
        super().__init__(f"{message}: '{path}'")


class ShortWriteError(FileUtilError, OSError):
    """Fewer bytes were written than requested."""

    def __init__(self, path: str, written: int, expected: int):
        self.path = path
        self.written = written
        self.expected = expected
        super().__init__(f"short write to '{path}': {written} of {expected} bytes")


class SyncError(FileUtilError, OSError):
    """Flushing a file to stable storage failed."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"cannot sync '{path}'")
