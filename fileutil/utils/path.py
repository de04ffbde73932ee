"""Path string helpers.

These work on the string alone and never touch the filesystem.
"""
import os


def basename(path: str) -> str:
    """Return the last element of ``path``.

    Trailing separators are removed first. An empty path yields ``'.'`` and a
    path made only of separators yields a single separator.
    """
    if not path:
        return '.'
    stripped = path.rstrip(os.sep)
    if not stripped:
        return os.sep
    return os.path.basename(stripped)


def dirname(path: str) -> str:
    """Return all but the last element of ``path``, or ``'.'`` if there is none."""
    head = os.path.dirname(path)
    if not head:
        return '.'
    return os.path.normpath(head)


def extname(path: str) -> str:
    """Return the extension of the last element, including the dot."""
    return os.path.splitext(basename(path))[1]
