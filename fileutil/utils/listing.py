import os
from enum import Enum
from typing import Any, Callable, Dict, Union

from fileutil.utils.entry import FileInfo


class SortKey(str, Enum):
    NAME = 'name'
    SIZE = 'size'
    MOD_TIME = 'mod_time'


_SORT_KEYS: Dict[SortKey, Callable[[FileInfo], Any]] = {
    SortKey.NAME: lambda entry: os.fsencode(entry.name),
    SortKey.SIZE: lambda entry: entry.size,
    SortKey.MOD_TIME: lambda entry: entry.mtime_ns,
}


class FilesInfo(list):
    """List of file records sortable in place.

    Equal keys keep no particular relative order.
    """

    def sort_by(self, key: Union[SortKey, str], reverse: bool = False) -> None:
        """Sort in place.

        Parameters
        ----------
        key : Union[SortKey, str]
            Sort key: 'name', 'size' or 'mod_time'.
        reverse : bool, default=False
            Decreasing order. The result is the ascending order reversed.
        """
        self.sort(key=_SORT_KEYS[SortKey(key)])
        if reverse:
            self.reverse()

    def sort_by_name(self) -> None:
        self.sort_by(SortKey.NAME)

    def sort_by_size(self) -> None:
        self.sort_by(SortKey.SIZE)

    def sort_by_mod_time(self) -> None:
        self.sort_by(SortKey.MOD_TIME)

    def sort_by_name_reverse(self) -> None:
        self.sort_by(SortKey.NAME, reverse=True)

    def sort_by_size_reverse(self) -> None:
        self.sort_by(SortKey.SIZE, reverse=True)

    def sort_by_mod_time_reverse(self) -> None:
        self.sort_by(SortKey.MOD_TIME, reverse=True)
