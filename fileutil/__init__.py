from fileutil.asyncio.local import AsyncLocalConnector
from fileutil.local import NEW_FILE_PERM, LocalConnector
from fileutil.utils.copy import CopyOutcome, copy_file
from fileutil.utils.entry import EPOCH, FileInfo
from fileutil.utils.errors import FileUtilError, NotRegularFileError, ShortWriteError, SyncError
from fileutil.utils.listing import FilesInfo, SortKey
from fileutil.utils.path import basename, dirname, extname
