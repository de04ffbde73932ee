import argparse
import asyncio
import logging
import os.path
import stat
import sys
from typing import List, Optional

import asyncio_pool
from tqdm.auto import tqdm

from fileutil.asyncio.local import AsyncLocalConnector
from fileutil.utils.listing import SortKey

logger = logging.getLogger(__name__)


class CLI:
    """Command line front end over an async local connector.

    Attributes
    ----------
    connector : AsyncLocalConnector
        Async local connector.
    """

    def __init__(self, connector: AsyncLocalConnector):
        self.connector = connector

    async def exists(self, path: str) -> int:
        found = await self.connector.exists(path)
        print('true' if found else 'false')
        return 0 if found else 1

    async def size(self, path: str) -> int:
        size = await self.connector.size(path)
        print(size)
        return 0 if size >= 0 else 1

    async def stat(self, path: str) -> int:
        try:
            info = await self.connector.get_file_info(path)
        except OSError as err:
            print(err, file=sys.stderr)
            return 1
        print(f'name: {info.name}')
        print(f'type: {info.type}')
        print(f'size: {info.size}')
        print(f'modified: {info.last_modified.isoformat()}')
        print(f'perm: {stat.filemode(info.mode)} ({info.perm:04o})')
        return 0

    async def copy(self, sources: List[str], destination: str, num_workers: int = 16) -> List[str]:
        """Copy files.

        Parameters
        ----------
        sources : List[str]
            Source file paths.
        destination : str
            Destination path, a directory when several sources are given.
        num_workers : int, default=16
            Max workers.

        Returns
        -------
        List[str]
            Error files.
        """
        pairs = self._destinations(sources, destination)
        files_pbar = tqdm(total=len(pairs), desc='Files')
        sizes = [await self.connector.size(src) for src, _ in pairs]
        bytes_pbar = tqdm(total=sum(max(size, 0) for size in sizes),
                          desc='Bytes', unit='B', unit_scale=True)
        futures = []
        async with self.connector.connect() as connector:
            async with asyncio_pool.AioPool(size=num_workers) as pool:
                for (src, dst), size in zip(pairs, sizes):
                    futures.append(await pool.spawn(
                        self._copy_file(connector, src, dst, size, files_pbar, bytes_pbar)
                    ))
        files_pbar.close()
        bytes_pbar.close()
        return [src for (src, _), future in zip(pairs, futures) if not future.result()]

    async def find(self, pattern: str, sort: Optional[str] = None, reverse: bool = False) -> int:
        files = await self.connector.find(pattern)
        if sort is not None:
            files.sort_by(sort, reverse=reverse)
        for info in files:
            print(f'{info.size:>12} {info.last_modified.isoformat()} {info.path}')
        return 0

    @staticmethod
    async def _copy_file(
        connector: AsyncLocalConnector,
        source_path: str,
        destination_path: str,
        file_size: int,
        files_pbar: tqdm,
        bytes_pbar: tqdm
    ) -> bool:
        streamed = 0

        def progress(written: int) -> None:
            nonlocal streamed
            streamed += written
            bytes_pbar.update(written)

        try:
            outcome = await connector.copy(source_path, destination_path, callback=progress)
        except OSError as err:
            logger.error("cannot copy '%s' to '%s': %s", source_path, destination_path, err)
            status = False
        except ValueError as err:
            logger.error('%s', err)
            status = False
        else:
            logger.info("copied '%s' to '%s' (%s)", source_path, destination_path, outcome.value)
            status = True
        files_pbar.update(1)
        bytes_pbar.update(max(file_size - streamed, 0))
        return status

    @staticmethod
    def _destinations(sources: List[str], destination: str) -> List[tuple]:
        if len(sources) > 1 or os.path.isdir(destination):
            if not os.path.isdir(destination):
                raise ValueError(f"'{destination}' is not a directory")
            return [(src, os.path.join(destination, os.path.basename(src))) for src in sources]
        return [(sources[0], destination)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fileutil',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='to see action help message:\n  fileutil copy -h\n  fileutil find -h'
    )
    parser.add_argument('--config_path', type=str, default=None, help='path to configuration file')
    parser.add_argument('--verbose', action='store_true', help='debug logging')
    subparsers = parser.add_subparsers(dest='action')
    subparsers.required = True
    for action, help_msg in [('exists', 'check path exists'), ('size', 'print file size'),
                             ('stat', 'print file metadata')]:
        subparser = subparsers.add_parser(action, help=help_msg)
        subparser.add_argument('path', type=str, help='file path')
    copy_parser = subparsers.add_parser('copy', help='copy files')
    copy_parser.add_argument('sources', nargs='+', type=str, help='source files')
    copy_parser.add_argument('destination', type=str, help='destination file or directory')
    copy_parser.add_argument('--workers', type=int, default=16, help='max workers')
    copy_parser.add_argument('--no-link', action='store_false', dest='hardlink', help='never hardlink')
    find_parser = subparsers.add_parser('find', help='find files by glob pattern')
    find_parser.add_argument('pattern', type=str, help='glob pattern')
    find_parser.add_argument('--sort', choices=[key.value for key in SortKey], default=None, help='sort key')
    find_parser.add_argument('--reverse', action='store_true', help='decreasing order')
    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    if args.config_path is not None:
        connector = AsyncLocalConnector.from_yaml(args.config_path)
    else:
        connector = AsyncLocalConnector()
    if args.action == 'copy' and not args.hardlink:
        connector = AsyncLocalConnector(connector.new_file_perm, connector.chunk_size, False, connector.encoding)

    cli = CLI(connector)
    if args.action == 'exists':
        return await cli.exists(args.path)
    elif args.action == 'size':
        return await cli.size(args.path)
    elif args.action == 'stat':
        return await cli.stat(args.path)
    elif args.action == 'copy':
        try:
            error_files = await cli.copy(args.sources, args.destination, num_workers=args.workers)
        except ValueError as err:
            print(err, file=sys.stderr)
            return 1
        if error_files:
            print(f'Error files: {error_files}')
            return 1
        return 0
    elif args.action == 'find':
        return await cli.find(args.pattern, sort=args.sort, reverse=args.reverse)
    else:
        raise ValueError(f"invalid action: '{args.action}'")


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    run()
