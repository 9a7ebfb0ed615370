"""
On-disk storage for the file index.

The index is written as a single MessagePack array of path strings. The file is
private to the owning user because the paths it holds reveal directory layout
and user names. Loading distinguishes a missing file, which the caller answers
with a rebuild, from a present but undecodable one, which is always fatal.
"""

import os
import stat
from pathlib import Path
from typing import List, Sequence, Union
import logging

import msgpack
from msgpack.exceptions import UnpackException


logger = logging.getLogger(__name__)

INDEX_FILE_NAME = '.index'
INDEX_FILE_MODE = stat.S_IRUSR | stat.S_IWUSR

# POSIX file names are bytes; undecodable ones round-trip through lone surrogates
PATH_UNICODE_ERRORS = 'surrogateescape'


class IndexStoreError(Exception):
    """Raised when the index file cannot be read or written."""
    pass


class IndexNotFoundError(IndexStoreError):
    """Raised when no index file exists yet."""
    pass


class CorruptIndexError(IndexStoreError):
    """Raised when the index file exists but does not hold a list of paths."""
    pass


def default_index_path(home: Union[str, Path]) -> Path:
    """Get the fixed index location for a home directory."""
    return Path(home) / INDEX_FILE_NAME


class IndexStore:
    """
    Saves and loads the ordered list of indexed paths.

    Attributes:
        path: Location of the index file
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        """Check if an index file is present."""
        return self.path.exists()

    def save(self, paths: Sequence[str]) -> None:
        """
        Write the index, replacing any previous content.

        Args:
            paths: Indexed paths in traversal order

        Raises:
            IndexStoreError: If the file cannot be written
        """
        payload = msgpack.packb(list(paths), use_bin_type=True,
                                unicode_errors=PATH_UNICODE_ERRORS)

        try:
            fd = os.open(self.path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, INDEX_FILE_MODE)
            with os.fdopen(fd, 'wb') as f:
                f.write(payload)
            # O_CREAT's mode only applies to new files
            os.chmod(self.path, INDEX_FILE_MODE)
        except OSError as e:
            raise IndexStoreError(f"Cannot write index file {self.path}: {e}") from e

        logger.info(f"Saved {len(paths)} paths to {self.path}")

    def load(self) -> List[str]:
        """
        Read the index back.

        Returns:
            Indexed paths in the order they were saved

        Raises:
            IndexNotFoundError: If the index file does not exist
            CorruptIndexError: If the content is not a MessagePack array of strings
            IndexStoreError: If the file exists but cannot be read
        """
        try:
            with open(self.path, 'rb') as f:
                data = f.read()
        except FileNotFoundError as e:
            raise IndexNotFoundError(f"Index file not found: {self.path}") from e
        except OSError as e:
            raise IndexStoreError(f"Cannot open index file {self.path}: {e}") from e

        try:
            decoded = msgpack.unpackb(data, raw=False, unicode_errors=PATH_UNICODE_ERRORS)
        except (UnpackException, ValueError, TypeError) as e:
            raise CorruptIndexError(f"Invalid index {self.path}: {e}") from e

        if not isinstance(decoded, list) or not all(isinstance(p, str) for p in decoded):
            raise CorruptIndexError(
                f"Invalid index {self.path}: expected a list of paths, got {type(decoded).__name__}"
            )

        logger.info(f"Loaded {len(decoded)} paths from {self.path}")
        return decoded
