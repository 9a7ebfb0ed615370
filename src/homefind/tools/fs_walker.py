"""
Filesystem walker for homefind.

This module traverses a directory tree and collects the absolute paths of every
regular file in it. Hidden directories are pruned together with their subtree,
symbolic links are never added or followed, and unreadable entries are skipped
without aborting the walk.
"""

import os
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union
import logging

from ..models.config import LocatorConfig
from ..models.index_report import IndexBuildReport
from .index_store import IndexStore


logger = logging.getLogger(__name__)

HIDDEN_PREFIX = '.'

ProgressCallback = Callable[[int], None]


class IndexBuildError(Exception):
    """Raised when a traversal cannot be started at all."""
    pass


class FSWalker:
    """
    Filesystem walker that produces the file index.

    Entries are visited depth first, in sorted name order within each
    directory, so two walks over an unchanged tree give the same sequence.
    """

    def __init__(self, config: Optional[LocatorConfig] = None,
                 progress: Optional[ProgressCallback] = None):
        """
        Initialize the filesystem walker.

        Args:
            config: Configuration object; defaults are used when omitted
            progress: Called with the running file count every progress_interval files
        """
        self.config = config or LocatorConfig()
        self.progress = progress
        self._root: Optional[str] = None
        self._elapsed = 0.0
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'files_indexed': 0,
            'directories_traversed': 0,
            'hidden_directories_skipped': 0,
            'symlinks_skipped': 0,
            'errors': 0
        }

    def walk(self, root: Union[str, Path]) -> List[str]:
        """
        Walk a root directory and collect every regular file under it.

        Args:
            root: Directory to index

        Returns:
            Absolute file paths in traversal order

        Raises:
            IndexBuildError: If the root cannot be listed
        """
        self.reset_stats()
        root_str = os.path.abspath(os.fspath(root))
        self._root = root_str

        logger.info(f"Walking directory tree: {root_str}")
        start = time.perf_counter()

        root_entries = self._open_root(root_str)
        files: List[str] = []
        self._stats['directories_traversed'] += 1

        stack = [iter(root_entries)]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            try:
                if entry.is_symlink():
                    self._stats['symlinks_skipped'] += 1
                    continue

                if entry.is_dir(follow_symlinks=False):
                    if entry.name.startswith(HIDDEN_PREFIX):
                        self._stats['hidden_directories_skipped'] += 1
                        continue
                    children = self._list_directory(entry.path)
                    if children is not None:
                        self._stats['directories_traversed'] += 1
                        stack.append(iter(children))
                    continue

                if not entry.is_file(follow_symlinks=False):
                    continue
            except OSError as e:
                logger.debug(f"Skipping unreadable entry {entry.path}: {e}")
                self._stats['errors'] += 1
                continue

            files.append(entry.path)
            self._stats['files_indexed'] += 1
            self._report_progress()

        self._elapsed = time.perf_counter() - start
        logger.info(f"Indexed {len(files)} files under {root_str} in {self._elapsed:.2f}s")
        if self._stats['errors']:
            logger.warning(
                f"{self._stats['errors']} entries under {root_str} could not be read and were skipped"
            )

        return files

    def _open_root(self, root: str) -> List[os.DirEntry]:
        """
        List the root directory, failing loudly.

        Raises:
            IndexBuildError: If the root is missing, not a directory, or unreadable
        """
        try:
            return self._scan_sorted(root)
        except OSError as e:
            raise IndexBuildError(f"Cannot walk {root}: {e}") from e

    def _list_directory(self, path: str) -> Optional[List[os.DirEntry]]:
        """
        List a directory below the root, swallowing errors.

        Returns:
            Sorted entries, or None if the directory could not be read
        """
        try:
            return self._scan_sorted(path)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {path}: {e}")
            self._stats['errors'] += 1
            return None

    @staticmethod
    def _scan_sorted(path: str) -> List[os.DirEntry]:
        with os.scandir(path) as it:
            return sorted(it, key=lambda entry: entry.name)

    def _report_progress(self) -> None:
        count = self._stats['files_indexed']
        if self.progress is not None and count % self.config.indexer.progress_interval == 0:
            self.progress(count)

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the last walk.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def get_report(self) -> IndexBuildReport:
        """Get the statistics of the last walk as a build report."""
        return IndexBuildReport(
            root=self._root or '.',
            elapsed_seconds=self._elapsed,
            **self._stats
        )

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._empty_stats()
        self._elapsed = 0.0


def build_index(root: Union[str, Path], store: IndexStore,
                config: Optional[LocatorConfig] = None,
                progress: Optional[ProgressCallback] = None) -> IndexBuildReport:
    """
    Run a full build: walk the root and persist the result.

    Args:
        root: Directory to index
        store: Where the index is saved
        config: Configuration object (optional)
        progress: Progress callback (optional)

    Returns:
        Statistics of the walk

    Raises:
        IndexBuildError: If the traversal cannot start
        IndexStoreError: If the index cannot be written
    """
    walker = FSWalker(config, progress=progress)
    files = walker.walk(root)
    store.save(files)
    return walker.get_report()
