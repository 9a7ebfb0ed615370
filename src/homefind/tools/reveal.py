"""
Reveal a selected file in the platform's file manager.

Each supported platform has one Revealer. The right one is picked once at
startup with select_revealer() and handed to the caller. Revealing is
fire-and-forget: the file manager is started detached and any failure is
logged at debug level and otherwise ignored.
"""

import os
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence
import logging


logger = logging.getLogger(__name__)


def spawn_detached(command: Sequence[str]) -> bool:
    """
    Start an external command without waiting for it.

    Args:
        command: Program and arguments

    Returns:
        True if the process was started
    """
    kwargs = {
        'stdin': subprocess.DEVNULL,
        'stdout': subprocess.DEVNULL,
        'stderr': subprocess.DEVNULL,
    }
    if os.name == 'posix':
        kwargs['start_new_session'] = True

    try:
        subprocess.Popen(list(command), **kwargs)
        return True
    except (OSError, ValueError) as e:
        logger.debug(f"Could not start {command[0]}: {e}")
        return False


class Revealer(ABC):
    """Shows a file in a file manager."""

    def __init__(self, spawn: Callable[[Sequence[str]], bool] = spawn_detached):
        self.spawn = spawn

    @abstractmethod
    def build_command(self, path: str) -> Optional[List[str]]:
        """Get the command that reveals a path, or None if there is none."""

    def reveal(self, path: str) -> None:
        """Reveal a path; never raises."""
        command = self.build_command(path)
        if command:
            self.spawn(command)


class WindowsRevealer(Revealer):
    """Selects the file in Windows Explorer."""

    def build_command(self, path: str) -> Optional[List[str]]:
        return ['explorer', '/select,', path]


class MacRevealer(Revealer):
    """Selects the file in Finder."""

    def build_command(self, path: str) -> Optional[List[str]]:
        return ['open', '-R', path]


class LinuxRevealer(Revealer):
    """
    Selects the file in Nautilus or Dolphin when one is installed, otherwise
    opens the containing directory with xdg-open.
    """

    SELECTING_MANAGERS = ('nautilus', 'dolphin')

    def __init__(self, spawn: Callable[[Sequence[str]], bool] = spawn_detached,
                 which: Callable[[str], Optional[str]] = shutil.which):
        super().__init__(spawn)
        self.which = which

    def build_command(self, path: str) -> Optional[List[str]]:
        for manager in self.SELECTING_MANAGERS:
            if self.which(manager):
                return [manager, '--select', path]
        return ['xdg-open', os.path.dirname(path)]


class NullRevealer(Revealer):
    """Used on platforms without a known file manager."""

    def build_command(self, path: str) -> Optional[List[str]]:
        return None


def select_revealer(platform: Optional[str] = None) -> Revealer:
    """
    Pick the revealer for a platform.

    Args:
        platform: A sys.platform value; defaults to the running platform
    """
    platform = platform or sys.platform

    if platform.startswith('win'):
        return WindowsRevealer()
    if platform == 'darwin':
        return MacRevealer()
    if platform.startswith('linux'):
        return LinuxRevealer()

    logger.debug(f"No file manager integration for platform {platform}")
    return NullRevealer()
