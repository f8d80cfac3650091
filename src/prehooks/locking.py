"""In-memory working directory locks."""

from __future__ import annotations

import threading
from typing import Callable

import structlog

from prehooks.exceptions import WorkingDirLockedError


class InMemoryWorkingDirLocker:
    """Non-blocking working directory locker for a single server process.

    A lock is keyed by repo, pull number, workspace and path; a second
    ``try_lock`` on a held key fails immediately.
    """

    def __init__(self) -> None:
        self.logger = structlog.get_logger()
        self._locks: set[str] = set()
        self._mutex = threading.Lock()

    @staticmethod
    def _key(repo_full_name: str, pull_num: int, workspace: str, path: str) -> str:
        return f"{repo_full_name}/{pull_num}/{workspace}/{path}"

    async def try_lock(
        self, repo_full_name: str, pull_num: int, workspace: str, path: str
    ) -> Callable[[], None]:
        """
        Lock the working directory.

        Returns:
            Idempotent callable that releases the lock

        Raises:
            WorkingDirLockedError: If the key is already locked
        """
        key = self._key(repo_full_name, pull_num, workspace, path)
        with self._mutex:
            if key in self._locks:
                raise WorkingDirLockedError(workspace, path)
            self._locks.add(key)

        self.logger.debug("Working dir locked", lock_key=key)
        released = False

        def unlock() -> None:
            nonlocal released
            with self._mutex:
                if released:
                    return
                released = True
                self._locks.discard(key)
            self.logger.debug("Working dir unlocked", lock_key=key)

        return unlock

    def is_locked(
        self, repo_full_name: str, pull_num: int, workspace: str, path: str
    ) -> bool:
        key = self._key(repo_full_name, pull_num, workspace, path)
        with self._mutex:
            return key in self._locks
