"""Per-file-name locking for pipeline runs."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class FileLocks:
    """Serializes pipeline runs that share a source file name.

    Runs for different names proceed concurrently. Locks are dropped once no
    run holds or waits on them.
    """

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, file_name: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(file_name, asyncio.Lock())
        self._users[file_name] = self._users.get(file_name, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[file_name] -= 1
            if self._users[file_name] == 0:
                del self._users[file_name]
                del self._locks[file_name]

    def __len__(self) -> int:
        return len(self._locks)
