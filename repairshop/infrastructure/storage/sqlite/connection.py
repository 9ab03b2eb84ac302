"""
Pooled aiosqlite connections for the shop database.

Reads share a small queue of WAL-mode connections. Anything that moves stock
(purchases, sales, repairs) goes through ``write_transaction()``: writers in
this process line up on an asyncio lock, then take SQLite's write lock with
``BEGIN IMMEDIATE`` so another process cannot slip in between the stock check
and the stock update.
"""

import asyncio
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from repairshop.config import get_logger, get_settings

logger = get_logger(__name__)

_CONNECTION_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """Fixed-size set of shop database connections."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._pool: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._connections: list[aiosqlite.Connection] = []
        self._initialized = False
        self._setup_lock = asyncio.Lock()
        self._writer_lock = asyncio.Lock()

    async def initialize(self) -> None:
        async with self._setup_lock:
            if self._initialized:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            while len(self._connections) < self.pool_size:
                conn = await self._open()
                self._connections.append(conn)
                self._pool.put_nowait(conn)

            self._initialized = True
            logger.info(
                "connection_pool_initialized",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        for pragma in _CONNECTION_PRAGMAS:
            await conn.execute(pragma)
        # Lock waits block the driver thread, never the event loop
        await conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout)}")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection; it goes back to the queue on exit."""
        if not self._initialized:
            await self.initialize()

        conn = await self._pool.get()
        try:
            yield conn
        finally:
            self._pool.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection for a short catalog or settings write.

        SQLite takes the write lock at the first write statement. Commits
        when the block exits normally, rolls back otherwise.
        """
        async with self.acquire() as conn:
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    @asynccontextmanager
    async def write_transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection that holds the write lock for the whole block.

        Use this whenever the block reads stock and then writes based on what
        it read.
        """
        async with self._writer_lock, self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    async def ping(self) -> float:
        """Run a trivial query and return the round trip in milliseconds."""
        started = time.perf_counter()
        async with self.acquire() as conn:
            await conn.execute("SELECT 1")
        return (time.perf_counter() - started) * 1000

    async def close(self) -> None:
        async with self._setup_lock:
            while self._connections:
                await self._connections.pop().close()
            self._pool = asyncio.Queue(maxsize=self.pool_size)
            self._initialized = False
            logger.info("connection_pool_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Return the process-wide pool, opening it from settings on first use."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """Read-only access through the global pool."""
    async with (await get_pool()).acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    async with (await get_pool()).transaction() as conn:
        yield conn


@asynccontextmanager
async def get_write_transaction() -> AsyncIterator[aiosqlite.Connection]:
    async with (await get_pool()).write_transaction() as conn:
        yield conn
