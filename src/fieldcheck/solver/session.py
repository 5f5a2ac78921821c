"""
Reusable solver session and its lazily-initialized provider.

Creating a solver is comparatively expensive, so one session is shared by all
constraint checks of a process (or of whoever owns the provider). Checks are
isolated from each other by an assertion scope and serialized by a lock.
"""
import asyncio
import inspect
from contextlib import asynccontextmanager, contextmanager
from typing import AsyncIterator, Awaitable, Callable, Iterator, Optional, Union

import structlog

from .base import SolverBackend
from .result import CheckResult
from .z3_solver import Z3Solver

logger = structlog.get_logger()

SessionFactory = Callable[[], Union[SolverBackend, Awaitable[SolverBackend]]]


class LoopLock:
    """An asyncio.Lock per event loop.

    ``asyncio.Lock`` binds to the loop it is first contended on. A session
    outlives the loop when callers use ``asyncio.run`` repeatedly, so the
    lock is re-created whenever it is taken from a different running loop.
    Only one loop may use the owner at a time.
    """

    def __init__(self):
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._lock: Optional[asyncio.Lock] = None

    def get(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._lock is None or self._loop is not loop:
            self._loop = loop
            self._lock = asyncio.Lock()
        return self._lock


class SolverSession:
    """A solver backend shared across many constraint checks.

    All work against the backend must happen inside :meth:`scope`, which holds
    the session lock and wraps the work in a push/pop frame. Only the task
    that entered the scope may add assertions or check.
    """

    def __init__(self, backend: SolverBackend):
        self.backend = backend
        self.checks = 0
        self._lock = LoopLock()
        self._owner: Optional[asyncio.Task] = None

    @asynccontextmanager
    async def scope(self) -> AsyncIterator["SolverSession"]:
        """Exclusive, isolated assertion scope for one check."""
        async with self._lock.get():
            self._owner = asyncio.current_task()
            self.backend.push()
            try:
                yield self
            finally:
                self.backend.pop()
                self._owner = None

    @contextmanager
    def frame(self) -> Iterator[None]:
        """Nested push/pop frame inside the current scope."""
        self._require_scope()
        self.backend.push()
        try:
            yield
        finally:
            self.backend.pop()

    def add(self, assertion) -> None:
        self._require_scope()
        self.backend.add_constraint(assertion)

    async def check(self, timeout_ms: Optional[int] = None) -> CheckResult:
        """Check the current scope in a worker thread.

        Args:
            timeout_ms: Solver timeout; on expiry the result is UNKNOWN

        Returns:
            CheckResult from the backend
        """
        self._require_scope()
        self.checks += 1
        worker = asyncio.ensure_future(
            asyncio.to_thread(self.backend.check_sat, timeout_ms))
        try:
            return await asyncio.shield(worker)
        except asyncio.CancelledError:
            # The solver thread cannot be stopped; the scope is popped only
            # once it has finished.
            await asyncio.wait([worker])
            raise

    def _require_scope(self) -> None:
        if self._owner is None or self._owner is not asyncio.current_task():
            raise RuntimeError("Solver session used outside of scope()")


class SessionProvider:
    """Creates the shared :class:`SolverSession` on first use.

    Concurrent first callers wait for a single creation; the factory is never
    called twice.

    Args:
        factory: Zero-argument callable returning a solver backend, or an
            awaitable resolving to one (defaults to Z3Solver)
    """

    def __init__(self, factory: SessionFactory = Z3Solver):
        self._factory = factory
        self._session: Optional[SolverSession] = None
        self._lock = LoopLock()
        self.created = 0

    @property
    def session(self) -> Optional[SolverSession]:
        return self._session

    async def get(self) -> SolverSession:
        if self._session is not None:
            return self._session

        async with self._lock.get():
            if self._session is None:
                backend = self._factory()
                if inspect.isawaitable(backend):
                    backend = await backend
                self._session = SolverSession(backend)
                self.created += 1
                logger.info(
                    "solver_session_created",
                    solver=getattr(backend, "name", type(backend).__name__),
                )
        return self._session

    def discard(self) -> None:
        """Drop the current session; the next get() creates a new one."""
        self._session = None
