"""Process-scoped guard around the platform networking subsystem.

POSIX needs no explicit start-up call before resolving, so acquisition opens a
probe datagram socket and holds it for the lifetime of the run. Failing to
open it (descriptor exhaustion, networking disabled in a sandbox) is the
signal that no resolver call can succeed either.
"""

from __future__ import annotations

import contextlib
import socket
from typing import Any

from sysresolve.errors import InitializationError
from sysresolve.utils.logging import logger


log = logger("runtime")

_REQUIRED_CALLS = ("getaddrinfo", "getnameinfo")


class ResolverRuntime:
    def __init__(self) -> None:
        self._probe: socket.socket | None = None

    @property
    def available(self) -> bool:
        return self._probe is not None

    def acquire(self) -> None:
        if self._probe is not None:
            raise InitializationError("resolver runtime already acquired")
        missing = [name for name in _REQUIRED_CALLS if not hasattr(socket, name)]
        if missing:
            raise InitializationError(f"platform resolver unavailable: missing {', '.join(missing)}")
        try:
            self._probe = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as e:
            log["error"]("Networking subsystem failed to start", error=str(e))
            raise InitializationError(f"networking subsystem failed to start: {e}") from e
        log["debug"]("Resolver runtime acquired")

    def release(self) -> None:
        probe, self._probe = self._probe, None
        if probe is None:
            return
        with contextlib.suppress(OSError):
            probe.close()
        log["debug"]("Resolver runtime released")

    def require(self) -> None:
        if self._probe is None:
            raise InitializationError("resolver runtime not acquired")

    def __enter__(self) -> "ResolverRuntime":
        self.acquire()
        return self

    def __exit__(self, *_: Any) -> None:
        self.release()
