"""
Pytest configuration and shared fixtures for sysresolve tests.

Provides:
- An acquired ResolverRuntime
- getaddrinfo result builders
- Isolation of the logging level and environment between tests
"""

import socket
from typing import Iterator

import pytest

from sysresolve.runtime import ResolverRuntime
from sysresolve.utils.logging import set_level


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep configuration and log level from leaking between tests."""
    monkeypatch.delenv("SYSRESOLVE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SYSRESOLVE_MAX_BATCH", raising=False)
    monkeypatch.setattr("sysresolve.cli.load_env", lambda: None)
    set_level(None)
    yield
    set_level(None)


@pytest.fixture
def runtime() -> Iterator[ResolverRuntime]:
    """An acquired resolver runtime, released after the test."""
    with ResolverRuntime() as rt:
        yield rt


def addrinfo(*addresses: str) -> list:
    """Build a getaddrinfo() result list for the given textual addresses."""
    out = []
    for address in addresses:
        if ":" in address:
            out.append((socket.AF_INET6, socket.SOCK_STREAM, 6, "", (address, 0, 0, 0)))
        else:
            out.append((socket.AF_INET, socket.SOCK_STREAM, 6, "", (address, 0)))
    return out
