"""
Unit tests for sysresolve.runtime module.

Tests:
- acquire()/release() lifecycle
- Context manager release on every exit path
- InitializationError on subsystem failure
"""

import socket
from unittest.mock import MagicMock, patch

import pytest

from sysresolve.errors import InitializationError
from sysresolve.runtime import ResolverRuntime


class TestAcquireRelease:
    """Tests for explicit acquire()/release() calls."""

    def test_not_available_before_acquire(self) -> None:
        """A fresh runtime is unavailable."""
        assert ResolverRuntime().available is False

    def test_acquire_makes_available(self) -> None:
        """acquire() flips the runtime to available."""
        rt = ResolverRuntime()
        rt.acquire()
        try:
            assert rt.available is True
        finally:
            rt.release()

    def test_release_makes_unavailable(self) -> None:
        """release() returns the runtime to unavailable."""
        rt = ResolverRuntime()
        rt.acquire()
        rt.release()
        assert rt.available is False

    def test_double_acquire_rejected(self) -> None:
        """A second acquire() without release() is an initialization error."""
        rt = ResolverRuntime()
        rt.acquire()
        try:
            with pytest.raises(InitializationError):
                rt.acquire()
        finally:
            rt.release()

    def test_release_without_acquire_is_noop(self) -> None:
        """release() on an unacquired runtime does nothing."""
        rt = ResolverRuntime()
        rt.release()
        assert rt.available is False

    def test_release_ignores_close_errors(self) -> None:
        """Socket close failures are not reported from release()."""
        probe = MagicMock()
        probe.close.side_effect = OSError("bad descriptor")
        with patch("sysresolve.runtime.socket.socket", return_value=probe):
            rt = ResolverRuntime()
            rt.acquire()
            rt.release()
        assert rt.available is False


class TestRequire:
    """Tests for require() gating resolver calls."""

    def test_require_before_acquire(self) -> None:
        """require() fails before acquisition."""
        with pytest.raises(InitializationError):
            ResolverRuntime().require()

    def test_require_after_acquire(self, runtime: ResolverRuntime) -> None:
        """require() passes once acquired."""
        runtime.require()


class TestInitializationFailure:
    """Tests for subsystem start-up failures."""

    def test_socket_failure_raises(self) -> None:
        """OSError while opening the probe socket becomes InitializationError."""
        with patch("sysresolve.runtime.socket.socket", side_effect=OSError(24, "Too many open files")):
            rt = ResolverRuntime()
            with pytest.raises(InitializationError, match="Too many open files"):
                rt.acquire()
        assert rt.available is False

    def test_missing_resolver_call_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A platform without getnameinfo cannot be initialized."""
        monkeypatch.delattr(socket, "getnameinfo")
        with pytest.raises(InitializationError, match="getnameinfo"):
            ResolverRuntime().acquire()


class TestScopedLifetime:
    """Tests for the context manager form."""

    def test_released_on_normal_exit(self) -> None:
        """The probe is closed exactly once after the block."""
        probe = MagicMock()
        with patch("sysresolve.runtime.socket.socket", return_value=probe):
            with ResolverRuntime() as rt:
                assert rt.available is True
        probe.close.assert_called_once()
        assert rt.available is False

    def test_released_on_exception(self) -> None:
        """The probe is closed exactly once when the block raises."""
        probe = MagicMock()
        with patch("sysresolve.runtime.socket.socket", return_value=probe):
            with pytest.raises(RuntimeError):
                with ResolverRuntime():
                    raise RuntimeError("boom")
        probe.close.assert_called_once()

    def test_exception_not_swallowed(self) -> None:
        """__exit__ lets the original exception propagate."""
        with pytest.raises(ValueError, match="kept"):
            with ResolverRuntime():
                raise ValueError("kept")
