from __future__ import annotations


class SysresolveError(Exception):
    """Base class for every error raised by sysresolve."""


class InitializationError(SysresolveError):
    """The networking subsystem could not be made available. Fatal."""


class ResolutionError(SysresolveError):
    def __init__(self, target: str, diagnostic: str):
        super().__init__(f"{target}: {diagnostic}")
        self.target = target
        self.diagnostic = diagnostic


class InvalidAddressError(SysresolveError):
    def __init__(self, value: str):
        super().__init__(f"invalid IPv4 address: {value!r}")
        self.value = value


class InputFormatError(SysresolveError):
    """A menu, family or count entry did not parse or was out of range."""


class InputClosedError(SysresolveError):
    """The input stream ended while a value was still expected."""
