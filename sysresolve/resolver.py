"""Forward and reverse lookups through the operating system resolver.

Two layers live here. ``lookup_addresses`` and ``reverse_lookup`` make exactly
one resolver call each and raise on failure. ``NameResolutionService`` wraps
them for the console: it prints progress and results, reports failures on
stderr and hands back a result model instead of raising, so a failed lookup
never ends the run.
"""

from __future__ import annotations

import socket
import sys
from typing import Iterable, List, TextIO

from sysresolve.errors import InvalidAddressError, ResolutionError
from sysresolve.reporting.console import (
    render_addresses,
    render_forward_error,
    render_forward_header,
    render_hostname,
    render_reverse_error,
    render_reverse_header,
)
from sysresolve.runtime import ResolverRuntime
from sysresolve.types.models import (
    AddressFamily,
    AddressRecord,
    ForwardResult,
    ResolutionRequest,
    ReverseLookupRequest,
    ReverseResult,
)
from sysresolve.utils.logging import logger


log = logger("resolver")


def _diagnostic(err: Exception) -> str:
    if isinstance(err, OSError) and err.strerror:
        return err.strerror
    return str(err) or type(err).__name__


def lookup_addresses(request: ResolutionRequest, runtime: ResolverRuntime) -> List[AddressRecord]:
    """Resolve ``request.domain`` with a single ``getaddrinfo`` call.

    Records keep the resolver's order and are not deduplicated.
    """
    runtime.require()
    if not request.domain:
        raise ResolutionError(request.domain, "empty domain name")
    log["debug"]("getaddrinfo", domain=request.domain, family=request.family.value)
    try:
        infos = socket.getaddrinfo(
            request.domain, None, request.family.socket_family, socket.SOCK_STREAM
        )
    except (OSError, UnicodeError) as e:
        raise ResolutionError(request.domain, _diagnostic(e)) from e
    return [AddressRecord(address=str(sockaddr[0]), family=fam) for fam, _type, _proto, _canon, sockaddr in infos]


def reverse_lookup(ip: str, runtime: ResolverRuntime) -> str:
    """Return the PTR name for an IPv4 address.

    The address is validated before the resolver is touched. ``NI_NAMEREQD``
    makes the lookup fail instead of echoing the numeric address back.
    """
    request = ReverseLookupRequest(ip)
    runtime.require()
    log["debug"]("getnameinfo", ip=request.ip)
    try:
        host, _port = socket.getnameinfo((request.ip, 0), socket.NI_NAMEREQD)
    except (OSError, UnicodeError) as e:
        raise ResolutionError(request.ip, _diagnostic(e)) from e
    return host


class NameResolutionService:
    def __init__(
        self,
        runtime: ResolverRuntime,
        *,
        echo: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.runtime = runtime
        self.echo = echo
        self._out = out
        self._err = err

    def _write(self, text: str) -> None:
        if self.echo:
            stream = self._out or sys.stdout
            stream.write(text)
            stream.flush()

    def _write_err(self, text: str) -> None:
        if self.echo:
            stream = self._err or sys.stderr
            stream.write(text)
            stream.flush()

    def resolve_forward(self, domain: str, family: AddressFamily = AddressFamily.UNSPEC) -> ForwardResult:
        request = ResolutionRequest(domain=domain, family=family)
        self._write(render_forward_header(domain))
        try:
            records = lookup_addresses(request, self.runtime)
        except ResolutionError as e:
            log["info"]("Forward resolution failed", domain=domain, family=family.value, error=e.diagnostic)
            result = ForwardResult(domain=domain, family=family, error=e.diagnostic)
            self._write_err(render_forward_error(result))
            return result
        result = ForwardResult(domain=domain, family=family, addresses=records)
        self._write(render_addresses(result))
        return result

    def resolve_reverse(self, ip: str) -> ReverseResult:
        self._write(render_reverse_header(ip))
        try:
            hostname = reverse_lookup(ip, self.runtime)
        except InvalidAddressError:
            log["info"]("Rejected reverse lookup input", ip=ip)
            result = ReverseResult(ip=ip, invalid=True, error="invalid IPv4 address")
            self._write_err(render_reverse_error(result))
            return result
        except ResolutionError as e:
            log["info"]("Reverse lookup failed", ip=ip, error=e.diagnostic)
            result = ReverseResult(ip=ip, error=e.diagnostic)
            self._write_err(render_reverse_error(result))
            return result
        result = ReverseResult(ip=ip, hostname=hostname)
        self._write(render_hostname(result))
        return result

    def resolve_multiple(
        self, domains: Iterable[str], family: AddressFamily = AddressFamily.UNSPEC
    ) -> List[ForwardResult]:
        results: List[ForwardResult] = []
        for domain in domains:
            results.append(self.resolve_forward(domain, family))
        failed = sum(1 for r in results if not r.ok)
        log["debug"]("Batch finished", total=len(results), failed=failed)
        return results
