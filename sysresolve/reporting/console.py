from __future__ import annotations

from typing import List

from sysresolve.types.models import ForwardResult, ReverseResult

MAIN_MENU = (
    "1. Resolve Domain\n"
    "2. Reverse DNS Lookup\n"
    "3. Resolve Multiple Domains\n"
    "Choose an option: "
)

FAMILY_MENU = (
    "Select Address Family:\n"
    "1. IPv4 only\n"
    "2. IPv6 only\n"
    "3. Both (default)\n"
    "Enter choice: "
)

INVALID_IP = "Invalid IP format. Please enter a valid IPv4 address.\n"


def render_forward_header(domain: str) -> str:
    return f"\nResolving: {domain}\n"


def render_addresses(result: ForwardResult) -> str:
    # Header is printed even when the resolver succeeded with nothing
    lines: List[str] = ["Addresses:"]
    for record in result.addresses:
        lines.append(f"  {record.address}")
    return "\n".join(lines) + "\n"


def render_forward_error(result: ForwardResult) -> str:
    return f"Error: Could not resolve {result.domain}. {result.error}\n"


def render_reverse_header(ip: str) -> str:
    return f"\nReverse Lookup: {ip}\n"


def render_hostname(result: ReverseResult) -> str:
    return f"Resolved Hostname: {result.hostname}\n"


def render_reverse_error(result: ReverseResult) -> str:
    if result.invalid:
        return INVALID_IP
    return f"Reverse lookup failed for {result.ip}\n"
