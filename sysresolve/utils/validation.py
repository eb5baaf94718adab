from __future__ import annotations

import ipaddress
import re

from sysresolve.errors import InputFormatError

FAMILY_CODES = (1, 2, 3)

_INT_RE = re.compile(r"[+-]?[0-9]+")


def is_strict_ipv4(value: str) -> bool:
    # ipaddress never maps bad text onto a reserved address, unlike inet_addr()
    try:
        ipaddress.IPv4Address(value)
        return True
    except ValueError:
        return False


def parse_int(line: str) -> int:
    text = line.strip()
    # ASCII digits only: no underscores, no other scripts
    if not _INT_RE.fullmatch(text):
        raise InputFormatError(f"not a number: {text!r}")
    return int(text)


def parse_family_code(line: str) -> int:
    code = parse_int(line)
    if code not in FAMILY_CODES:
        raise InputFormatError(f"family choice out of range: {code}")
    return code
