from __future__ import annotations

import socket
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sysresolve.errors import InputFormatError, InvalidAddressError
from sysresolve.utils.validation import is_strict_ipv4


class AddressFamily(str, Enum):
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    UNSPEC = "both"

    @property
    def socket_family(self) -> int:
        return {
            AddressFamily.IPV4: socket.AF_INET,
            AddressFamily.IPV6: socket.AF_INET6,
            AddressFamily.UNSPEC: socket.AF_UNSPEC,
        }[self]

    @classmethod
    def from_choice(cls, choice: int) -> "AddressFamily":
        """Map the menu codes 1/2/3 onto a family."""
        try:
            return {1: cls.IPV4, 2: cls.IPV6, 3: cls.UNSPEC}[choice]
        except KeyError:
            raise InputFormatError(f"family choice out of range: {choice}") from None


class Settings(BaseModel):
    log_level: int = Field(default=30, ge=0)
    max_batch_size: int = Field(default=256, ge=1)


class ResolutionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    domain: str
    family: AddressFamily = AddressFamily.UNSPEC


class ReverseLookupRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    ip: str

    def __init__(self, ip: str) -> None:
        # Checked up front so callers get InvalidAddressError, not ValidationError
        if not isinstance(ip, str) or not is_strict_ipv4(ip):
            raise InvalidAddressError(str(ip))
        super().__init__(ip=ip)


class AddressRecord(BaseModel):
    address: str
    family: AddressFamily

    @field_validator("family", mode="before")
    @classmethod
    def _from_socket_family(cls, value: object) -> object:
        if value == socket.AF_INET:
            return AddressFamily.IPV4
        if value == socket.AF_INET6:
            return AddressFamily.IPV6
        return value


class ForwardResult(BaseModel):
    domain: str
    family: AddressFamily
    addresses: List[AddressRecord] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ReverseResult(BaseModel):
    ip: str
    hostname: Optional[str] = None
    error: Optional[str] = None
    invalid: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.invalid
