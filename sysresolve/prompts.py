from __future__ import annotations

import io
import sys
from typing import Callable, TextIO, TypeVar

from sysresolve.errors import InputClosedError, InputFormatError
from sysresolve.reporting.console import FAMILY_MENU
from sysresolve.types.models import AddressFamily
from sysresolve.utils.logging import logger
from sysresolve.utils.validation import parse_family_code, parse_int


log = logger("prompts")

T = TypeVar("T")


class InputHandler:
    """Line-oriented console input.

    Every read consumes a whole line, so a rejected entry never leaves
    characters behind for the next prompt.
    """

    def __init__(self, stream: TextIO | None = None, *, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._stream = stream
        self._out = out
        self._err = err
        self._prepared: TextIO | None = None

    def prompt(self, text: str) -> None:
        out = self._out or sys.stdout
        out.write(text)
        out.flush()

    def _report(self, text: str) -> None:
        err = self._err or sys.stderr
        err.write(text + "\n")
        err.flush()

    def _source(self) -> TextIO:
        stream = self._stream or sys.stdin
        # before the first read: undecodable bytes become lone surrogates, not errors
        if stream is not self._prepared and isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(errors="surrogateescape")
        self._prepared = stream
        return stream

    def read_line(self) -> str:
        line = self._source().readline()
        if not line:
            raise InputClosedError("end of input")
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        return line

    def _retry(self, parse: Callable[[str], T], message: str, banner: str = "") -> T:
        while True:
            if banner:
                self.prompt(banner)
            line = self.read_line()
            try:
                return parse(line)
            except InputFormatError as e:
                log["debug"]("Rejected input", reason=str(e))
                self._report(message)

    def read_menu_choice(self) -> int:
        return self._retry(parse_int, "Invalid input. Please enter a number.")

    def read_family_choice(self) -> AddressFamily:
        code = self._retry(parse_family_code, "Invalid input. Enter 1, 2, or 3.", banner=FAMILY_MENU)
        return AddressFamily.from_choice(code)

    def read_count(self, limit: int) -> int:
        while True:
            count = self.read_menu_choice()
            if 1 <= count <= limit:
                return count
            self._report(f"Invalid count. Enter a number between 1 and {limit}.")
