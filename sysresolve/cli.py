from __future__ import annotations

import argparse
import io
import json
import sys
from typing import List, Sequence, TextIO

from pydantic import ValidationError

from sysresolve import __version__
from sysresolve.errors import InitializationError, InputClosedError
from sysresolve.prompts import InputHandler
from sysresolve.reporting.console import MAIN_MENU
from sysresolve.resolver import NameResolutionService
from sysresolve.runtime import ResolverRuntime
from sysresolve.types.models import AddressFamily, ForwardResult, ReverseResult, Settings
from sysresolve.utils.env import load_env, load_settings
from sysresolve.utils.logging import logger, parse_level, set_level


log = logger("cli")

_FAMILY_ARGS = {"4": AddressFamily.IPV4, "6": AddressFamily.IPV6, "both": AddressFamily.UNSPEC}


def _print(s: str) -> None:
    sys.stdout.write(s)
    sys.stdout.flush()


def _echo_raw_bytes() -> None:
    # undecodable input is echoed back byte for byte instead of failing to encode
    for stream in (sys.stdout, sys.stderr):
        if isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(errors="surrogateescape")


def _print_err(s: str) -> None:
    sys.stderr.write(s)
    sys.stderr.flush()


def _dump(results: Sequence[ForwardResult | ReverseResult]) -> None:
    if len(results) == 1:
        _print(results[0].model_dump_json(indent=2) + "\n")
    else:
        _print(json.dumps([r.model_dump(mode="json") for r in results], indent=2) + "\n")


def _cmd_interactive(service: NameResolutionService, inputs: InputHandler, settings: Settings) -> List[ForwardResult | ReverseResult]:
    _print(MAIN_MENU)
    choice = inputs.read_menu_choice()

    match choice:
        case 1:
            inputs.prompt("Enter domain: ")
            domain = inputs.read_line()
            family = inputs.read_family_choice()
            return [service.resolve_forward(domain, family)]
        case 2:
            inputs.prompt("Enter IP address: ")
            ip = inputs.read_line()
            return [service.resolve_reverse(ip)]
        case 3:
            inputs.prompt("Enter number of domains: ")
            count = inputs.read_count(settings.max_batch_size)
            domains: List[str] = []
            for i in range(count):
                inputs.prompt(f"Enter domain {i + 1}: ")
                domains.append(inputs.read_line())
            family = inputs.read_family_choice()
            return list(service.resolve_multiple(domains, family))
        case _:
            log["debug"]("Invalid menu choice", choice=choice)
            _print_err("Invalid choice. Exiting.\n")
            return []


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sysresolve", description="Resolve domains and IPs with the system resolver")
    parser.add_argument("-o", "--format", choices=["console", "json"], default="console", help="Output format")
    parser.add_argument("--log-level", type=str, default=None, help="Minimum log level (DEBUG, INFO, WARN, ERROR or a number)")
    parser.add_argument("-V", "--version", action="version", version=f"sysresolve {__version__}")
    sub = parser.add_subparsers(dest="cmd")

    p_resolve = sub.add_parser("resolve", help="Resolve one domain to its addresses")
    p_resolve.add_argument("domain", type=str)
    p_resolve.add_argument("-f", "--family", choices=list(_FAMILY_ARGS), default="both", help="Address family")

    p_reverse = sub.add_parser("reverse", help="Reverse lookup of an IPv4 address")
    p_reverse.add_argument("ip", type=str)

    p_batch = sub.add_parser("batch", help="Resolve several domains in order")
    p_batch.add_argument("domains", nargs="+")
    p_batch.add_argument("-f", "--family", choices=list(_FAMILY_ARGS), default="both", help="Address family")

    return parser


def run(argv: Sequence[str] | None = None, *, stdin: TextIO | None = None) -> int:
    load_env()
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.cmd is None and args.format == "json":
        parser.error("-o json needs a subcommand (resolve, reverse or batch)")
    _echo_raw_bytes()

    try:
        settings = load_settings()
        if args.log_level is not None:
            settings = settings.model_copy(update={"log_level": parse_level(args.log_level)})
    except (ValidationError, ValueError) as e:
        log["error"]("Invalid configuration", error=str(e))
        _print_err(f"Error: invalid configuration: {e}\n")
        return 2
    set_level(settings.log_level)

    output = args.format
    try:
        with ResolverRuntime() as runtime:
            service = NameResolutionService(runtime, echo=(output == "console"))
            match args.cmd:
                case "resolve":
                    results = [service.resolve_forward(args.domain, _FAMILY_ARGS[args.family])]
                case "reverse":
                    results = [service.resolve_reverse(args.ip)]
                case "batch":
                    if len(args.domains) > settings.max_batch_size:
                        _print_err(f"Error: at most {settings.max_batch_size} domains per batch\n")
                        return 2
                    results = list(service.resolve_multiple(args.domains, _FAMILY_ARGS[args.family]))
                case _:
                    results = _cmd_interactive(service, InputHandler(stdin), settings)
    except InitializationError as e:
        log["error"]("Resolver runtime unavailable", error=str(e))
        _print_err(f"Error: {e}\n")
        return 1
    except InputClosedError:
        _print_err("\nInput closed. Exiting.\n")
        return 0

    if output == "json" and results:
        _dump(results)
    return 0


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
