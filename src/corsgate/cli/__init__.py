"""Corsgate CLI — inspect a CORS policy and dry-run requests against it.

Entry point registered as ``corsgate`` in ``pyproject.toml``::

    [project.scripts]
    corsgate = "corsgate.cli:main"
"""

import argparse
import sys


def _add_policy_arguments(parser: argparse.ArgumentParser) -> None:
    """Flags shared by every subcommand that builds a policy."""
    group = parser.add_argument_group("policy")
    group.add_argument(
        "--env",
        action="store_true",
        help="Start from CORS_* environment variables (flags below override)",
    )
    group.add_argument(
        "--allow-origin",
        action="append",
        dest="allowed_origins",
        metavar="ORIGIN",
        help="Allowed origin; repeatable. Supports '*' and 'https://*.example.com'",
    )
    group.add_argument(
        "--allow-method",
        action="append",
        dest="allowed_methods",
        metavar="METHOD",
        help="Allowed method; repeatable (default: GET, POST)",
    )
    group.add_argument(
        "--allow-header",
        action="append",
        dest="allowed_headers",
        metavar="HEADER",
        help="Allowed request header; repeatable, '*' allows all",
    )
    group.add_argument(
        "--expose-header",
        action="append",
        dest="exposed_headers",
        metavar="HEADER",
        help="Header exposed to scripts; repeatable",
    )
    group.add_argument(
        "--credentials",
        action="store_true",
        default=None,
        dest="allow_credentials",
        help="Send Access-Control-Allow-Credentials: true",
    )
    group.add_argument(
        "--max-age",
        type=int,
        default=None,
        help="Preflight cache lifetime in seconds",
    )
    group.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Log denial diagnostics to stderr",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``corsgate`` command."""
    parser = argparse.ArgumentParser(
        prog="corsgate",
        description="Corsgate — CORS policy engine.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- corsgate check ---------------------------------------------------
    check_parser = subparsers.add_parser(
        "check", help="Dry-run a request against a policy and show the CORS headers"
    )
    check_parser.add_argument("--origin", default=None, help="Origin header of the request")
    check_parser.add_argument(
        "--method",
        default="GET",
        help="Request method; OPTIONS runs the preflight path (default: GET)",
    )
    check_parser.add_argument(
        "--request-method",
        default=None,
        help="Access-Control-Request-Method header (preflight)",
    )
    check_parser.add_argument(
        "--request-headers",
        default=None,
        help="Access-Control-Request-Headers header, comma-separated (preflight)",
    )
    _add_policy_arguments(check_parser)

    # -- corsgate policy --------------------------------------------------
    policy_parser = subparsers.add_parser("policy", help="Print the normalized policy")
    _add_policy_arguments(policy_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "check":
        from corsgate.cli._check import run_check

        run_check(args)
    elif args.command == "policy":
        from corsgate.cli._check import run_policy

        run_policy(args)
