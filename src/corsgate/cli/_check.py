"""``corsgate check`` and ``corsgate policy`` commands.

Both build a CORSConfig from flags (optionally on top of ``CORS_*``
environment variables). ``check`` runs one simulated request through
the handler and prints the outcome; it exits 1 when the request is
denied. Configuration errors and header values that cannot be sent as
latin-1 exit 2.
"""

import argparse
import logging
import sys
from typing import Any

from corsgate.config import CORSConfig
from corsgate.errors import ConfigurationError
from corsgate.handler import ORIGIN, REQUEST_HEADERS, REQUEST_METHOD, CORSHandler
from corsgate.http.request import Request

_POLICY_FIELDS = (
    "allowed_origins",
    "allowed_methods",
    "allowed_headers",
    "exposed_headers",
    "allow_credentials",
    "max_age",
    "debug",
)


def build_config(args: argparse.Namespace) -> CORSConfig:
    """Merge environment (if ``--env``) and explicit flags into a config."""
    overrides: dict[str, Any] = {
        name: getattr(args, name) for name in _POLICY_FIELDS if getattr(args, name) is not None
    }
    if args.env:
        return CORSConfig.from_env(**overrides)
    return CORSConfig(**overrides)


def _load_handler(args: argparse.Namespace) -> CORSHandler:
    try:
        config = build_config(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    if config.debug:
        logging.basicConfig(level=logging.INFO, format="[cors] %(message)s", stream=sys.stderr)
    return CORSHandler(config)


def run_check(args: argparse.Namespace) -> None:
    """Evaluate one simulated request and print the headers it would get."""
    handler = _load_handler(args)

    raw: dict[str, str] = {}
    if args.origin is not None:
        raw[ORIGIN] = args.origin
    if args.request_method is not None:
        raw[REQUEST_METHOD] = args.request_method
    if args.request_headers is not None:
        raw[REQUEST_HEADERS] = args.request_headers

    try:
        request = Request.build(args.method, headers=raw)
    except UnicodeEncodeError as exc:
        # Header values travel as latin-1 on the wire
        print(f"Error: header values must be latin-1 encodable: {exc.object!r}", file=sys.stderr)
        raise SystemExit(2) from exc

    method = request.method
    decision = handler.evaluate(method, request.headers)

    if decision.allowed:
        outcome = "allowed"
    elif decision.reason is None:
        outcome = "not a cross-origin request"
    else:
        outcome = f"denied ({decision.reason})"
    print(f"{method} {decision.kind} from {args.origin or '<no origin>'}: {outcome}")

    for name, value in decision.headers:
        print(f"  {name}: {value}")

    if decision.is_preflight:
        print("  -> 200, inner handler skipped")
    else:
        print("  -> inner handler invoked")

    if decision.reason is not None:
        raise SystemExit(1)


def run_policy(args: argparse.Namespace) -> None:
    """Print the normalized policy."""
    store = _load_handler(args).store
    origins = store.origins

    print("origins:")
    if origins.allow_all:
        print("  * (all)")
    else:
        for origin in sorted(origins.exact):
            print(f"  exact     {origin}")
        for pattern in origins.wildcards:
            print(f"  wildcard  {pattern}")
    print(f"methods:  {', '.join(store.allowed_methods)} (+ OPTIONS)")
    if store.allow_all_headers:
        print("headers:  * (all)")
    else:
        print(f"headers:  {', '.join(store.allowed_headers)}")
    print(f"exposed:  {', '.join(store.exposed_headers) or '-'}")
    print(f"credentials: {'yes' if store.allow_credentials else 'no'}")
    print(f"max-age:  {store.max_age if store.max_age > 0 else '-'}")
