#!/usr/bin/env python3
"""
jujuconf/cli/juju_env.py

Prints the local Juju controller configuration as environment variables:

    eval "$(python -m jujuconf.cli.juju_env --show-password)"

By default the password is redacted. Use --format json for a JSON object.
Exits with 1 if the Juju CLI could not be accessed.
"""

from __future__ import annotations

import sys
import json
import shlex
import asyncio
import logging
import argparse
from typing import Any, Dict, List, Optional

from jujuconf.models.juju import redact_env
from jujuconf.models.settings import JujuCliSettings
from jujuconf.secrets.juju_controller import (
    ControllerConfigProvider,
    ControllerConfigUnavailable,
)


def format_env(config: Dict[str, str], output_format: str = "env") -> str:
    """Render the mapping as `export KEY=value` lines or as JSON."""
    if output_format == "json":
        return json.dumps(config, indent=2, sort_keys=True)
    return "\n".join(f"export {key}={shlex.quote(value)}" for key, value in config.items())


def _build_settings(args: argparse.Namespace) -> JujuCliSettings:
    overrides: Dict[str, Any] = {}
    if args.cli_path is not None:
        overrides["cli_path"] = args.cli_path
    if args.timeout is not None:
        overrides["timeout_seconds"] = args.timeout
    if args.allow_empty:
        overrides["allow_empty_output"] = True
    return JujuCliSettings(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Print the local Juju controller configuration as environment variables."
    )
    parser.add_argument(
        "--format", choices=["env", "json"], default="env", dest="output_format"
    )
    parser.add_argument(
        "--show-password",
        action="store_true",
        help="Print JUJU_PASSWORD in plaintext instead of redacting it.",
    )
    parser.add_argument("--cli-path", default=None, help="Path to the juju binary.")
    parser.add_argument(
        "--timeout", type=float, default=None, help="Seconds to wait for the CLI."
    )
    parser.add_argument(
        "--allow-empty",
        action="store_true",
        help="Print empty values instead of failing when no controller is reported.",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    provider = ControllerConfigProvider(_build_settings(args))
    try:
        config = asyncio.run(provider.get_config())
    except ControllerConfigUnavailable as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if not args.show_password:
        config = redact_env(config)
    print(format_env(config, args.output_format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
