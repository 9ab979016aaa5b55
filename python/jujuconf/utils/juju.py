"""
jujuconf/utils/juju.py

Runs `juju show-controller` and parses its JSON output into a ControllerConfig.

The CLI prints an object keyed by controller name, e.g.:

    {"my-controller": {"details": {...}, "account": {...}, ...}}

The controller name is not known in advance, so the output is decoded
generically first and the first entry is then validated against the model.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from jujuconf.models.juju import ControllerConfig
from jujuconf.models.settings import JujuCliSettings
from jujuconf.models.validator import validate_type
from jujuconf.utils.async_command_runner import run_command

logger = logging.getLogger(__name__)

SHOW_CONTROLLER_ARGS = ["show-controller", "--show-password", "--format=json"]


class ControllerOutputError(ValueError):
    """Base class for problems with the content of `juju show-controller` output."""


class MalformedControllerOutput(ControllerOutputError):
    """The output is not JSON, or its top level is not an object."""


class ControllerShapeMismatch(ControllerOutputError):
    """A controller entry does not match the expected structure."""


class NoControllerFound(ControllerOutputError):
    """The output contains no controller entries."""


def juju_error_parser(stderr_str: str) -> Optional[str]:
    """
    Map well-known Juju CLI errors to a short message.

    Returns None for anything unrecognized so the generic message is used.
    """
    lower = stderr_str.lower()
    if "no controllers registered" in lower:
        return "No Juju controllers are registered with the local client."
    if "no selected controller" in lower or "no current controller" in lower:
        return "No Juju controller is currently selected."
    if "not found" in lower and "controller" in lower:
        return "The current Juju controller was not found."
    return None


def build_show_controller_command(cli_path: str = "juju") -> List[str]:
    return [cli_path, *SHOW_CONTROLLER_ARGS]


def parse_show_controller_output(
    raw_output: str,
    *,
    allow_empty: bool = False,
) -> ControllerConfig:
    """
    Parse the JSON printed by `juju show-controller --format=json`.

    The first controller entry is used; its name is ignored. When the CLI
    reports several controllers, which one is picked is not guaranteed.

    Args:
        raw_output (str): The CLI's stdout.
        allow_empty (bool): If True, an empty object yields a ControllerConfig
            with every field empty instead of raising NoControllerFound.

    Returns:
        ControllerConfig: The parsed controller entry.

    Raises:
        MalformedControllerOutput: Output is not JSON or not a JSON object.
        ControllerShapeMismatch: The selected entry has wrongly typed fields.
        NoControllerFound: The object is empty and `allow_empty` is False.
    """
    try:
        decoded: Any = json.loads(raw_output)
    except json.JSONDecodeError as exc:
        raise MalformedControllerOutput(
            f"Juju CLI output is not valid JSON: {exc}"
        ) from exc
    except RecursionError as exc:
        raise MalformedControllerOutput(
            "Juju CLI output is nested too deeply to decode."
        ) from exc

    if not isinstance(decoded, dict):
        raise MalformedControllerOutput(
            f"Expected a JSON object keyed by controller name, got {type(decoded).__name__}."
        )

    if not decoded:
        if allow_empty:
            logger.warning("Juju CLI reported no controllers; using empty values.")
            return ControllerConfig()
        raise NoControllerFound("Juju CLI output contains no controllers.")

    name, entry = next(iter(decoded.items()))
    if len(decoded) > 1:
        logger.warning(
            "Juju CLI reported %d controllers; using %r.", len(decoded), name
        )

    try:
        return validate_type(entry, ControllerConfig)
    except ValueError as exc:
        raise ControllerShapeMismatch(
            f"Unexpected structure for controller {name!r}: {exc}"
        ) from exc


async def show_controller(settings: Optional[JujuCliSettings] = None) -> ControllerConfig:
    """
    Run `juju show-controller --show-password --format=json` once and parse it.

    The command is attempted a single time; its output contains a password, so
    command details are kept out of error messages.

    Args:
        settings (Optional[JujuCliSettings]): CLI location and parsing options.
            Read from the environment when omitted.

    Returns:
        ControllerConfig: The current controller's configuration.

    Raises:
        CommandError: If the CLI cannot be run or exits with a non-zero code.
        ControllerOutputError: If the output cannot be parsed.
    """
    settings = settings or JujuCliSettings()
    raw_output = await run_command(
        build_show_controller_command(settings.cli_path),
        sensitive=True,
        timeout=settings.timeout_seconds,
        error_parser=juju_error_parser,
    )
    return parse_show_controller_output(
        raw_output, allow_empty=settings.allow_empty_output
    )
