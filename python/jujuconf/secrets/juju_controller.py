"""
jujuconf/secrets/juju_controller.py

Process-wide access to the local Juju controller credentials.

The Juju CLI is queried at most once per provider: concurrent first callers,
whether tasks on one event loop or threads each running their own loop, share
a single attempt, and its outcome (success or failure) is final. On success
callers receive the flattened mapping:

    JUJU_CONTROLLER_ADDRESSES, JUJU_CA_CERT, JUJU_USERNAME, JUJU_PASSWORD

Any failure is logged with its cause and surfaced to callers only as
ControllerConfigUnavailable.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Future
from typing import Dict, Optional

from pydantic import ValidationError

from jujuconf.models.juju import redact_env
from jujuconf.models.settings import JujuCliSettings
from jujuconf.utils.async_command_runner import CommandError
from jujuconf.utils.juju import ControllerOutputError, show_controller

logger = logging.getLogger(__name__)


class ControllerConfigUnavailable(RuntimeError):
    """Raised when the local Juju CLI could not provide controller configuration."""

    def __init__(self, message: str = "the Juju CLI could not be accessed") -> None:
        super().__init__(message)


class ControllerConfigProvider:
    """
    Lazily queries the Juju CLI once and caches the flattened configuration.

    The attempt runs on its own worker thread and event loop. Its outcome is a
    concurrent.futures.Future, so callers on any thread or loop can wait for
    it, and neither a cancelled caller nor a closed caller loop aborts it.
    """

    def __init__(self, settings: Optional[JujuCliSettings] = None) -> None:
        self._settings = settings
        self._config: Optional[Dict[str, str]] = None
        self._lock = threading.Lock()
        self._outcome: Optional[Future[None]] = None

    @property
    def attempted(self) -> bool:
        """True once the single query has finished, successfully or not."""
        outcome = self._outcome
        return outcome is not None and outcome.done()

    async def get_config(self) -> Dict[str, str]:
        """
        Return the controller configuration, querying the CLI on first use.

        Returns:
            Dict[str, str]: A copy of the cached four-key mapping.

        Raises:
            ControllerConfigUnavailable: If the single query did not succeed.
        """
        outcome = self._start_attempt()
        if not outcome.done():
            await asyncio.wrap_future(outcome)
        return self._result()

    def get_config_blocking(self) -> Dict[str, str]:
        """
        Same as get_config, for threads without an event loop.

        Raises:
            ControllerConfigUnavailable: If the single query did not succeed.
        """
        self._start_attempt().result()
        return self._result()

    def _result(self) -> Dict[str, str]:
        if self._config is None:
            raise ControllerConfigUnavailable()
        return dict(self._config)

    def _start_attempt(self) -> Future[None]:
        with self._lock:
            if self._outcome is None:
                outcome: Future[None] = Future()
                # running futures cannot be cancelled by waiters
                outcome.set_running_or_notify_cancel()
                self._outcome = outcome
                threading.Thread(
                    target=self._run_attempt,
                    name="jujuconf-show-controller",
                    daemon=True,
                ).start()
            return self._outcome

    def _run_attempt(self) -> None:
        assert self._outcome is not None
        try:
            asyncio.run(self._populate())
        except Exception:
            logger.exception("Unexpected error querying Juju CLI")
        finally:
            self._outcome.set_result(None)

    async def _populate(self) -> None:
        try:
            settings = self._settings or JujuCliSettings()
        except ValidationError as exc:
            logger.error("Invalid Juju CLI settings: %s", exc)
            return

        try:
            controller = await show_controller(settings)
        except CommandError as exc:
            logger.error("Error invoking Juju CLI: %s", exc)
            return
        except ControllerOutputError as exc:
            logger.error("Error parsing Juju CLI output: %s", exc)
            return

        config = controller.to_env()
        self._config = config

        logged = config if settings.log_credentials else redact_env(config)
        logger.debug("Local provider config was set: %r", logged)


_default_provider_lock = threading.Lock()
_default_provider: Optional[ControllerConfigProvider] = None


def _get_default_provider() -> ControllerConfigProvider:
    global _default_provider
    with _default_provider_lock:
        if _default_provider is None:
            _default_provider = ControllerConfigProvider()
        return _default_provider


async def get_local_controller_config() -> Dict[str, str]:
    """
    Return the local Juju controller configuration for this process.

    The CLI is run on the first call only; settings come from `JUJUCONF_*`
    environment variables at that point.

    Raises:
        ControllerConfigUnavailable: If the Juju CLI could not be accessed.
    """
    return await _get_default_provider().get_config()


def get_local_controller_config_blocking() -> Dict[str, str]:
    """Blocking variant of get_local_controller_config for plain threads."""
    return _get_default_provider().get_config_blocking()


def reset_local_controller_config() -> None:
    """Forget the process-wide provider so the next call queries the CLI again."""
    global _default_provider
    with _default_provider_lock:
        _default_provider = None
