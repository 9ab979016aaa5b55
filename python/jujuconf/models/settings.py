# jujuconf/models/settings.py

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class JujuCliSettings(BaseSettings):
    """
    Pydantic settings for reading controller configuration from the local
    Juju CLI. Fields map to environment variables prefixed with `JUJUCONF_`,
    e.g. `JUJUCONF_CLI_PATH=/snap/bin/juju`.
    """

    model_config = SettingsConfigDict(env_prefix="JUJUCONF_")

    cli_path: str = "juju"
    # None => wait for the CLI indefinitely
    timeout_seconds: Optional[float] = None
    # True => `{}` output yields four empty values instead of a failure
    allow_empty_output: bool = False
    # True => the success debug line carries the plaintext password
    log_credentials: bool = False
