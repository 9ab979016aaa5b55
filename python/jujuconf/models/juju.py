"""
jujuconf/models/juju.py

Pydantic models for the JSON printed by
`juju show-controller --show-password --format=json`, plus the flattened
environment-style mapping derived from it.

The CLI output is keyed by controller name; these models describe a single
controller entry. Unknown fields are ignored and missing (or null) fields fall
back to empty values, so only wrongly typed fields fail validation.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator

JUJU_CONTROLLER_ADDRESSES = "JUJU_CONTROLLER_ADDRESSES"
JUJU_CA_CERT = "JUJU_CA_CERT"
JUJU_USERNAME = "JUJU_USERNAME"
JUJU_PASSWORD = "JUJU_PASSWORD"

CONTROLLER_ENV_KEYS = (
    JUJU_CONTROLLER_ADDRESSES,
    JUJU_CA_CERT,
    JUJU_USERNAME,
    JUJU_PASSWORD,
)

REDACTED = "<redacted>"


class _JujuOutputModel(BaseModel):
    """Common configuration for models parsed from Juju CLI output."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # null behaves like an absent field
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ControllerDetails(_JujuOutputModel):
    """The `details` block of a controller entry."""

    uuid: str = ""
    api_endpoints: List[str] = Field(default_factory=list, alias="api-endpoints")
    cloud: str = ""
    region: str = ""
    agent_version: str = Field(default="", alias="agent-version")
    agent_git_commit: str = Field(default="", alias="agent-git-commit")
    controller_model_version: str = Field(
        default="", alias="controller-model-version"
    )
    mongo_version: str = Field(default="", alias="mongo-version")
    ca_fingerprint: str = Field(default="", alias="ca-fingerprint")
    ca_cert: str = Field(default="", alias="ca-cert")


class ModelSummary(_JujuOutputModel):
    uuid: str = ""
    unit_count: int = Field(default=0, ge=0, alias="unit-count")


class ControllerAccount(_JujuOutputModel):
    """Credentials of the account used to reach the controller."""

    user: str = ""
    password: str = ""
    access: str = ""


class ControllerConfig(_JujuOutputModel):
    """
    One controller entry from `juju show-controller`.

    Only the endpoints, CA certificate, user and password are surfaced through
    `to_env`; the remaining fields are parsed for completeness.
    """

    details: ControllerDetails = Field(default_factory=ControllerDetails)
    current_model: str = Field(default="", alias="current-model")
    models: Dict[str, ModelSummary] = Field(default_factory=dict)
    account: ControllerAccount = Field(default_factory=ControllerAccount)

    def to_env(self) -> Dict[str, str]:
        """
        Flatten into the four environment-style keys.

        Returns:
            A dict with exactly the keys in CONTROLLER_ENV_KEYS.
        """
        return {
            JUJU_CONTROLLER_ADDRESSES: ",".join(self.details.api_endpoints),
            JUJU_CA_CERT: self.details.ca_cert,
            JUJU_USERNAME: self.account.user,
            JUJU_PASSWORD: self.account.password,
        }


def redact_env(env: Dict[str, str]) -> Dict[str, str]:
    """Return a copy of `env` with a non-empty password replaced by a marker."""
    return {
        key: (REDACTED if key == JUJU_PASSWORD and value else value)
        for key, value in env.items()
    }
