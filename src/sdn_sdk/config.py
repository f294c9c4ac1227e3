"""Client configuration."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from sdn_sdk.http import DEFAULT_PATH_PREFIX
from sdn_sdk.models.base import SDNModel
from sdn_sdk.sync import DEFAULT_POLL_TIMEOUT_MS

_ENV_PREFIX = "SDN_"
_ENV_FIELDS = ("endpoint", "wallet_address", "user_id", "access_token", "path_prefix")


class ClientConfig(SDNModel):
    """Connection settings for a :class:`~sdn_sdk.client.Client`.

    ``user_id`` and ``access_token`` are optional: when absent, call
    :meth:`Client.login` with a wallet signer to obtain them, then write
    ``client.config`` back with :meth:`save` so the next run skips login.

    A config file looks like::

        endpoint: https://node.example.com
        wallet_address: "0x..."
        user_id: "@0x...:node.example.com"
        access_token: syt_...

    Keys the SDK does not know (a wallet ``private_key``, for one) are ignored
    on load and therefore not written back by :meth:`save`.
    """

    endpoint: str
    wallet_address: str = ""
    user_id: str = ""
    access_token: str = ""
    path_prefix: str = DEFAULT_PATH_PREFIX
    timeout: float = 30.0
    sync_timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS

    @property
    def logged_in(self) -> bool:
        return bool(self.user_id and self.access_token)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ClientConfig:
        """Read ``SDN_ENDPOINT``, ``SDN_WALLET_ADDRESS``, ``SDN_USER_ID``, ``SDN_ACCESS_TOKEN`` and ``SDN_PATH_PREFIX``."""
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for field in _ENV_FIELDS:
            value = env.get(_ENV_PREFIX + field.upper())
            if value:
                values[field] = value
        return cls.model_validate(values)

    @classmethod
    def load(cls, path: str | Path) -> ClientConfig:
        """Load settings from a YAML file.

        Raises ``FileNotFoundError`` when the file is missing and a pydantic
        ``ValidationError`` when it lacks an ``endpoint``.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        return cls.model_validate(data)

    def save(self, path: str | Path) -> None:
        """Write settings, including credentials from a login, to a YAML file."""
        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(), f, sort_keys=False)
