"""
Client configuration for the CloudBucket SDK.

Settings come from constructor arguments, ``CLOUDBUCKET_*`` environment
variables and a JSON config file, with environment variables taking
precedence over the file.
"""

import os
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Union, Dict, Any

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path.home() / ".cloudbucket" / "config.json"

ENV_VARS = {
    "endpoint": "CLOUDBUCKET_ENDPOINT",
    "api_key": "CLOUDBUCKET_API_KEY",
    "session_token": "CLOUDBUCKET_SESSION_TOKEN",
    "timeout": "CLOUDBUCKET_TIMEOUT",
}


@dataclass
class ClientConfig:
    """Connection settings used by the transports."""

    endpoint: str
    api_key: Optional[str] = None
    session_token: Optional[str] = None
    timeout: float = 30

    def __post_init__(self):
        if not self.endpoint:
            raise ConfigurationError("Storage service endpoint is required.", config_key="endpoint")
        self.endpoint = self.endpoint.rstrip("/")

        try:
            self.timeout = float(self.timeout)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid timeout: {self.timeout!r}", config_key="timeout")
        if self.timeout <= 0:
            raise ConfigurationError("Timeout must be a positive number of seconds.", config_key="timeout")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientConfig":
        return cls(
            endpoint=data.get("endpoint"),
            api_key=data.get("api_key"),
            session_token=data.get("session_token"),
            timeout=data.get("timeout", 30),
        )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build configuration from ``CLOUDBUCKET_*`` environment variables."""
        return cls.from_dict(_read_env())

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "ClientConfig":
        """
        Load configuration from a JSON file, overridden by the environment.

        Args:
            path: Config file location (defaults to ~/.cloudbucket/config.json)

        Returns:
            ClientConfig instance
        """
        config_file = Path(path) if path else DEFAULT_CONFIG_FILE
        values: Dict[str, Any] = {}

        if config_file.exists():
            try:
                with open(config_file, "r") as f:
                    values = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                raise ConfigurationError(f"Failed to read config file {config_file}: {e}")
            if not isinstance(values, dict):
                raise ConfigurationError(f"Config file {config_file} must contain a JSON object")
            logger.debug("Loaded configuration from %s", config_file)

        values.update(_read_env())
        return cls.from_dict(values)

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Save configuration to a JSON file readable only by the owner."""
        config_file = Path(path) if path else DEFAULT_CONFIG_FILE
        config_file.parent.mkdir(parents=True, exist_ok=True)

        data = {key: value for key, value in asdict(self).items() if value is not None}
        try:
            with open(config_file, "w") as f:
                json.dump(data, f, indent=2)
            config_file.chmod(0o600)
        except IOError as e:
            raise ConfigurationError(f"Failed to save configuration: {e}")

        return config_file


def _read_env() -> Dict[str, Any]:
    values = {}
    for key, env_var in ENV_VARS.items():
        env_value = os.getenv(env_var)
        if env_value:
            values[key] = env_value
    return values
