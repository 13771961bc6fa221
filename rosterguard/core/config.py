"""
core/config.py
--------------
Centralized configuration management for the rosterguard SDK.

The encryption secret is read once, at process start, from the
``ENCRYPTION_KEY`` environment variable (or a YAML config file) and handed to
:class:`~rosterguard.protection.cipher.PIICipher` by the caller.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

ENCRYPTION_KEY_ENV = "ENCRYPTION_KEY"

# Insecure development default; must be overridden in any real deployment.
DEV_DEFAULT_KEY = "default-key-change-this-12345"


class ConfigError(ValueError):
    """Raised when a configuration value or config file is invalid."""


@dataclass(frozen=True)
class GuardConfig:
    """
    Configuration object for the rosterguard pipeline.

    Attributes:
        encryption_key: Secret the AES-256 key is derived from.
        key_pad_char:   Filler character used to pad short secrets to 32 chars.
        mask_char:      Character substituted for hidden characters when masking.
        visible_count:  Number of trailing characters left visible by masking.
        id_column:      Roster column holding the identity number.
        mobile_column:  Roster column holding the mobile number.
    """

    encryption_key: str = DEV_DEFAULT_KEY
    key_pad_char: str = "0"
    mask_char: str = "*"
    visible_count: int = 4
    id_column: str = "id_number"
    mobile_column: str = "mobile"

    @property
    def uses_default_key(self) -> bool:
        return self.encryption_key == DEV_DEFAULT_KEY

    def validate(self) -> None:
        """Validate configuration values are within acceptable ranges."""
        if not self.encryption_key:
            raise ConfigError("encryption_key must not be empty.")
        if len(self.key_pad_char) != 1:
            raise ConfigError("key_pad_char must be a single character.")
        if len(self.mask_char) != 1:
            raise ConfigError("mask_char must be a single character.")
        if isinstance(self.visible_count, bool) or not isinstance(self.visible_count, int):
            raise ConfigError("visible_count must be an integer.")
        if self.visible_count < 0:
            raise ConfigError("visible_count must not be negative.")
        if not self.id_column or not self.mobile_column:
            raise ConfigError("id_column and mobile_column must be set.")

    # ------------------------------------------------------------------
    # Loaders
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GuardConfig":
        """
        Build a config from the process environment.

        Args:
            environ: Mapping to read from instead of :data:`os.environ`.

        Returns:
            A validated :class:`GuardConfig`.
        """
        env = os.environ if environ is None else environ
        key = env.get(ENCRYPTION_KEY_ENV) or DEV_DEFAULT_KEY
        config = cls(encryption_key=key)
        config.validate()
        config.warn_if_insecure()
        return config

    @classmethod
    def from_yaml(
        cls,
        path: str,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "GuardConfig":
        """
        Load configuration from a YAML file.

        Expected YAML structure::

            version: 1
            guard:
              mask_char: "*"
              visible_count: 4
              id_column: id_number

        ``encryption_key`` may be set in the ``guard`` section; when it is
        absent the ``ENCRYPTION_KEY`` environment variable is used.

        Raises:
            FileNotFoundError: If *path* does not exist.
            ConfigError:       If the file is malformed or has unknown keys.
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse config YAML: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError("Config file must be a YAML dictionary.")
        if "version" not in data:
            raise ConfigError("Config file missing top-level 'version' key.")

        section: Dict[str, Any] = data.get("guard") or {}
        if not isinstance(section, dict):
            raise ConfigError("Config file 'guard' section must be a mapping.")

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(section) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {unknown}")

        if not section.get("encryption_key"):
            env = os.environ if environ is None else environ
            section = dict(section, encryption_key=env.get(ENCRYPTION_KEY_ENV) or DEV_DEFAULT_KEY)

        try:
            config = cls(**section)
        except TypeError as exc:
            raise ConfigError(f"Invalid config values: {exc}") from exc
        config.validate()
        config.warn_if_insecure()
        return config

    def warn_if_insecure(self) -> None:
        if self.uses_default_key:
            logger.warning(
                "%s is not set; using the insecure development default key. "
                "Set it before deploying anywhere but a developer machine.",
                ENCRYPTION_KEY_ENV,
            )


# Singleton default config — callers may override by passing their own instance.
DEFAULT_CONFIG = GuardConfig()
