"""CLI configuration loaded from YAML and environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..cleanup.cleaner import MAX_INSTANCE_PAGES

DEFAULT_CONFIG_PATH = Path.home() / ".amicleaner" / "config.yaml"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


def _parse_pages(value: Any) -> int:
    try:
        pages = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid max_instance_pages: {value!r}")
    if pages < 1:
        raise ValueError("max_instance_pages must be at least 1")
    return pages


@dataclass
class Config:
    """Runtime configuration.

    Precedence, lowest to highest: defaults, YAML file, environment, CLI options.

    Attributes:
        aws_profile: AWS profile name (optional)
        region: AWS region (optional, SDK default otherwise)
        log_level: Log level name
        dry_run: Default for the delete command's --dryrun flag
        max_instance_pages: Page cap for instance listing
    """

    aws_profile: Optional[str] = None
    region: Optional[str] = None
    log_level: str = "INFO"
    dry_run: bool = False
    max_instance_pages: int = MAX_INSTANCE_PAGES

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load configuration.

        Args:
            path: YAML file path (default: $AMICLEANER_CONFIG or ~/.amicleaner/config.yaml)

        Returns:
            Config instance

        Raises:
            ValueError: If the file is not valid YAML or a value is invalid
        """
        config = cls()

        config_path = Path(path or os.environ.get("AMICLEANER_CONFIG") or DEFAULT_CONFIG_PATH)
        if config_path.is_file():
            config._apply(cls._read_file(config_path))

        config._apply_env()
        return config

    @staticmethod
    def _read_file(config_path: Path) -> Dict[str, Any]:
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid config file {config_path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Invalid config file {config_path}: expected a mapping")
        return data

    def _apply(self, data: Dict[str, Any]) -> None:
        if data.get("aws_profile"):
            self.aws_profile = str(data["aws_profile"])
        if data.get("region"):
            self.region = str(data["region"])
        if data.get("log_level"):
            self.log_level = str(data["log_level"]).upper()
        if "dry_run" in data:
            self.dry_run = _parse_bool(data["dry_run"], "dry_run")
        if "max_instance_pages" in data:
            self.max_instance_pages = _parse_pages(data["max_instance_pages"])

    def _apply_env(self) -> None:
        env = os.environ
        if env.get("AWS_PROFILE"):
            self.aws_profile = env["AWS_PROFILE"]
        region = env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION")
        if region:
            self.region = region
        if env.get("AMICLEANER_LOG_LEVEL"):
            self.log_level = env["AMICLEANER_LOG_LEVEL"].upper()
        if "AMICLEANER_DRY_RUN" in env:
            self.dry_run = _parse_bool(env["AMICLEANER_DRY_RUN"], "AMICLEANER_DRY_RUN")
        if env.get("AMICLEANER_MAX_INSTANCE_PAGES"):
            self.max_instance_pages = _parse_pages(env["AMICLEANER_MAX_INSTANCE_PAGES"])
