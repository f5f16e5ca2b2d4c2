"""
Cleaner configuration: YAML file values overlaid by environment variables
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

import yaml

DEFAULT_CONFIG_FILE = "az_cleaner_config.yaml"
DEFAULT_APPLICATION_FILTER = "displayName eq 'ipt-app-registration-cleaner'"
DEFAULT_RETENTION_MONTHS = 3

ENV_KEYS = ("TENANT_ID", "CLIENT_ID", "CLIENT_SECRET", "REPORT_ONLY", "APPLICATION_FILTER", "RETENTION_MONTHS")
REQUIRED_KEYS = ("TENANT_ID", "CLIENT_ID", "CLIENT_SECRET")


def load_config(config_file_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> dict:
    """
    Load configuration from a YAML file and the environment.

    An explicitly given file must exist; the default file is optional.
    Environment variables take precedence over file values.
    """

    if environ is None:
        environ = os.environ

    config = {}
    path = config_file_path or DEFAULT_CONFIG_FILE
    if os.path.exists(path):
        with open(path, 'r') as f:
            config = yaml.safe_load(f) or {}
        if not isinstance(config, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
    elif config_file_path:
        raise FileNotFoundError(f"Configuration file not found: {config_file_path}")

    for key in ENV_KEYS:
        if environ.get(key) is not None:
            config[key] = environ[key]

    return config


def parse_report_only(value) -> bool:
    """Anything other than an explicit false keeps the run report-only"""
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() != "false"


@dataclass(frozen=True)
class CleanerConfig:
    tenant_id: str
    client_id: str
    client_secret: str
    report_only: bool = True
    application_filter: str = DEFAULT_APPLICATION_FILTER
    retention_months: int = DEFAULT_RETENTION_MONTHS

    @classmethod
    def from_mapping(cls, config: Mapping) -> "CleanerConfig":
        missing = [key for key in REQUIRED_KEYS if not config.get(key)]
        if missing:
            raise ValueError(f"Missing required configuration: {', '.join(missing)}")

        try:
            retention_months = int(config.get("RETENTION_MONTHS", DEFAULT_RETENTION_MONTHS))
        except (TypeError, ValueError):
            raise ValueError(f"RETENTION_MONTHS must be an integer, got {config.get('RETENTION_MONTHS')!r}")
        if retention_months <= 0:
            raise ValueError(f"RETENTION_MONTHS must be positive, got {retention_months}")

        return cls(
            tenant_id=str(config["TENANT_ID"]),
            client_id=str(config["CLIENT_ID"]),
            client_secret=str(config["CLIENT_SECRET"]),
            report_only=parse_report_only(config.get("REPORT_ONLY")),
            application_filter=config.get("APPLICATION_FILTER") or DEFAULT_APPLICATION_FILTER,
            retention_months=retention_months,
        )

    def describe(self) -> dict:
        """Printable view of the configuration with the secret masked"""
        return {
            "TENANT_ID": self.tenant_id,
            "CLIENT_ID": self.client_id,
            "CLIENT_SECRET": "********",
            "REPORT_ONLY": self.report_only,
            "APPLICATION_FILTER": self.application_filter,
            "RETENTION_MONTHS": self.retention_months,
        }
