"""
Configuration path management and runtime settings.

Centralizes all file path resolution to avoid hardcoded relative paths
that depend on working directory. Secrets and collaborator endpoints come
from the environment (optionally seeded from a project-level .env file).
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Calculate project root: go up from lead_qualifier/core/config.py -> lead_qualifier -> project root
_PROJECT_ROOT = Path(__file__).parent.parent.parent.resolve()

load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

# Directory paths
CONFIG_DIR = _PROJECT_ROOT / "config"
DATA_DIR = _PROJECT_ROOT / "data"
PUBLIC_DIR = _PROJECT_ROOT / "public"
CASES_DIR = _PROJECT_ROOT / "cases"

# Support environment variable override (for testing/deployment)
if os.getenv("LEAD_QUALIFIER_CONFIG_DIR"):
    CONFIG_DIR = Path(os.getenv("LEAD_QUALIFIER_CONFIG_DIR")).resolve()
if os.getenv("LEAD_QUALIFIER_DATA_DIR"):
    DATA_DIR = Path(os.getenv("LEAD_QUALIFIER_DATA_DIR")).resolve()


def get_config_path(filename: str) -> Path:
    """Get absolute path to a config file."""
    path = CONFIG_DIR / filename
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            f"Config directory: {CONFIG_DIR}\n"
            f"Project root: {_PROJECT_ROOT}"
        )
    return path


def get_data_path(filename: str) -> Path:
    """Get absolute path to a data file. The file itself may not exist yet."""
    return DATA_DIR / filename


def _env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


class Settings:
    """Collaborator credentials and server options read from the environment."""

    def __init__(self) -> None:
        # Server
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "3000"))

        # Slack (notification sink)
        self.slack_bot_token: Optional[str] = _env("SLACK_BOT_TOKEN")
        self.slack_channel_id: Optional[str] = _env("SLACK_CHANNEL_ID")

        # Notion (secondary database for HIGH leads)
        self.notion_token: Optional[str] = _env("NOTION_TOKEN")
        self.notion_database_id: Optional[str] = _env("NOTION_DATABASE_ID")

        # SMTP (auto-response)
        self.smtp_host: Optional[str] = _env("SMTP_HOST")
        self.smtp_port: int = int(os.getenv("SMTP_PORT", "587"))
        self.smtp_user: Optional[str] = _env("SMTP_USER")
        self.smtp_pass: Optional[str] = _env("SMTP_PASS")
        self.smtp_from: Optional[str] = _env("SMTP_FROM")

    @property
    def slack_configured(self) -> bool:
        return bool(self.slack_bot_token and self.slack_channel_id)

    @property
    def notion_configured(self) -> bool:
        return bool(self.notion_token and self.notion_database_id)

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_pass and self.smtp_from)

    def missing(self) -> list[str]:
        """Names of collaborator groups that are not fully configured."""
        groups = []
        if not self.slack_configured:
            groups.append("SLACK_BOT_TOKEN/SLACK_CHANNEL_ID")
        if not self.notion_configured:
            groups.append("NOTION_TOKEN/NOTION_DATABASE_ID")
        if not self.smtp_configured:
            groups.append("SMTP_*")
        return groups


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
