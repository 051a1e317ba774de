"""Runtime settings read from the environment (and a .env file, when present)."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from contactbook.infrastructure.contact_store import DEFAULT_CONTACTS_FILE

ENV_FILE = "CONTACTBOOK_FILE"
ENV_LOG_LEVEL = "CONTACTBOOK_LOG_LEVEL"
ENV_PAGE_SIZE = "CONTACTBOOK_PAGE_SIZE"
ENV_DEFAULT_REGION = "CONTACTBOOK_DEFAULT_REGION"

# Repo root: from src/contactbook/config.py go up to repo root
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent


def load_env_files() -> Path | None:
    """Load .env from repo root or current dir. Returns the file loaded, if any."""
    for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
        if path.exists():
            load_dotenv(path)
            return path
    return None


@dataclass(frozen=True)
class Settings:
    contacts_file: Path = Path(DEFAULT_CONTACTS_FILE)
    log_level: str = "WARNING"
    page_size: int = 10
    default_region: str | None = None

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        contacts_file = env.get(ENV_FILE, "").strip() or DEFAULT_CONTACTS_FILE
        log_level = env.get(ENV_LOG_LEVEL, "").strip().upper() or "WARNING"
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"{ENV_LOG_LEVEL} is not a logging level: {log_level!r}")
        page_size_text = env.get(ENV_PAGE_SIZE, "").strip() or "10"
        try:
            page_size = int(page_size_text)
        except ValueError:
            raise ValueError(f"{ENV_PAGE_SIZE} must be an integer, got {page_size_text!r}") from None
        if page_size < 1:
            raise ValueError(f"{ENV_PAGE_SIZE} must be at least 1")
        region = env.get(ENV_DEFAULT_REGION, "").strip().upper() or None
        return cls(
            contacts_file=Path(contacts_file).expanduser(),
            log_level=log_level,
            page_size=page_size,
            default_region=region,
        )
