"""Settings read from the environment (and a .env file at the repo root, if present)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parent.parent.parent

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    return default


@dataclass(frozen=True)
class Settings:
    # When false, outgoing contact shares are rejected.
    sending_enabled: bool = True
    # Whether device photos come along when a native record is imported.
    import_native_avatars: bool = True
    # Region for numbers without a country code (ISO 3166 alpha-2), e.g. "US".
    default_region: str | None = None


def load_settings(*, load_env_file: bool = True) -> Settings:
    """Build Settings from CONTACTSHARE_* environment variables."""
    if load_env_file:
        for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
            if path.exists():
                load_dotenv(path)
                break
    region = os.environ.get("CONTACTSHARE_DEFAULT_REGION", "").strip().upper() or None
    return Settings(
        sending_enabled=_flag("CONTACTSHARE_SENDING_ENABLED", True),
        import_native_avatars=_flag("CONTACTSHARE_IMPORT_NATIVE_AVATARS", True),
        default_region=region,
    )
