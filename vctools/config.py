import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_file: str | None = None
    memo_size: int = 128


def load_settings(env_file: str | None = None) -> Settings:
    """Read settings from the environment, after loading a .env file if present."""
    load_dotenv(env_file)
    memo_raw = os.getenv("VCTOOLS_MEMO_SIZE", "128")
    try:
        memo_size = max(0, int(memo_raw))
    except ValueError:
        raise ValueError(f"VCTOOLS_MEMO_SIZE must be an integer, got {memo_raw!r}") from None
    return Settings(
        log_level=os.getenv("VCTOOLS_LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("VCTOOLS_LOG_FILE") or None,
        memo_size=memo_size,
    )
