import os
from dataclasses import dataclass

DEFAULT_TARGET_URL = "http://mini-qr:80"
DEFAULT_PORT = 3000


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ServiceConfig:
    target_url: str = DEFAULT_TARGET_URL
    port: int = DEFAULT_PORT
    ui_generation: int = 1
    max_concurrency: int = 0
    headless: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """
        Build the configuration from environment variables.
        Unset variables fall back to the defaults declared on the class.
        """
        return cls(
            target_url=os.getenv("MINI_QR_URL", DEFAULT_TARGET_URL),
            port=int(os.getenv("PORT", str(DEFAULT_PORT))),
            ui_generation=int(os.getenv("QR_UI_GENERATION", "1")),
            max_concurrency=max(0, int(os.getenv("QR_MAX_CONCURRENCY", "0"))),
            headless=_env_flag("QR_HEADLESS", "true"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
