import os
from dataclasses import dataclass, field


def _positive_int(name: str, default: int) -> int:
    try:
        val = int(os.getenv(name, str(default)))
        if val <= 0:
            raise ValueError
    except ValueError:
        val = default
    return val


@dataclass(frozen=True)
class Settings:
    LOG_LEVEL: str = field(default="INFO")
    DEFAULT_RSA_BITS: int = field(default=2048)
    MIN_RSA_BITS: int = field(default=2048)

    @staticmethod
    def from_env() -> "Settings":
        log_level = os.getenv("SSHPUB_LOG_LEVEL", "INFO").upper()
        return Settings(
            LOG_LEVEL=log_level,
            DEFAULT_RSA_BITS=_positive_int("SSHPUB_DEFAULT_RSA_BITS", 2048),
            MIN_RSA_BITS=_positive_int("SSHPUB_MIN_RSA_BITS", 2048),
        )
