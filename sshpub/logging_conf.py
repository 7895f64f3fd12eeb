"""Logging setup for the sshpub server.

Log lines may carry loader errors that quote the input, so every record is
redacted after %-formatting: private key blocks (PEM, PKCS#8, OpenSSH) and
``password=``-style values never reach a handler. Public key lines are kept
verbatim, they are the point of the tool.
"""
import json
import logging
import os
import re
from typing import Any

from .settings import Settings

_SECRET_KV = re.compile(r"(pass(word|phrase)?|token|secret)\s*[=:]\s*([^\s,;]+)", re.IGNORECASE)
_PRIV_BLOCK = re.compile(
    r"-----BEGIN ((?:RSA |EC |OPENSSH |ENCRYPTED )?PRIVATE KEY)-----.*?(?:-----END \1-----|\Z)",
    re.DOTALL,
)
# base64 of "openssh-key-v1\0", the start of an OpenSSH private key body
_OPENSSH_BODY = re.compile(r"b3BlbnNzaC1rZXktdjEA[A-Za-z0-9+/=\s]*")

_CONFIGURED = "_sshpub_configured"


def redact(text: str) -> str:
    text = _PRIV_BLOCK.sub("[REDACTED-PRIVATE-KEY]", text)
    text = _OPENSSH_BODY.sub("[REDACTED-PRIVATE-KEY]", text)
    return _SECRET_KV.sub(lambda m: f"{m.group(1)}=[REDACTED]", text)


class RedactFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            message = str(record.msg)
        record.msg = redact(message)
        record.args = None
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # set through `extra=` by the tool layer
        for attr in ("error_code", "key_type"):
            val = getattr(record, attr, None)
            if val is not None:
                payload[attr] = val
        if record.exc_info:
            payload["exc_info"] = redact(self.formatException(record.exc_info))
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(settings: Settings, json_mode: bool | None = None) -> None:
    root = logging.getLogger()
    if getattr(root, _CONFIGURED, False):
        return

    level = getattr(logging, settings.LOG_LEVEL, logging.INFO)
    root.setLevel(level)

    if json_mode is None:
        json_mode = os.getenv("SSHPUB_LOG_JSON", "false").lower() in ("1", "true", "yes")

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.addFilter(RedactFilter())
    handler.setFormatter(JsonFormatter() if json_mode else logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)

    setattr(root, _CONFIGURED, True)
