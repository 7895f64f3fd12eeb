from __future__ import annotations
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class WarningItem(BaseModel):
    code: str = Field(..., examples=["RSA_WEAK_KEY"])
    message: str
    severity: str = "warn"


class KeyLineSummary(BaseModel):
    type: str = Field(..., examples=["ssh-rsa", "ssh-ed25519"])
    authorized_key: str
    fingerprint_sha256: str = Field(..., pattern=r"^SHA256:[A-Za-z0-9+/]+$")
    key: Dict[str, Any]
    format: Optional[str] = Field(default=None, examples=["PEM", "DER", "OPENSSH"])
    warnings: List[WarningItem] = []


class ToolError(BaseModel):
    code: str = Field(..., examples=["UNSUPPORTED_KEY_TYPE"])
    message: str
    details: Dict[str, Any] = {}
