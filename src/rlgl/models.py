from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class SessionConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    host: str = ""
    key: str = ""
    proxy: str = ""
    proxy_auth: str = ""

    def logged_in(self) -> bool:
        return bool(self.host) and bool(self.key)


class EvaluationRequest(BaseModel):
    policy: str
    id: str
    # Always empty on the wire; the server still expects the field.
    name: str = ""
    ref: str
    title: Optional[str] = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


class Verdict(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    UNKNOWN = "unknown"

    @property
    def exit_code(self) -> int:
        return {Verdict.PASS: 0, Verdict.FAIL: 1}.get(self, 2)
