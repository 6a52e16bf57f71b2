from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union

from .types import Permission


class Credentials(BaseModel):
    application_id: str
    api_key: str  # write (admin) key
    search_api_key: str

    class Config:
        frozen = True

    def key_for(self, permission: Permission) -> str:
        if permission == Permission.WRITE:
            return self.api_key
        return self.search_api_key

    def __repr__(self) -> str:
        # keys stay out of logs and tracebacks
        return f"Credentials(application_id={self.application_id!r})"

    __str__ = __repr__


class RequestDescriptor(BaseModel):
    permission: Permission
    method: str
    path: str
    body: bytes = b""

    class Config:
        frozen = True


class BatchOperation(BaseModel):
    action: str
    body: Dict[str, Any]
    objectID: Optional[Union[str, int]] = None

    class Config:
        frozen = True

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"action": self.action, "body": self.body}
        if self.objectID is not None:
            payload["objectID"] = self.objectID
        return payload


class BatchRequest(BaseModel):
    requests: List[BatchOperation] = Field(default_factory=list)

    class Config:
        frozen = True

    def to_payload(self) -> Dict[str, Any]:
        return {"requests": [op.to_payload() for op in self.requests]}

    def __len__(self) -> int:
        return len(self.requests)
