"""Result values returned by every public client operation.

Expected failures never raise; callers branch on ``outcome.ok`` or ``match``
on the concrete class.
"""
from __future__ import annotations
from pydantic import BaseModel
from typing import Any, Optional, Union


class _Outcome(BaseModel):
    class Config:
        frozen = True

    @property
    def ok(self) -> bool:
        return False


class Success(_Outcome):
    body: Any = None

    @property
    def ok(self) -> bool:
        return True


class HttpError(_Outcome):
    status: int
    body: str = ""


class TransportExhausted(_Outcome):
    attempts: int
    message: str = "Unable to connect to Algolia"


class ParseError(_Outcome):
    status: Optional[int] = None  # unknown when the body could not be read
    body: str = ""
    message: str = ""


class IdentifierMissing(_Outcome):
    attribute: str

    @property
    def message(self) -> str:
        return f"id attribute `{self.attribute}` doesn't exist"


class Done(_Outcome):
    index_name: str
    task_id: Union[int, str]

    @property
    def ok(self) -> bool:
        return True


class TaskFailed(_Outcome):
    index_name: str
    task_id: Union[int, str]
    body: Any = None


class TaskTimeout(_Outcome):
    index_name: str
    task_id: Union[int, str]
    polls: int
    elapsed: Optional[float] = None


DispatchOutcome = Union[Success, HttpError, TransportExhausted, ParseError]
Outcome = Union[DispatchOutcome, IdentifierMissing]
WaitOutcome = Union[Done, TaskTimeout, TaskFailed, DispatchOutcome]
