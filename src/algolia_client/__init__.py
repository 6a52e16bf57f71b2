from .client import SearchClient
from .models import BatchOperation, BatchRequest, Credentials, RequestDescriptor
from .outcomes import (
    Done,
    HttpError,
    IdentifierMissing,
    ParseError,
    Success,
    TaskFailed,
    TaskTimeout,
    TransportExhausted,
)
from .settings import Settings, get_settings
from .types import BatchAction, Permission, TaskStatus

__all__ = [
    "SearchClient",
    "BatchOperation",
    "BatchRequest",
    "Credentials",
    "RequestDescriptor",
    "Done",
    "HttpError",
    "IdentifierMissing",
    "ParseError",
    "Success",
    "TaskFailed",
    "TaskTimeout",
    "TransportExhausted",
    "Settings",
    "get_settings",
    "BatchAction",
    "Permission",
    "TaskStatus",
]
