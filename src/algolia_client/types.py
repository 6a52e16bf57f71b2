from __future__ import annotations
from enum import Enum


class Permission(str, Enum):
    READ = "read"
    WRITE = "write"


class TaskStatus(str, Enum):
    PUBLISHED = "published"
    NOT_PUBLISHED = "notPublished"


class BatchAction(str, Enum):
    ADD_OBJECT = "addObject"
    UPDATE_OBJECT = "updateObject"
    PARTIAL_UPDATE_OBJECT = "partialUpdateObject"
    PARTIAL_UPDATE_OBJECT_NO_CREATE = "partialUpdateObjectNoCreate"
    DELETE_OBJECT = "deleteObject"

    @property
    def requires_object_id(self) -> bool:
        return self is not BatchAction.ADD_OBJECT
