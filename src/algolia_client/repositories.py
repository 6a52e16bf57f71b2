from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
from urllib.parse import quote, urlencode

from . import codec
from .batch import OBJECT_ID, add_object_ids, build_batch
from .dispatcher import Dispatcher
from .models import BatchRequest
from .outcomes import IdentifierMissing, Outcome, Success, WaitOutcome
from .tasks import TaskWaiter
from .types import BatchAction, Permission


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


def _param(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return codec.encode(value).decode("utf-8")
    return str(value)


def query_string(params: Mapping[str, Any]) -> str:
    return urlencode({k: _param(v) for k, v in params.items() if v is not None})


def with_index_name(outcome: Outcome, index_name: str) -> Outcome:
    """Tag a successful body with the index it belongs to, for ``wait``."""
    if isinstance(outcome, Success) and isinstance(outcome.body, dict):
        return Success(body={**outcome.body, "indexName": index_name})
    return outcome


class IndexRepository:
    """Object, batch and index level operations.

    Reads go out with the search key, everything that mutates uses the write
    key. Mutations return the decoded body with ``indexName`` added.
    """

    def __init__(self, dispatcher: Dispatcher, waiter: Optional[TaskWaiter] = None):
        self._dispatcher = dispatcher
        self._waiter = waiter or TaskWaiter(dispatcher)

    def _read(self, method: str, path: str, body: Any = None) -> Outcome:
        return self._dispatcher.dispatch(Permission.READ, method, path, b"" if body is None else codec.encode(body))

    def _write(self, index_name: str, method: str, path: str, body: Any = None) -> Outcome:
        outcome = self._dispatcher.dispatch(Permission.WRITE, method, path, b"" if body is None else codec.encode(body))
        return with_index_name(outcome, index_name)

    # --- search ---
    def search(self, index_name: str, query: str = "", **params) -> Outcome:
        path = f"{_segment(index_name)}?query={quote(query, safe='')}"
        extra = query_string(params)
        if extra:
            path = f"{path}&{extra}"
        return self._read("GET", path)

    def search_multiple(self, queries: Union[Iterable[Mapping[str, Any]], Mapping[str, Any]]) -> Outcome:
        if isinstance(queries, Mapping):
            return self._read("POST", "*/queries", queries)
        requests = []
        for q in queries:
            q = codec.normalize_object(q)
            if isinstance(q.get("params"), Mapping):
                q = {**q, "params": query_string(q["params"])}
            requests.append(q)
        return self._read("POST", "*/queries", {"requests": requests})

    # --- objects ---
    def get_object(self, index_name: str, object_id: Union[str, int]) -> Outcome:
        outcome = self._read("GET", f"{_segment(index_name)}/{_segment(object_id)}")
        return with_index_name(outcome, index_name)

    def save_object(self, index_name: str, obj: Any, object_id: Optional[Union[str, int]] = None, id_attribute: Any = OBJECT_ID) -> Outcome:
        body = codec.normalize_object(obj)
        if object_id is None:
            prepared = add_object_ids([body], id_attribute)
            if isinstance(prepared, IdentifierMissing):
                return prepared
            body = prepared[0]
            object_id = body.get(OBJECT_ID)
            if object_id is None:
                return IdentifierMissing(attribute=OBJECT_ID)
        return self._write(index_name, "PUT", f"{_segment(index_name)}/{_segment(object_id)}", body)

    # upsert semantics are identical on the service side
    update_object = save_object

    def partial_update_object(
        self,
        index_name: str,
        obj: Any,
        object_id: Optional[Union[str, int]] = None,
        id_attribute: Any = OBJECT_ID,
        create_if_not_exists: bool = True,
    ) -> Outcome:
        body = codec.normalize_object(obj)
        if object_id is None:
            prepared = add_object_ids([body], id_attribute)
            if isinstance(prepared, IdentifierMissing):
                return prepared
            body = prepared[0]
            object_id = body.get(OBJECT_ID)
            if object_id is None:
                return IdentifierMissing(attribute=OBJECT_ID)
        path = f"{_segment(index_name)}/{_segment(object_id)}/partial"
        if not create_if_not_exists:
            path = f"{path}?createIfNotExists=false"
        return self._write(index_name, "POST", path, body)

    def delete_object(self, index_name: str, object_id: Union[str, int]) -> Outcome:
        return self._write(index_name, "DELETE", f"{_segment(index_name)}/{_segment(object_id)}")

    # --- batches ---
    def batch(self, index_name: str, batch: BatchRequest) -> Outcome:
        return self._write(index_name, "POST", f"{_segment(index_name)}/batch", batch.to_payload())

    def _build_and_send(self, index_name: str, objects: Iterable[Any], action: BatchAction, id_attribute: Any) -> Outcome:
        batch = build_batch(objects, action, id_attribute)
        if isinstance(batch, IdentifierMissing):
            return batch
        return self.batch(index_name, batch)

    def save_objects(self, index_name: str, objects: Iterable[Any], id_attribute: Any = OBJECT_ID) -> Outcome:
        return self._build_and_send(index_name, objects, BatchAction.UPDATE_OBJECT, id_attribute)

    def add_objects(self, index_name: str, objects: Iterable[Any]) -> Outcome:
        return self._build_and_send(index_name, objects, BatchAction.ADD_OBJECT, OBJECT_ID)

    def partial_update_objects(self, index_name: str, objects: Iterable[Any], id_attribute: Any = OBJECT_ID, create_if_not_exists: bool = True) -> Outcome:
        action = BatchAction.PARTIAL_UPDATE_OBJECT if create_if_not_exists else BatchAction.PARTIAL_UPDATE_OBJECT_NO_CREATE
        return self._build_and_send(index_name, objects, action, id_attribute)

    def delete_objects(self, index_name: str, objects: Iterable[Any], id_attribute: Any = OBJECT_ID) -> Outcome:
        """Delete by objects or bare object ids in a single batch."""
        attribute = codec.canonical_key(id_attribute)
        bodies: List[Dict[str, Any]] = []
        for item in objects:
            if isinstance(item, bool):
                return IdentifierMissing(attribute=attribute)
            if isinstance(item, (str, int)):
                bodies.append({OBJECT_ID: item})
                continue
            object_id = codec.normalize_object(item).get(attribute)
            if object_id is None:
                return IdentifierMissing(attribute=attribute)
            bodies.append({OBJECT_ID: object_id})
        return self._build_and_send(index_name, bodies, BatchAction.DELETE_OBJECT, OBJECT_ID)

    # --- indexes ---
    def list_indexes(self) -> Outcome:
        return self._read("GET", "")

    def clear_index(self, index_name: str) -> Outcome:
        return self._write(index_name, "POST", f"{_segment(index_name)}/clear")

    def delete_index(self, index_name: str) -> Outcome:
        return self._write(index_name, "DELETE", _segment(index_name))

    def get_settings(self, index_name: str) -> Outcome:
        return self._read("GET", f"{_segment(index_name)}/settings")

    def set_settings(self, index_name: str, settings: Any) -> Outcome:
        return self._write(index_name, "PUT", f"{_segment(index_name)}/settings", settings)

    def _operation(self, operation: str, src_index: str, dst_index: str) -> Outcome:
        body = {"operation": operation, "destination": dst_index}
        return self._write(src_index, "POST", f"{_segment(src_index)}/operation", body)

    def move_index(self, src_index: str, dst_index: str) -> Outcome:
        return self._operation("move", src_index, dst_index)

    def copy_index(self, src_index: str, dst_index: str) -> Outcome:
        return self._operation("copy", src_index, dst_index)

    # --- tasks ---
    def get_task_status(self, index_name: str, task_id: Union[int, str]) -> Outcome:
        return self._waiter.status(index_name, task_id)

    def wait_task(self, index_name: str, task_id: Union[int, str], poll_interval: Optional[float] = None, **bounds) -> WaitOutcome:
        return self._waiter.wait_task(index_name, task_id, poll_interval, **bounds)

    def wait(self, response: Any, poll_interval: Optional[float] = None, **bounds) -> Any:
        return self._waiter.wait(response, poll_interval, **bounds)
