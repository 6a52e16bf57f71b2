from __future__ import annotations
from typing import Any, Dict, Iterable, List, Union

from .codec import canonical_key, normalize_object
from .models import BatchOperation, BatchRequest
from .outcomes import IdentifierMissing
from .types import BatchAction

OBJECT_ID = "objectID"


def _requires_object_id(action: str) -> bool:
    try:
        return BatchAction(action).requires_object_id
    except ValueError:
        # unknown actions are assumed to target an existing object
        return True


def add_object_ids(objects: Iterable[Any], id_attribute: Any = OBJECT_ID) -> Union[List[Dict[str, Any]], IdentifierMissing]:
    """Copy each object's ``id_attribute`` value into its ``objectID`` field.

    With the default attribute the objects are only normalised.
    """
    attribute = canonical_key(id_attribute)
    normalized = [normalize_object(o) for o in objects]
    if attribute == OBJECT_ID:
        return normalized
    out: List[Dict[str, Any]] = []
    for obj in normalized:
        object_id = obj.get(attribute)
        if object_id is None:
            return IdentifierMissing(attribute=attribute)
        out.append({**obj, OBJECT_ID: object_id})
    return out


def build_batch(objects: Iterable[Any], action: Union[str, BatchAction], id_attribute: Any = OBJECT_ID) -> Union[BatchRequest, IdentifierMissing]:
    action_name = canonical_key(action)
    prepared = add_object_ids(objects, id_attribute)
    if isinstance(prepared, IdentifierMissing):
        return prepared
    with_object_id = _requires_object_id(action_name)
    requests: List[BatchOperation] = []
    for obj in prepared:
        if not with_object_id:
            requests.append(BatchOperation(action=action_name, body=obj))
            continue
        object_id = obj.get(OBJECT_ID)
        if object_id is None:
            return IdentifierMissing(attribute=OBJECT_ID)
        requests.append(BatchOperation(action=action_name, body=obj, objectID=object_id))
    return BatchRequest(requests=requests)
