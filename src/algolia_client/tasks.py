from __future__ import annotations
import logging
import time
from typing import Any, Callable, Optional, Union
from urllib.parse import quote

from .dispatcher import Dispatcher
from .outcomes import Done, Success, TaskFailed, TaskTimeout, WaitOutcome
from .types import Permission, TaskStatus

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 1.0


def task_path(index_name: str, task_id: Union[int, str]) -> str:
    return f"{quote(index_name, safe='')}/task/{quote(str(task_id), safe='')}"


class TaskWaiter:
    def __init__(
        self,
        dispatcher: Dispatcher,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._dispatcher = dispatcher
        self._poll_interval = poll_interval
        self._sleep = sleep
        self._clock = clock

    def status(self, index_name: str, task_id: Union[int, str]):
        return self._dispatcher.dispatch(Permission.WRITE, "GET", task_path(index_name, task_id))

    def wait_task(
        self,
        index_name: str,
        task_id: Union[int, str],
        poll_interval: Optional[float] = None,
        max_polls: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> WaitOutcome:
        """Block until the task is published.

        Polls forever unless ``max_polls`` or ``timeout`` (seconds) is given,
        in which case ``TaskTimeout`` is returned once either bound is hit.
        Dispatch errors are returned unchanged; a reply without a known
        status becomes ``TaskFailed``.
        """
        interval = self._poll_interval if poll_interval is None else poll_interval
        started = self._clock()
        polls = 0
        while True:
            outcome = self.status(index_name, task_id)
            polls += 1
            status = _task_status(outcome)
            logger.debug("Task %s on %s: %s (poll %d)", task_id, index_name, status, polls)
            if status == TaskStatus.PUBLISHED:
                return Done(index_name=index_name, task_id=task_id)
            if status is None and isinstance(outcome, Success):
                logger.error("Unrecognised status for task %s on %s: %r", task_id, index_name, outcome.body)
                return TaskFailed(index_name=index_name, task_id=task_id, body=outcome.body)
            if status != TaskStatus.NOT_PUBLISHED:
                return outcome
            elapsed = self._clock() - started
            if (max_polls is not None and polls >= max_polls) or (timeout is not None and elapsed + interval > timeout):
                logger.warning("Gave up waiting for task %s on %s after %d polls", task_id, index_name, polls)
                return TaskTimeout(index_name=index_name, task_id=task_id, polls=polls, elapsed=elapsed)
            self._sleep(interval)

    def wait(self, response: Any, poll_interval: Optional[float] = None, **bounds) -> Any:
        """Wait on the task referenced by a previous operation's response.

        Returns the original response once the task is published, so mutating
        calls can be chained straight into ``wait``.
        """
        if not isinstance(response, Success) or not isinstance(response.body, dict):
            return response
        index_name = response.body.get("indexName")
        task_id = response.body.get("taskID")
        if index_name is None or task_id is None:
            return response
        outcome = self.wait_task(index_name, task_id, poll_interval, **bounds)
        if isinstance(outcome, Done):
            return response
        return outcome


def _task_status(outcome) -> Optional[TaskStatus]:
    if not isinstance(outcome, Success) or not isinstance(outcome.body, dict):
        return None
    try:
        return TaskStatus(outcome.body.get("status"))
    except ValueError:
        return None
