from __future__ import annotations
import logging
import time
from typing import Callable, Optional

import httpx

from .dispatcher import Dispatcher
from .models import Credentials
from .repositories import IndexRepository
from .settings import Settings, get_settings
from .tasks import DEFAULT_POLL_INTERVAL, TaskWaiter

logger = logging.getLogger(__name__)


class SearchClient(IndexRepository):
    def __init__(
        self,
        credentials: Credentials,
        http_client: Optional[httpx.Client] = None,
        connect_timeout: float = 2.0,
        read_timeout: float = 30.0,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.dispatcher = Dispatcher(credentials, http_client, connect_timeout=connect_timeout, read_timeout=read_timeout)
        super().__init__(self.dispatcher, TaskWaiter(self.dispatcher, poll_interval=poll_interval, sleep=sleep))
        logger.debug("Search client ready for application %s", credentials.application_id)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, http_client: Optional[httpx.Client] = None) -> "SearchClient":
        if settings is None:
            settings = get_settings()
        return cls(
            settings.credentials(),
            http_client,
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
            poll_interval=settings.task_poll_interval,
        )

    def close(self):
        self.dispatcher.close()

    def __enter__(self) -> "SearchClient":
        return self

    def __exit__(self, *exc):
        self.close()
        return False
