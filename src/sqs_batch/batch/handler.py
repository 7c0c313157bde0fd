"""Message handler contract and resolution of user supplied handlers."""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Callable, Union

from sqs_batch.batch.models import SqsMessage


class SqsMessageHandler(ABC):
    """Base class for class based message handlers.

    The batch processor instantiates a handler class once per batch and
    calls ``process`` for every message, so instances may keep state for
    the duration of one batch.
    """

    @abstractmethod
    def process(self, message: SqsMessage) -> Any:
        """Process one message and return a result value."""


HandlerLike = Union[Callable[[SqsMessage], Any], SqsMessageHandler, type]


def resolve_handler(handler: HandlerLike) -> Callable[[SqsMessage], Any]:
    """Turn a function, handler instance or handler class into a callable.

    Raises:
        TypeError: If the handler cannot process messages.
    """
    if inspect.isclass(handler):
        if not callable(getattr(handler, "process", None)):
            raise TypeError(f"Handler class {handler.__name__} has no process method")
        return handler().process

    process = getattr(handler, "process", None)
    if callable(process):
        return process

    if callable(handler):
        return handler

    raise TypeError(f"Unsupported message handler: {handler!r}")
