import inspect

from collections import defaultdict
from loguru import logger
from typing import (
    Any,
    Callable
)

Handler = Callable[..., Any]


class EventChannel:
    """Named events with any number of sync or async listeners."""

    def __init__(self):
        self.__handlers: dict[str, list[Handler]] = defaultdict(list)

    def on(self, event: str, handler: Handler) -> Handler:
        self.__handlers[event].append(handler)
        return handler

    def off(self, event: str, handler: Handler) -> None:
        if handler in self.__handlers.get(event, []):
            self.__handlers[event].remove(handler)

    def listeners(self, event: str) -> list[Handler]:
        return list(self.__handlers.get(event, []))

    async def emit(self, event: str, *args: Any) -> None:
        handlers = self.listeners(event)

        logger.debug("Emitting {} to {} listener(s)", event, len(handlers))

        for handler in handlers:
            await invoke(handler, *args)


async def invoke(handler: Handler, *args: Any) -> Any:
    result = handler(*args)

    if inspect.isawaitable(result):
        result = await result

    return result
