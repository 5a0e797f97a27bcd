"""
BlogApp Client Core — State Containers
=======================================

What:  Base classes for the business-logic layer consumed by presentation.
How:   `StateContainer` holds one current state and pushes every new state
       to listeners and async streams. `Bloc` adds events: each event type
       is mapped to one async handler, and handlers emit states.
Who:   Subclassed by `BlogBloc`, `AuthBloc` and `AppUserCubit`.

Concurrency model:
    Everything runs on one asyncio event loop.
    - `Bloc.add(event)` schedules the handler as a task and returns it.
      Handlers for different events interleave at their await points and the
      current state is whatever was emitted last. There is no per-event
      ordering and no limit on events in flight.
    - `Bloc.dispatch(event)` awaits the handler inline.
    - Started handlers are never cancelled. `close()` waits for them.
"""

import asyncio
import logging
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Dict,
    Generic,
    List,
    Set,
    Tuple,
    TypeVar,
)

logger = logging.getLogger(__name__)

S = TypeVar("S")
E = TypeVar("E")

EventHandler = Callable[[Any], Awaitable[None]]

# Pushed into subscriber queues to end their streams
_CLOSED = object()


class StateContainer(Generic[S]):
    """
    Holds the current state and notifies observers of every change.

    Emitting a state equal to the current one is a no-op, so observers only
    ever see real transitions.
    """

    def __init__(self, initial_state: S):
        self._state = initial_state
        self._listeners: List[Callable[[S], None]] = []
        self._subscribers: List["asyncio.Queue[Any]"] = []
        self._closed = False

    @property
    def state(self) -> S:
        return self._state

    @property
    def is_closed(self) -> bool:
        return self._closed

    def emit(self, state: S) -> None:
        if self._closed:
            raise RuntimeError(
                f"Cannot emit new states after {type(self).__name__} was closed"
            )
        if state == self._state:
            return

        logger.debug(
            "%s: %s -> %s",
            type(self).__name__,
            type(self._state).__name__,
            type(state).__name__,
        )
        self._state = state

        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error("Error in %s listener: %s", type(self).__name__, e, exc_info=True)

        for queue in self._subscribers:
            queue.put_nowait(state)

    def listen(self, callback: Callable[[S], None]) -> Callable[[], None]:
        """
        Registers a synchronous callback for future states.

        Returns:
            A function that removes the callback again.
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    async def stream(self) -> AsyncIterator[S]:
        """
        Yields every state emitted after the iteration starts.

        The iterator ends when the container is closed.

        Usage:
            async for state in bloc.stream():
                render(state)
        """
        queue: "asyncio.Queue[Any]" = asyncio.Queue()
        self._subscribers.append(queue)
        try:
            while True:
                item = await queue.get()
                if item is _CLOSED:
                    return
                yield item
        finally:
            if queue in self._subscribers:
                self._subscribers.remove(queue)

    async def close(self) -> None:
        """Stops accepting states and ends all open streams."""
        if self._closed:
            return
        self._closed = True
        for queue in self._subscribers:
            queue.put_nowait(_CLOSED)
        self._listeners.clear()


class Bloc(StateContainer[S], Generic[E, S]):
    """
    A state container driven by events.

    Subclasses list every event variant in `event_types`, register one
    handler per variant with `on()`, then call `verify_handlers()` at the
    end of `__init__`. A missing handler is a programming error and fails
    at construction, not at dispatch time.

    Usage:
        class CounterBloc(Bloc[CounterEvent, int]):
            event_types = (Increment,)

            def __init__(self):
                super().__init__(0)
                self.on(Increment, self._on_increment)
                self.verify_handlers()

            async def _on_increment(self, event: Increment) -> None:
                self.emit(self.state + 1)
    """

    event_types: Tuple[type, ...] = ()

    def __init__(self, initial_state: S):
        super().__init__(initial_state)
        self._handlers: Dict[type, EventHandler] = {}
        self._tasks: Set["asyncio.Task[None]"] = set()

    def on(self, event_type: type, handler: EventHandler) -> None:
        if event_type in self._handlers:
            raise ValueError(f"{event_type.__name__} already has a handler")
        self._handlers[event_type] = handler

    def verify_handlers(self) -> None:
        """Raises TypeError if any declared event type has no handler."""
        missing = [t.__name__ for t in self.event_types if t not in self._handlers]
        if missing:
            raise TypeError(
                f"{type(self).__name__} has no handler for: {', '.join(missing)}"
            )

    def _handler_for(self, event: E) -> EventHandler:
        for event_type in type(event).__mro__:
            handler = self._handlers.get(event_type)
            if handler is not None:
                return handler
        raise TypeError(f"{type(self).__name__} cannot handle {type(event).__name__}")

    async def dispatch(self, event: E) -> None:
        """Runs the matching handler to completion."""
        if self._closed:
            raise RuntimeError(f"Cannot add events after {type(self).__name__} was closed")
        await self._handler_for(event)(event)

    def add(self, event: E) -> "asyncio.Task[None]":
        """
        Schedules the matching handler on the running loop.

        Must be called from within a running event loop. The returned task
        may be awaited, but callers are free to ignore it.
        """
        if self._closed:
            raise RuntimeError(f"Cannot add events after {type(self).__name__} was closed")
        handler = self._handler_for(event)
        task = asyncio.get_running_loop().create_task(handler(event))
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: "asyncio.Task[None]") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "Unhandled error in %s event handler: %s",
                type(self).__name__,
                error,
                exc_info=error,
            )

    async def close(self) -> None:
        """Waits for in-flight handlers, then closes the container."""
        if self._tasks:
            await asyncio.wait(list(self._tasks))
        await super().close()
