"""Value loader shapes.

A loader is the on-demand recomputation source consulted after the memory
tier. It comes in three shapes, modelled as a tagged union:

- ResolvedValue: a value that is already available.
- AwaitableValue: an awaitable (coroutine, task, future) yielding the value.
- ValueProducer: a zero-argument callable returning the value or an
  awaitable of it.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class ResolvedValue(Generic[T]):
    """An already-resolved value. Use it to cache callables or awaitables as values."""
    value: T


@dataclass(frozen=True)
class AwaitableValue(Generic[T]):
    awaitable: Awaitable[T]


@dataclass(frozen=True)
class ValueProducer(Generic[T]):
    producer: Callable[[], Union[Awaitable[T], T]]


ValueLoader = Union[ResolvedValue[T], AwaitableValue[T], ValueProducer[T]]


def as_value_loader(loader: Any) -> Optional[ValueLoader]:
    """Classifies a raw loader argument into its ValueLoader variant.

    Variants pass through unchanged, callables become producers, awaitables
    become AwaitableValue and anything else is a ResolvedValue. None stays
    None.
    """
    if loader is None:
        return None
    if isinstance(loader, (ResolvedValue, AwaitableValue, ValueProducer)):
        return loader
    if callable(loader):
        return ValueProducer(loader)
    if inspect.isawaitable(loader):
        return AwaitableValue(loader)
    return ResolvedValue(loader)


async def resolve_value_loader(loader: Optional[ValueLoader[T]]) -> Optional[T]:
    """Produces the value a loader stands for, awaiting where needed."""
    if loader is None:
        return None
    if isinstance(loader, ValueProducer):
        result = loader.producer()
        if inspect.isawaitable(result):
            return await result
        return result
    if isinstance(loader, AwaitableValue):
        return await loader.awaitable
    return loader.value
