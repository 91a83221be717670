from __future__ import annotations

from typing import Callable, Sequence

from rpc_app.types import UnaryFunc


class Interceptor:
    """Wraps a unary call with added behaviour.

    `wrap(next)` receives the composition of every stage closer to the
    handler and returns a callable with the same signature.
    """

    def wrap(self, next: UnaryFunc) -> UnaryFunc:  # noqa: A002
        raise NotImplementedError


class UnaryInterceptorFunc(Interceptor):
    """Adapts a plain `wrap(next) -> next'` function into an Interceptor."""

    def __init__(self, func: Callable[[UnaryFunc], UnaryFunc]) -> None:
        self._func = func

    def wrap(self, next: UnaryFunc) -> UnaryFunc:  # noqa: A002
        return self._func(next)


def compose(interceptors: Sequence[Interceptor], handler: UnaryFunc) -> UnaryFunc:
    """Compose interceptors around a handler.

    The first interceptor is the outermost: for `[a, b]` a call runs
    a -> b -> handler. Composition happens once; the returned callable is
    immutable.
    """
    call = handler
    for interceptor in reversed(tuple(interceptors)):
        call = interceptor.wrap(call)
    return call
