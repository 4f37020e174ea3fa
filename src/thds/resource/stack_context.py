"""Stack-scoped values, for overriding config and logging context without prop-drilling.

A value set via `StackContext.set` is visible to everything below the current place on
the stack, and only within the current thread (or async task).
"""

import contextlib
import contextvars
import typing as ty

T = ty.TypeVar("T")


@contextlib.contextmanager
def _scoped(var: contextvars.ContextVar[T], value: T) -> ty.Iterator[T]:
    token = var.set(value)
    try:
        yield value
    finally:
        var.reset(token)


class StackContext(ty.Generic[T]):
    """A thin wrapper around a ContextVar that requires it to be set in a
    stack-frame limited manner. Create these at module scope only, just like the
    underlying ContextVar.
    """

    def __init__(self, debug_name: str, default: T):
        self._var = contextvars.ContextVar(debug_name, default=default)

    def set(self, value: T) -> ty.ContextManager[T]:
        return _scoped(self._var, value)

    def __call__(self) -> T:
        return self._var.get()
