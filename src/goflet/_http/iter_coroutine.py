"""Drive a coroutine that never suspends to completion without an event loop."""

from __future__ import annotations

import typing

_T = typing.TypeVar("_T")


def iter_coroutine(coro: typing.Coroutine[None, None, _T]) -> _T:
    """
    Run ``coro`` synchronously and return its result.

    The blocking transport declares ``send`` as ``async`` without ever
    awaiting anything, so the upload core coroutine finishes on its first
    step. Sending ``None`` once is enough to reach ``StopIteration``.

    Raises:
        RuntimeError: If the coroutine yields instead of finishing.
    """
    try:
        coro.send(None)
    except StopIteration as ex:
        return ex.value  # type: ignore [no-any-return]
    else:
        raise RuntimeError(f"coroutine {coro!r} suspended; use the async API instead")
    finally:
        coro.close()


__all__ = ["iter_coroutine"]
