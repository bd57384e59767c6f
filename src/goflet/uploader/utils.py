from __future__ import annotations

import os
from typing import Any


def debug(message: str, *args: Any) -> None:
    try:
        debug_env = os.getenv("DEBUG", "")
        if "goflet" in debug_env:
            print(f"goflet: {message}", *args)
    except Exception:
        pass


def describe_error(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"
