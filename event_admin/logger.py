import functools
import gzip
import inspect
import logging
import logging.handlers
import os
import shutil
import sys
from pathlib import Path
from typing import Any, Callable, ParamSpec, TypeVar

from .config import settings

logger = logging.getLogger("event_admin")
logger.setLevel(logging.DEBUG)
formatter = logging.Formatter(
    "%(asctime)s %(levelname)s [%(module)s:%(funcName)s:%(lineno)d] %(message)s"
)

logs_dir = Path(settings.logs_dir)
logs_dir.mkdir(parents=True, exist_ok=True)


def rotator(source, dest):
    with open(source, "rb") as f_in, gzip.open(dest + ".gz", "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)
    os.remove(source)


log_file_handler = logging.handlers.TimedRotatingFileHandler(
    logs_dir / "event_admin.log", when="midnight", encoding="utf-8"
)
log_file_handler.setFormatter(formatter)
log_file_handler.rotator = rotator
logger.addHandler(log_file_handler)

log_stream_handler = logging.StreamHandler(sys.stdout)
log_stream_handler.setFormatter(formatter)
logger.addHandler(log_stream_handler)


P = ParamSpec("P")
R = TypeVar("R")


def log_exception(
    prefix: str = "",
    default_return: R | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator that logs and swallows exceptions raised by the wrapped function.

    Works for sync and async functions. The prefix may reference the call's
    arguments by name, e.g. ``@log_exception("Toast handler {toast}")``.
    On failure the wrapper returns ``default_return``.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        sig = inspect.signature(func)
        func_name = func.__qualname__

        def bind_arguments(args: tuple, kwargs: dict) -> tuple[dict[str, Any], str]:
            try:
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
            except TypeError as e:
                logger.warning(
                    f"Failed to bind arguments for function {func_name}: {e}",
                    stacklevel=4,
                )
                parts = []
                if args:
                    parts.append(f"args={args!r}")
                if kwargs:
                    parts.append(f"kwargs={kwargs!r}")
                return {}, f"[{', '.join(parts)}] " if parts else ""

            params = ", ".join(f"{k}={v!r}" for k, v in bound.arguments.items())
            return bound.arguments, f"[{params}] " if params else ""

        def render_prefix(arguments: dict[str, Any]) -> str:
            if not prefix:
                return ""
            if "{" not in prefix or "}" not in prefix:
                return f"{prefix}: "
            try:
                return f"{prefix.format_map(arguments)}: "
            except (KeyError, ValueError, IndexError) as e:
                logger.warning(
                    f"Failed to format prefix '{prefix}' with arguments: {e}",
                    stacklevel=4,
                )
                return f"{prefix}: "

        def report(exc: Exception, args: tuple, kwargs: dict) -> None:
            arguments, args_str = bind_arguments(args, kwargs)
            logger.error(
                f"{args_str}{render_prefix(arguments)}{type(exc).__name__}: {exc}",
                exc_info=True,
                stacklevel=3,
            )

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    report(e, args, kwargs)
                    return default_return  # type: ignore[return-value]

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                report(e, args, kwargs)
                return default_return  # type: ignore[return-value]

        return sync_wrapper

    return decorator
