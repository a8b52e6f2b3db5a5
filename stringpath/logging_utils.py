"""Verbose DEBUG tracing for the geometry modules.

The hull is recomputed on every pointer move, so tracing stays silent unless
DEBUG is enabled for the module logger, and arguments are summarised rather
than dumped in full.
"""

from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

from .model import ARC_TYPES, CONNECTOR_TYPES, CircleNode, PathData

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxlist = 6
_repr.maxtuple = 6


def _summarize_circle(circle: CircleNode) -> str:
    cx, cy = circle.center
    text = f"{circle.id}@({cx:.4g}, {cy:.4g}) r={circle.radius:.4g} {circle.direction.value}"
    if circle.is_mirror_copy:
        text += f" s{circle.sector}"
    return text


def _summarize_path(path: PathData) -> str:
    arcs = sum(1 for seg in path.segments if isinstance(seg, ARC_TYPES))
    connectors = sum(1 for seg in path.segments if isinstance(seg, CONNECTOR_TYPES))
    return (
        f"PathData(arcs={arcs}, connectors={connectors}, "
        f"subpaths={path.subpath_count()}, total_length={path.total_length:.6g})"
    )


def summarize(value: Any, *, max_items: int = 6) -> str:
    """Return a short, bounded description of ``value`` for log lines."""

    if isinstance(value, PathData):
        return _summarize_path(value)
    if isinstance(value, CircleNode):
        return _summarize_circle(value)
    if isinstance(value, np.ndarray):
        return f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"
    if isinstance(value, (list, tuple)) and value and all(isinstance(v, CircleNode) for v in value):
        shown = ", ".join(_summarize_circle(v) for v in value[:max_items])
        more = f", ... (+{len(value) - max_items})" if len(value) > max_items else ""
        return f"[{shown}{more}]"
    return _repr.repr(value)


def _format_arguments(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = [summarize(arg) for arg in args]
    parts.extend(f"{key}={summarize(val)}" for key, val in kwargs.items())
    return ", ".join(parts) if parts else "no-args"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that logs entry and exit of a call at DEBUG level."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("-> %s(%s)", qualname, _format_arguments(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("!! %s raised", qualname)
                raise
            if log_result:
                logger.debug("<- %s = %s", qualname, summarize(result))
            else:
                logger.debug("<- %s", qualname)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Wrap the public functions defined in ``namespace`` with :func:`debug_log_call`.

    Private helpers (leading underscore) are left alone; they run in tight
    loops and would drown the trace.
    """

    module_name = namespace.get("__name__")
    if not isinstance(module_name, str):
        module_name = None
    logger = logger or logging.getLogger(module_name or __name__)
    skip_set: Set[str] = set(skip or [])

    for name, value in list(namespace.items()):
        if name.startswith("_") or name in skip_set:
            continue
        if inspect.isfunction(value) and getattr(value, "__module__", None) == module_name:
            namespace[name] = debug_log_call(logger, name=name)(value)


__all__ = ["apply_debug_logging", "debug_log_call", "summarize"]
