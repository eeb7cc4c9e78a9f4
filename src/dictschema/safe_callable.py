"""Arity-agnostic invocation of user supplied closures."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from .render_error import SchemaDefinitionError

_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class SafeCallable:
    """
    Wrap a closure so that surplus arguments are dropped instead of failing.

    The engine always passes the same arguments to a given kind of closure
    (for example ``(record, context)`` to computed fields), while users write
    closures taking only what they need. Positional arguments are truncated
    to the leading positional parameters the closure declares without a
    default. An optional positional parameter is only filled when it is named
    ``context``, so ``round`` or ``lambda value, fmt="%d": ...`` never receive
    the render context by accident. Keyword arguments are only passed on when
    the closure names them, which is how hooks opt in to the ``transform``
    callback.

    Example:
        full_name = SafeCallable(lambda user: f"{user.first} {user.last}")
        full_name(user, context)  # context is dropped

    """

    __slots__ = ("fn", "_positional", "_keywords", "_var_keyword", "_introspected")

    def __init__(self, fn: Callable[..., Any]) -> None:
        """Inspect the signature of ``fn`` once."""
        if isinstance(fn, SafeCallable):
            fn = fn.fn
        if not callable(fn):
            msg = f"A callable must be provided, got {fn!r}"
            raise SchemaDefinitionError(msg)
        self.fn = fn
        try:
            signature = inspect.signature(fn)
        except (TypeError, ValueError):
            self._introspected = False
            self._positional: list[str] | None = None
            self._keywords: set[str] = set()
            self._var_keyword = False
            return

        self._introspected = True
        params = list(signature.parameters.values())
        if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
            self._positional = None
        else:
            self._positional = _filled_positional(params)
        self._keywords = {
            p.name
            for p in params
            if p.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
        }
        self._var_keyword = any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params)

    def accepts(self, keyword: str) -> bool:
        """Return True if the closure would receive ``keyword``."""
        return self._var_keyword or keyword in self._keywords

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Invoke the closure with as many of ``args``/``kwargs`` as it accepts."""
        if not self._introspected:
            return self.fn(*args[:1])

        passed = {key: value for key, value in kwargs.items() if self.accepts(key)}
        if self._positional is None:
            return self.fn(*args, **passed)

        slots = [name for name in self._positional if name not in passed]
        return self.fn(*args[: len(slots)], **passed)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeCallable):
            return self.fn == other.fn
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.fn)

    def __repr__(self) -> str:
        return f"SafeCallable({self.fn!r})"


def _filled_positional(params: list[inspect.Parameter]) -> list[str]:
    names = []
    for param in params:
        if param.kind not in _POSITIONAL_KINDS:
            break
        if param.default is not inspect.Parameter.empty and param.name != "context":
            break
        names.append(param.name)
    return names


def safe_call(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call ``fn`` once through a :class:`SafeCallable`."""
    return SafeCallable(fn)(*args, **kwargs)
