"""Process-wide configuration."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

from .render_error import SchemaDefinitionError

if TYPE_CHECKING:
    from .base_schema import BaseSchema


@dataclass
class Configuration:
    """
    Settings shared by every schema in the process.

    Attributes:
        base_class: Class inline schemas are built from. Either a BaseSchema
            subclass or a dotted path (``"app.schemas.AppSchema"`` or
            ``"app.schemas:AppSchema"``) imported on first use. Defaults to BaseSchema.
        transform_keys: Optional ``key -> key`` callable applied to every output
            key that has no explicit alias.
        type_serializers: Mapping from type to ``value -> JSON value`` callable,
            consulted by ``Renderer.to_json`` for values ``json`` cannot encode.

    """

    base_class: type[BaseSchema] | str | None = None
    transform_keys: Callable[[Any], Any] | None = None
    type_serializers: dict[type, Callable[[Any], Any]] = field(default_factory=dict)

    def resolve_base_class(self) -> type[BaseSchema]:
        """Return the configured base class, importing it if given as a path."""
        from .base_schema import BaseSchema

        value = self.base_class
        if value is None:
            return BaseSchema
        if isinstance(value, str):
            value = _import_class(value)
        if not (isinstance(value, type) and issubclass(value, BaseSchema)):
            msg = f"base_class must be a BaseSchema subclass, got {value!r}"
            raise SchemaDefinitionError(msg)
        return value

    def transform_key(self, key: Any) -> Any:
        """Apply ``transform_keys`` to ``key`` (identity when unset)."""
        if self.transform_keys is None:
            return key
        return self.transform_keys(key)


def _import_class(path: str) -> type:
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        msg = f"Cannot resolve base class from {path!r}"
        raise SchemaDefinitionError(msg)
    try:
        module = importlib.import_module(module_name)
        return getattr(module, attr)
    except (ImportError, AttributeError) as e:
        msg = f"Cannot resolve base class from {path!r}: {e}"
        raise SchemaDefinitionError(msg) from e


_configuration: Configuration | None = None


def configuration() -> Configuration:
    """Return the process-wide configuration, creating it on first use."""
    global _configuration
    if _configuration is None:
        _configuration = Configuration()
    return _configuration


def configure(**options: Any) -> Configuration:
    """
    Update the process-wide configuration.

    Example:
        configure(transform_keys=lambda key: key.upper())

    """
    config = configuration()
    known = {f.name for f in fields(Configuration)}
    for name, value in options.items():
        if name not in known:
            msg = f"Unknown configuration option {name!r}"
            raise SchemaDefinitionError(msg)
        setattr(config, name, value)
    return config


def reset_configuration() -> Configuration:
    """Restore the defaults and return the fresh configuration."""
    global _configuration
    _configuration = Configuration()
    return _configuration
