"""Declarative schema classes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from .configuration import configuration
from .fields import Association, Computed, Field, FieldSpec, _Spec
from .render_error import SchemaDefinitionError
from .resolution import compile_inline_schema, is_inline_body
from .safe_callable import SafeCallable

if TYPE_CHECKING:
    from .renderer import Renderer

logger = logging.getLogger(__name__)

HOOK_NAMES = ("before_render", "after_render")


class BaseSchema:
    """
    Root of every schema.

    A schema is an ordered mapping from output key to field specification,
    plus before/after render hooks, a default render context and a tag
    registry shared by the whole schema family. Schemas are declared by
    subclassing, either with specs in the class body or with the builder
    classmethods, and are never instantiated.

    Subclasses get their own copy of the definition, hooks and context, so
    adding or omitting fields never leaks into the parent. The tag registry is
    shared by reference: a direct subclass of BaseSchema starts a family, and a
    tag registered anywhere in that family resolves everywhere in it.

    Example:
        class AppSchema(BaseSchema):
            pass

        class PostSchema(AppSchema, tag="post"):
            id = Field()
            title = Field()

        class UserSchema(AppSchema):
            id = Field(alias="userId")
            full_name = Computed(lambda user: f"{user.first_name} {user.last_name}")
            posts = Association("post")

        UserSchema.render(user)

    """

    _definition: ClassVar[dict[str, FieldSpec]] = {}
    _hooks: ClassVar[dict[str, list[SafeCallable]]] = {name: [] for name in HOOK_NAMES}
    _context: ClassVar[dict[str, Any]] = {}
    _tagged_schemas: ClassVar[dict[str, type[BaseSchema]]] = {}

    def __init_subclass__(cls, tag: str | None = None, **kwargs: Any) -> None:
        """Copy inherited state and collect the specs declared in the class body."""
        super().__init_subclass__(**kwargs)
        parents = [base for base in cls.__bases__ if issubclass(base, BaseSchema)]

        definition: dict[str, FieldSpec] = {}
        hooks: dict[str, list[SafeCallable]] = {name: [] for name in HOOK_NAMES}
        context: dict[str, Any] = {}
        for parent in parents:
            for key, spec in parent._definition.items():
                definition.setdefault(key, spec)
            for name in HOOK_NAMES:
                # a hook inherited through several parents runs once; repeats within one parent are kept
                seen = list(hooks[name])
                hooks[name].extend(hook for hook in parent._hooks[name] if hook not in seen)
        for parent in reversed(parents):
            context.update(parent._context)

        cls._definition = definition
        cls._hooks = hooks
        cls._context = context
        if BaseSchema in cls.__bases__:
            cls._tagged_schemas = {}
        else:
            cls._tagged_schemas = parents[0]._tagged_schemas

        declared = [(name, value) for name, value in cls.__dict__.items() if isinstance(value, _Spec)]
        for name, spec in declared:
            delattr(cls, name)
            cls._add(name, spec)

        if tag is not None:
            cls.tag(tag)

    @classmethod
    def _check_mutable(cls) -> None:
        if cls is BaseSchema:
            msg = "BaseSchema cannot be modified directly; define a subclass"
            raise SchemaDefinitionError(msg)

    @classmethod
    def _add(cls, name: str, spec: FieldSpec) -> FieldSpec:
        cls._check_mutable()
        spec = spec.named(name)
        if isinstance(spec, Association) and is_inline_body(spec.schema):
            spec.schema = compile_inline_schema(spec.schema, cls, name)
        cls._definition[name] = spec
        return spec

    # -- builders ---------------------------------------------------------

    @classmethod
    def field(
        cls,
        name: str,
        *,
        source: str | None = None,
        alias: str | None = None,
        if_: Callable[..., Any] | None = None,
        unless: Callable[..., Any] | None = None,
        refine: Callable[..., Any] | None = None,
    ) -> FieldSpec:
        """Expose the record attribute ``source`` (default ``name``) under ``name``."""
        spec = Field(source=source, alias=alias, if_=if_, unless=unless, refine=refine)
        return cls._add(name, spec)

    @classmethod
    def fields(cls, *names: str, **options: Any) -> None:
        """Call :meth:`field` for each name with the same options."""
        for name in names:
            cls.field(name, **options)

    @classmethod
    def omit(cls, *names: str) -> None:
        """Remove entries from the definition. Unknown names are ignored."""
        for name in names:
            cls._definition.pop(name, None)

    @classmethod
    def computed(cls, name: str, fn: Callable[..., Any] | None = None, **options: Any) -> FieldSpec:
        """
        Expose ``fn(record, context)`` under ``name``.

        Raises:
            SchemaDefinitionError: If ``fn`` is missing or not callable.

        """
        return cls._add(name, Computed(fn, **options))

    @classmethod
    def association(cls, name: str, schema: Any = None, **options: Any) -> FieldSpec:
        """
        Render the record attribute ``name`` with a nested schema.

        ``schema`` is a tag, a schema class, a Deferred reference or an inline
        body ``fn(schema_cls)``. Inline bodies are compiled right away into an
        anonymous subclass of the configured base class sharing this family's
        tag registry.

        Raises:
            SchemaDefinitionError: If no schema is given.

        """
        return cls._add(name, Association(schema, **options))

    @classmethod
    def before_render(cls, fn: Callable[..., Any]) -> Callable[..., Any]:
        """
        Append a hook run on the renderable before any record is rendered.

        Hooks are called as ``fn(value, context, transform=...)`` with the
        arguments they accept. Calling ``transform(new_value)`` replaces the
        value for the following hooks and the render. Otherwise the value is
        carried forward as the hook left it; return values are ignored.
        Usable as a decorator.
        """
        cls._check_mutable()
        cls._hooks["before_render"].append(SafeCallable(fn))
        return fn

    @classmethod
    def after_render(cls, fn: Callable[..., Any]) -> Callable[..., Any]:
        """Append a hook run on the rendered output. Same contract as :meth:`before_render`."""
        cls._check_mutable()
        cls._hooks["after_render"].append(SafeCallable(fn))
        return fn

    @classmethod
    def tag(cls, name: str, schema: type[BaseSchema] | None = None) -> type[BaseSchema]:
        """Register ``schema`` (default: this class) under ``name`` in the family registry."""
        schema = cls if schema is None else schema
        if not (isinstance(schema, type) and issubclass(schema, BaseSchema)):
            msg = f"Only schema classes can be tagged, got {schema!r}"
            raise SchemaDefinitionError(msg)
        cls._check_mutable()
        cls._tagged_schemas[name] = schema
        logger.debug("Tagged %s as %r", schema.__name__, name)
        return schema

    @classmethod
    def reset_tags(cls) -> None:
        """Detach this class (and subclasses defined later) from the inherited tag registry."""
        cls._tagged_schemas = {}

    @classmethod
    def set_context(cls, values: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """Merge default render context values into this class."""
        cls._check_mutable()
        cls._context.update(values or {}, **kwargs)

    # -- introspection ----------------------------------------------------

    @classmethod
    def definition(cls) -> dict[str, FieldSpec]:
        """Return a copy of the ordered definition."""
        return dict(cls._definition)

    @classmethod
    def hooks(cls) -> dict[str, list[Callable[..., Any]]]:
        """Return the registered hooks, keyed by ``before_render`` / ``after_render``."""
        return {name: [hook.fn for hook in hooks] for name, hooks in cls._hooks.items()}

    @classmethod
    def context(cls) -> dict[str, Any]:
        """Return a copy of the default render context."""
        return dict(cls._context)

    @classmethod
    def tagged_schemas(cls) -> dict[str, type[BaseSchema]]:
        """Return a copy of the family tag registry."""
        return dict(cls._tagged_schemas)

    @classmethod
    def lookup_tag(cls, name: str) -> type[BaseSchema] | None:
        """Return the schema registered under ``name`` in this family, or None."""
        return cls._tagged_schemas.get(name)

    # -- rendering --------------------------------------------------------

    @classmethod
    def renderer(cls, renderable: Any = None, context: Mapping[str, Any] | None = None, *, controller: Any = None) -> Renderer:
        """Return a renderer bound to ``renderable``, e.g. to :meth:`Renderer.merge` extra keys first."""
        from .renderer import Renderer

        return Renderer(cls, renderable, context, controller=controller)

    @classmethod
    def render(cls, renderable: Any, context: Mapping[str, Any] | None = None, *, controller: Any = None) -> Any:
        """Render a record or a collection of records."""
        return cls.renderer(renderable, context, controller=controller).render()

    @classmethod
    def parse(cls, *args: Any, **kwargs: Any) -> Any:
        """Deserialization is not supported."""
        msg = f"{cls.__name__} cannot parse input; schemas only render"
        raise NotImplementedError(msg)


def define_schema(
    body: Callable[..., Any] | None = None,
    *,
    base: type[BaseSchema] | None = None,
    name: str | None = None,
    context: Mapping[str, Any] | None = None,
    tags: dict[str, type[BaseSchema]] | None = None,
) -> type[BaseSchema]:
    """
    Build an anonymous schema class and run ``body(schema_cls)`` against it.

    Args:
        body: Inline definition, called with the new class to invoke its builders.
        base: Parent class. Defaults to the configured base class.
        name: Class name. Defaults to ``AnonymousSchema``.
        context: Default render context for the new class.
        tags: Tag registry to share instead of the one inherited from ``base``.

    Example:
        PostSchema = define_schema(lambda s: s.fields("id", "title"))

    """
    base = configuration().resolve_base_class() if base is None else base
    class_name = name or "AnonymousSchema"
    schema_cls = type(class_name, (base,), {"__qualname__": class_name})
    if tags is not None:
        schema_cls._tagged_schemas = tags
    if context:
        schema_cls.set_context(context)
    if body is not None:
        SafeCallable(body)(schema_cls)
    return schema_cls
