"""
dictschema - Declarative rendering of objects into JSON-ready dicts.

Schemas describe which attributes of a record to expose, how to compute or
rename them, how to nest related records and how to hook into the render
pipeline before and after conversion.

Core Classes:
    BaseSchema: Root class for schema definitions.
    Field: Expose a record attribute.
    Computed: Expose the result of a closure.
    Association: Render a related record with a nested schema.
    Renderer: State of a single render (merge extra keys, transform in hooks).
    SchemaController: Mixin registering named schemas on a host request handler.

Usage:
    from dictschema import Association, BaseSchema, Computed, Field

    class AppSchema(BaseSchema):
        pass

    class PostSchema(AppSchema, tag="post"):
        id = Field()
        title = Field()

    class UserSchema(AppSchema):
        id = Field()
        full_name = Computed(lambda user: f"{user.first_name} {user.last_name}")
        posts = Association("post")

    UserSchema.render(user)     # {"id": 1, "full_name": "...", "posts": [...]}
    UserSchema.render(users)    # [{...}, {...}]
"""

__version__ = "0.1.0"

from .base_schema import BaseSchema as BaseSchema
from .base_schema import define_schema as define_schema
from .configuration import Configuration as Configuration
from .configuration import configuration as configuration
from .configuration import configure as configure
from .configuration import reset_configuration as reset_configuration
from .controller import SchemaController as SchemaController
from .deferred import Deferred as Deferred
from .deferred import deferred as deferred
from .fields import Association as Association
from .fields import Computed as Computed
from .fields import Field as Field
from .frames import to_frame as to_frame
from .missing_dependency_error import MissingDependencyError as MissingDependencyError
from .render_error import FieldMissing as FieldMissing
from .render_error import InvalidFieldType as InvalidFieldType
from .render_error import InvalidSchemaValue as InvalidSchemaValue
from .render_error import RenderError as RenderError
from .render_error import SchemaDefinitionError as SchemaDefinitionError
from .render_error import SchemaError as SchemaError
from .render_error import SchemaNotFound as SchemaNotFound
from .renderer import Renderer as Renderer
from .renderer import render as render
from .safe_callable import SafeCallable as SafeCallable
from .schema_algebra import SchemaConflictError as SchemaConflictError
from .schema_algebra import combine_schemas as combine_schemas

__all__ = [
    "Association",
    "BaseSchema",
    "Computed",
    "Configuration",
    "Deferred",
    "Field",
    "FieldMissing",
    "InvalidFieldType",
    "InvalidSchemaValue",
    "MissingDependencyError",
    "RenderError",
    "Renderer",
    "SafeCallable",
    "SchemaConflictError",
    "SchemaController",
    "SchemaDefinitionError",
    "SchemaError",
    "SchemaNotFound",
    "combine_schemas",
    "configuration",
    "configure",
    "define_schema",
    "deferred",
    "render",
    "reset_configuration",
    "to_frame",
]
