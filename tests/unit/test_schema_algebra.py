"""Unit tests for combine_schemas."""

import unittest
from types import SimpleNamespace

from dictschema import (
    BaseSchema,
    Computed,
    Field,
    SchemaConflictError,
    SchemaDefinitionError,
    combine_schemas,
)


class TestCombineSchemas(unittest.TestCase):
    """Unit tests for combine_schemas."""

    def test_should_union_definitions_in_argument_order(self) -> None:
        """Test that the combined schema renders the keys of every schema."""

        # arrange
        class UserSchema(BaseSchema):
            id = Field()
            name = Field()

        class OrderSummarySchema(BaseSchema):
            order_count = Computed(lambda user: len(user.orders))

        record = SimpleNamespace(id=1, name="Alice", orders=["a", "b"])

        # act
        sut = combine_schemas(UserSchema, OrderSummarySchema)

        # assert
        self.assertEqual(sut.__name__, "UserSchemaOrderSummarySchema")
        self.assertEqual(list(sut.definition()), ["id", "name", "order_count"])
        self.assertEqual(sut.render(record), {"id": 1, "name": "Alice", "order_count": 2})

    def test_should_leave_inputs_unchanged(self) -> None:
        """Test that combining does not modify the input schemas."""

        # arrange
        class FirstSchema(BaseSchema):
            a = Field()

        class SecondSchema(BaseSchema):
            b = Field()

        # act
        combine_schemas(FirstSchema, SecondSchema, name="Both")

        # assert
        self.assertEqual(list(FirstSchema.definition()), ["a"])
        self.assertEqual(list(SecondSchema.definition()), ["b"])

    def test_should_keep_identical_keys_once(self) -> None:
        """Test that keys inherited from a common parent do not conflict."""

        # arrange
        class ParentSchema(BaseSchema):
            id = Field()

        class LeftSchema(ParentSchema):
            left = Field()

        class RightSchema(ParentSchema):
            right = Field()

        # act
        sut = combine_schemas(LeftSchema, RightSchema)

        # assert
        self.assertEqual(list(sut.definition()), ["id", "left", "right"])

    def test_should_raise_on_conflicting_keys(self) -> None:
        """Test that a key defined differently in two schemas raises SchemaConflictError."""

        # arrange
        class FirstSchema(BaseSchema):
            name = Field()

        class SecondSchema(BaseSchema):
            name = Field(source="full_name")

        # act/assert
        with self.assertRaises(SchemaConflictError) as ctx:
            combine_schemas(FirstSchema, SecondSchema)

        self.assertEqual(ctx.exception.key, "name")
        self.assertIs(ctx.exception.first, FirstSchema)
        self.assertIs(ctx.exception.second, SecondSchema)

    def test_should_merge_hooks_and_context(self) -> None:
        """Test that hooks run in argument order and later contexts win."""
        # arrange
        calls = []

        class ParentSchema(BaseSchema):
            pass

        ParentSchema.after_render(lambda: calls.append("shared"))

        class FirstSchema(ParentSchema):
            pass

        FirstSchema.set_context(locale="en", tz="UTC")
        FirstSchema.after_render(lambda: calls.append("first"))

        class SecondSchema(ParentSchema):
            pass

        SecondSchema.set_context(locale="fr")
        SecondSchema.after_render(lambda: calls.append("second"))

        # act
        sut = combine_schemas(FirstSchema, SecondSchema)
        sut.render({})

        # assert
        self.assertEqual(sut.context(), {"locale": "fr", "tz": "UTC"})
        self.assertEqual(calls, ["shared", "first", "second"])

    def test_should_require_at_least_one_schema(self) -> None:
        """Test that calling without schemas raises SchemaDefinitionError."""
        # act/assert
        with self.assertRaises(SchemaDefinitionError):
            combine_schemas()
