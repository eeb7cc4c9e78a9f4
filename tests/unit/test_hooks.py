"""Unit tests for before_render / after_render hooks."""

import copy
import unittest
from types import SimpleNamespace

from dictschema import BaseSchema, Field


def create_record(**attributes):
    return SimpleNamespace(**attributes)


class TestBeforeRender(unittest.TestCase):
    """Unit tests for hooks run on the renderable."""

    def test_should_see_in_place_mutation(self) -> None:
        """Test that a hook mutating the record without returning affects the output."""

        # arrange
        class UserSchema(BaseSchema):
            id = Field()
            name = Field()

        UserSchema.before_render(lambda record: setattr(record, "name", "John McClane"))

        # act
        result = UserSchema.render(create_record(id=1))

        # assert
        self.assertEqual(result, {"id": 1, "name": "John McClane"})

    def test_should_replace_value_via_transform(self) -> None:
        """Test that transform(x) makes the render use x while the input is untouched."""

        # arrange
        class UserSchema(BaseSchema):
            id = Field()
            name = Field()

        @UserSchema.before_render
        def rename(record, transform):
            replacement = copy.copy(record)
            replacement.name = "John McClane"
            transform(replacement)

        record = create_record(id=1, name="Hans Gruber")

        # act
        result = UserSchema.render(record)

        # assert
        self.assertEqual(result["name"], "John McClane")
        self.assertEqual(record.name, "Hans Gruber")

    def test_should_ignore_returned_value(self) -> None:
        """Test that a value returned without transform does not replace the renderable."""

        # arrange
        class UserSchema(BaseSchema):
            id = Field()

        UserSchema.before_render(lambda records: [r for r in records if r.id > 1])

        # act
        result = UserSchema.render([create_record(id=1), create_record(id=2)])

        # assert
        self.assertEqual(result, [{"id": 1}, {"id": 2}])

    def test_should_filter_collection_via_transform(self) -> None:
        """Test that transform replaces the collection for the render."""

        # arrange
        class UserSchema(BaseSchema):
            id = Field()

        UserSchema.before_render(lambda records, transform: transform([r for r in records if r.id > 1]))

        # act
        result = UserSchema.render([create_record(id=1), create_record(id=2)])

        # assert
        self.assertEqual(result, [{"id": 2}])

    def test_should_pass_replaced_value_to_later_hooks(self) -> None:
        """Test that later hooks receive the transformed value."""
        # arrange
        seen = []

        class UserSchema(BaseSchema):
            id = Field()

        UserSchema.before_render(lambda record, context, transform: transform({"id": 2}))
        UserSchema.before_render(seen.append)

        # act
        result = UserSchema.render({"id": 1})

        # assert
        self.assertEqual(seen, [{"id": 2}])
        self.assertEqual(result, {"id": 2})

    def test_should_use_transformed_value_over_return_value(self) -> None:
        """Test that the transformed value is used and the return value is discarded."""

        # arrange
        class UserSchema(BaseSchema):
            id = Field()

        def hook(record, transform):
            transform({"id": "transformed"})
            return {"id": "returned"}

        UserSchema.before_render(hook)

        # act
        result = UserSchema.render({"id": 1})

        # assert
        self.assertEqual(result, {"id": "transformed"})

    def test_should_allow_transform_to_none(self) -> None:
        """Test that transform(None) replaces the value with None."""

        # arrange
        class OptionalSchema(BaseSchema):
            pass

        OptionalSchema.before_render(lambda value, transform: transform(None))
        OptionalSchema.after_render(lambda output, transform: transform(output))

        # act
        result = OptionalSchema.render({"id": 1})

        # assert
        self.assertEqual(result, {})

    def test_should_pass_context_to_hooks(self) -> None:
        """Test that hooks may take the render context as second argument."""

        # arrange
        class UserSchema(BaseSchema):
            name = Field()

        UserSchema.before_render(lambda record, context: setattr(record, "name", context["name"]))

        # act
        result = UserSchema.render(create_record(name="x"), {"name": "from context"})

        # assert
        self.assertEqual(result, {"name": "from context"})


class TestAfterRender(unittest.TestCase):
    """Unit tests for hooks run on the rendered output."""

    def test_should_see_in_place_mutation_of_output(self) -> None:
        """Test that mutating the output dict is visible in the result."""

        # arrange
        class UserSchema(BaseSchema):
            id = Field()

        UserSchema.after_render(lambda output: output.update(name="John McClane"))

        # act
        result = UserSchema.render(create_record(id=1))

        # assert
        self.assertEqual(result, {"id": 1, "name": "John McClane"})

    def test_should_keep_output_when_mutator_returns_a_value(self) -> None:
        """Test that a hook removing a key with pop leaves the mutated output, not the popped value."""

        # arrange
        class UserSchema(BaseSchema):
            id = Field()
            secret = Field()

        UserSchema.after_render(lambda output: output.pop("secret"))

        # act
        result = UserSchema.render({"id": 1, "secret": "s3cret"})

        # assert
        self.assertEqual(result, {"id": 1})

    def test_should_run_repeated_hooks_on_subclasses(self) -> None:
        """Test that a hook registered twice on a parent runs twice on its subclass."""
        # arrange
        calls = []

        def count():
            calls.append(1)

        class ParentSchema(BaseSchema):
            pass

        ParentSchema.after_render(count)
        ParentSchema.after_render(count)

        class ChildSchema(ParentSchema):
            pass

        # act
        ChildSchema.render({})

        # assert
        self.assertEqual(len(calls), 2)

    def test_should_wrap_collection_output_via_transform(self) -> None:
        """Test that an after hook can wrap a collection in an envelope."""

        # arrange
        class UserSchema(BaseSchema):
            id = Field()

        @UserSchema.after_render
        def envelope(data, transform):
            transform({"users": data, "meta": {"total": len(data)}})

        # act
        result = UserSchema.render([create_record(id=1), create_record(id=2)])

        # assert
        self.assertEqual(result, {"users": [{"id": 1}, {"id": 2}], "meta": {"total": 2}})

    def test_should_run_hooks_in_registration_order(self) -> None:
        """Test that hooks run in the order they were added, parents first."""
        # arrange
        order = []

        class ParentSchema(BaseSchema):
            pass

        ParentSchema.after_render(lambda: order.append("parent"))

        class ChildSchema(ParentSchema):
            pass

        ChildSchema.after_render(lambda: order.append("child"))

        # act
        ChildSchema.render({})

        # assert
        self.assertEqual(order, ["parent", "child"])

    def test_should_run_nested_schema_hooks(self) -> None:
        """Test that hooks of an association's schema run on the nested render."""

        # arrange
        class PostSchema(BaseSchema):
            id = Field()

        PostSchema.after_render(lambda posts, transform: transform([post["id"] for post in posts]))

        class AuthorSchema(BaseSchema):
            pass

        AuthorSchema.association("posts", PostSchema)

        # act
        result = AuthorSchema.render(create_record(posts=[create_record(id=3), create_record(id=4)]))

        # assert
        self.assertEqual(result, {"posts": [3, 4]})
