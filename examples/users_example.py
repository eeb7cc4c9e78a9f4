"""Rendering users and their posts, directly and through a controller."""

import json
from dataclasses import dataclass, field
from datetime import date

from dictschema import (
    Association,
    BaseSchema,
    Computed,
    Field,
    SchemaController,
    combine_schemas,
    configure,
    deferred,
    to_frame,
)

# -- Records --------------------------------------------------------------------


@dataclass
class Post:
    id: int
    title: str
    published_on: date


@dataclass
class User:
    id: int
    first_name: str
    last_name: str
    email: str
    posts: list[Post] = field(default_factory=list)
    manager: "User | None" = None


# -- Schemas: one family, tags resolve anywhere in it ------------------------


class AppSchema(BaseSchema):
    """Root of the application's schema family."""


class PostSchema(AppSchema, tag="post"):
    id = Field()
    title = Field()
    published_on = Field(refine=lambda value: value.isoformat())


class UserSchema(AppSchema, tag="user"):
    id = Field(alias="userId")
    full_name = Computed(lambda user: f"{user.first_name} {user.last_name}")
    email = Field(if_=lambda user, context: context.get("admin"))
    posts = Association("post")
    manager = Association(deferred(lambda: UserSchema))


class StatsSchema(AppSchema):
    post_count = Computed(lambda user: len(user.posts))


UserWithStats = combine_schemas(UserSchema, StatsSchema)


# -- Controller -----------------------------------------------------------------


class UsersController(SchemaController):
    def __init__(self, admin: bool) -> None:
        self.admin = admin


UsersController.schema_context(admin=lambda controller: controller.admin)
UsersController.schema("default", UserWithStats)


@UsersController.schema("index")
def index_schema(s):
    s.fields("id", "first_name")

    @s.after_render
    def envelope(users, transform):
        transform({"users": users, "meta": {"total": len(users)}})


def camelize(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


if __name__ == "__main__":
    configure(transform_keys=camelize)

    boss = User(id=1, first_name="Holly", last_name="Gennero", email="holly@example.com")
    john = User(
        id=2,
        first_name="John",
        last_name="McClane",
        email="john@example.com",
        posts=[Post(id=10, title="Yippee", published_on=date(1988, 7, 15))],
        manager=boss,
    )

    print(json.dumps(UserSchema.render(john), indent=2))
    print(json.dumps(UsersController(admin=True).schema_for(john), indent=2))
    print(json.dumps(UsersController(admin=False).schema_for([boss, john], "index"), indent=2))
    print(to_frame(UsersController(admin=False).schema_for([boss, john], "index")["users"]))
