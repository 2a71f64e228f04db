"""Command Table — one authorization policy and one rule set per uuCmd.

Invariants:
    - Every command name is "shoppingList/<operation>" and prefixes its error keys
    - Rules are declared per field, in the order they are reported
    - required_profiles empty means the command is open to any caller

Design Decisions:
    - Declarative table over per-handler if-chains: the pipeline is written once
      in services/command_runner.py and every command only supplies data
"""

from dataclasses import dataclass

from shoplist.core.domain_types import ListState, MemberRole, Profile
from shoplist.core.validate_dto_in import (
    MAX_NAME_LENGTH,
    FieldRule,
    is_bounded_string,
    is_member_of,
    is_non_empty_string,
    is_page_info,
    is_uuid,
    optional,
)


@dataclass(frozen=True)
class Command:
    name: str
    required_profiles: frozenset[Profile] = frozenset()
    requires_identity: bool = False
    rules: tuple[FieldRule, ...] = ()
    success_status: int = 200


_OWNER_OR_AUTHORITIES = frozenset({Profile.OWNER, Profile.AUTHORITIES})


def _id_rule(field: str, violation: str) -> FieldRule:
    return FieldRule(
        (field,), violation, f"{field} is required and must be a valid id.", is_uuid,
    )


CREATE = Command(
    name="shoppingList/create",
    required_profiles=frozenset({Profile.USER, Profile.AUTHORITIES}),
    rules=(
        FieldRule(
            ("name",), "invalidName",
            "name is required and must be a non-empty string of at most "
            f"{MAX_NAME_LENGTH} characters.",
            is_bounded_string(MAX_NAME_LENGTH),
        ),
    ),
    success_status=201,
)

GET = Command(
    name="shoppingList/get",
    rules=(_id_rule("id", "invalidId"),),
)

LIST = Command(
    name="shoppingList/list",
    rules=(
        FieldRule(
            ("pageIndex", "pageSize"), "invalidPageInfo",
            "pageIndex must be a non-negative number and pageSize a positive number.",
            is_page_info,
        ),
    ),
)

UPDATE = Command(
    name="shoppingList/update",
    required_profiles=_OWNER_OR_AUTHORITIES,
    rules=(
        _id_rule("id", "invalidId"),
        FieldRule(
            ("name",), "invalidName",
            "name must be a non-empty string of at most "
            f"{MAX_NAME_LENGTH} characters, if provided.",
            optional(is_bounded_string(MAX_NAME_LENGTH)),
        ),
        FieldRule(
            ("state",), "invalidState",
            "state must be 'active' or 'archived', if provided.",
            optional(is_member_of(ListState)),
        ),
    ),
)

DELETE = Command(
    name="shoppingList/delete",
    required_profiles=_OWNER_OR_AUTHORITIES,
    rules=(_id_rule("id", "invalidId"),),
)

ADD_MEMBER = Command(
    name="shoppingList/addMember",
    required_profiles=_OWNER_OR_AUTHORITIES,
    rules=(
        _id_rule("listId", "invalidListId"),
        FieldRule(
            ("uuIdentity",), "invalidUuIdentity",
            "uuIdentity is required and must be a string.",
            is_non_empty_string,
        ),
        FieldRule(
            ("role",), "invalidRole",
            "role must be 'owner' or 'member', if provided.",
            optional(is_member_of(MemberRole)),
        ),
    ),
)

REMOVE_MEMBER = Command(
    name="shoppingList/removeMember",
    required_profiles=_OWNER_OR_AUTHORITIES,
    rules=(
        _id_rule("listId", "invalidListId"),
        FieldRule(
            ("uuIdentity",), "invalidUuIdentity",
            "uuIdentity is required.",
            is_non_empty_string,
        ),
    ),
)

LEAVE = Command(
    name="shoppingList/leave",
    requires_identity=True,
    rules=(_id_rule("listId", "invalidListId"),),
)

ALL_COMMANDS = (
    CREATE, GET, LIST, UPDATE, DELETE, ADD_MEMBER, REMOVE_MEMBER, LEAVE,
)
