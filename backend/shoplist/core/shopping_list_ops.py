"""Shopping List Executors — pure transforms from validated input to new field values.

Invariants:
    - All functions are PURE: records are frozen, every result is a new value
    - Member and item collections are rebuilt whole (no in-place append/remove)
    - A new list is always active and has its creator as the single owner member
"""

from typing import Any

from shoplist.core.domain_types import (
    CallerContext,
    ListState,
    Member,
    MemberRole,
    ShoppingListDraft,
    ShoppingListRecord,
)


def build_new_list(name: str, caller: CallerContext, awid: str) -> ShoppingListDraft:
    owner = caller.uu_identity
    return ShoppingListDraft(
        awid=awid,
        name=name.strip(),
        owner_uu_identity=owner,
        state=ListState.ACTIVE,
        members=(Member(owner, MemberRole.OWNER),),
        items=(),
    )


def plan_update(name: str | None, state: ListState | None) -> dict[str, Any]:
    """Only supplied fields are replaced."""
    changes: dict[str, Any] = {}
    if name is not None:
        changes["name"] = name.strip()
    if state is not None:
        changes["state"] = ListState(state)
    return changes


def add_member(
    record: ShoppingListRecord, uu_identity: str, role: MemberRole = MemberRole.MEMBER,
) -> tuple[Member, ...]:
    # uniqueness of uu_identity within a list is not enforced
    return record.members + (Member(uu_identity, MemberRole(role)),)


def remove_member(record: ShoppingListRecord, uu_identity: str) -> tuple[Member, ...]:
    return tuple(m for m in record.members if m.uu_identity != uu_identity)


def leave(record: ShoppingListRecord, caller: CallerContext) -> tuple[Member, ...]:
    return remove_member(record, caller.uu_identity)


def page_offset(page_index: int, page_size: int) -> int:
    return page_index * page_size


MUTABLE_FIELDS = frozenset({"name", "state", "members", "items"})


def check_changes(changes: dict[str, Any]) -> None:
    """Stores accept only whole-field replacements of the mutable fields."""
    unknown = set(changes) - MUTABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be changed: {sorted(unknown)}")
