"""Shopping List Executors — pure transforms over frozen records."""

from uuid import uuid4

import pytest

from shoplist.core.domain_types import (
    CallerContext,
    ListState,
    Member,
    MemberRole,
    ShoppingListId,
    ShoppingListRecord,
)
from shoplist.core.shopping_list_ops import (
    add_member,
    build_new_list,
    check_changes,
    leave,
    page_offset,
    plan_update,
    remove_member,
)

CALLER = CallerContext("uu5:1234-5678")


def _record(*members: Member) -> ShoppingListRecord:
    return ShoppingListRecord(
        id=ShoppingListId(uuid4()),
        awid="shoppingListApp",
        name="List",
        state=ListState.ACTIVE,
        owner_uu_identity="uu5:1234-5678",
        members=members,
    )


def test_build_new_list_is_active_with_owner_member():
    draft = build_new_list("  Groceries ", CALLER, "awid-1")
    assert draft.name == "Groceries"
    assert draft.state == ListState.ACTIVE
    assert draft.awid == "awid-1"
    assert draft.owner_uu_identity == "uu5:1234-5678"
    assert draft.members == (Member("uu5:1234-5678", MemberRole.OWNER),)
    assert draft.items == ()


def test_plan_update_only_supplied_fields():
    assert plan_update(None, None) == {}
    assert plan_update(" New ", None) == {"name": "New"}
    assert plan_update(None, "archived") == {"state": ListState.ARCHIVED}


def test_add_member_returns_new_tuple():
    record = _record(Member("uu5:1234-5678", MemberRole.OWNER))
    members = add_member(record, "uu5:2")
    assert members[-1] == Member("uu5:2", MemberRole.MEMBER)
    assert len(record.members) == 1


def test_add_member_does_not_enforce_uniqueness():
    record = _record(Member("uu5:2"))
    assert len(add_member(record, "uu5:2")) == 2


def test_remove_member_drops_every_match():
    record = _record(Member("uu5:1"), Member("uu5:2"), Member("uu5:2"))
    assert remove_member(record, "uu5:2") == (Member("uu5:1"),)


def test_leave_removes_caller():
    record = _record(Member("uu5:1234-5678", MemberRole.OWNER), Member("uu5:2"))
    assert leave(record, CALLER) == (Member("uu5:2"),)


def test_page_offset():
    assert page_offset(0, 50) == 0
    assert page_offset(3, 20) == 60


def test_check_changes_rejects_immutable_fields():
    check_changes({"name": "x", "members": ()})
    with pytest.raises(ValueError):
        check_changes({"owner_uu_identity": "uu5:evil"})
