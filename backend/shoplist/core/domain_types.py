"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ShoppingListId wraps UUID — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching
    - Member, Item and ShoppingListRecord are frozen: executors build new values

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ShoppingListId = NewType("ShoppingListId", UUID)
UuIdentity = NewType("UuIdentity", str)


# ─── Enums ───────────────────────────────────────────────────────

class Profile(str, Enum):
    """Application profiles (roles) asserted by the upstream trust boundary."""
    AUTHORITIES = "Authorities"
    USER = "User"
    OWNER = "ShoppingListOwner"
    MEMBER = "ShoppingListMember"


class ListState(str, Enum):
    """Shopping list lifecycle states — maps to DB `state` column."""
    ACTIVE = "active"
    ARCHIVED = "archived"


class MemberRole(str, Enum):
    """Role of a member inside one shopping list."""
    OWNER = "owner"
    MEMBER = "member"


class CommandOutcome(str, Enum):
    """Terminal states of a single command request."""
    REJECTED = "rejected"
    FAILED = "failed"
    SUCCEEDED = "succeeded"


# ─── Values ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class CallerContext:
    """Per-request identity and profile set. Passed explicitly, never global."""
    uu_identity: UuIdentity
    profiles: frozenset[Profile] = frozenset()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.uu_identity and self.uu_identity.strip())


@dataclass(frozen=True)
class Member:
    uu_identity: str
    role: MemberRole = MemberRole.MEMBER

    def to_dict(self) -> dict:
        return {"uuIdentity": self.uu_identity, "role": self.role.value}

    @classmethod
    def from_dict(cls, data: dict) -> "Member":
        return cls(
            uu_identity=data["uuIdentity"],
            role=MemberRole(data.get("role", MemberRole.MEMBER.value)),
        )


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    quantity: int = 1
    unit: str = "pcs"
    resolved: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "resolved": self.resolved,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Item":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            quantity=data.get("quantity", 1),
            unit=data.get("unit", "pcs"),
            resolved=data.get("resolved", False),
        )


@dataclass(frozen=True)
class ShoppingListDraft:
    """Fields of a list that does not have a store-assigned id yet."""
    awid: str
    name: str
    owner_uu_identity: str
    state: ListState = ListState.ACTIVE
    members: tuple[Member, ...] = ()
    items: tuple[Item, ...] = ()


@dataclass(frozen=True)
class ShoppingListRecord:
    """A persisted shopping list as seen by the core."""
    id: ShoppingListId
    awid: str
    name: str
    state: ListState
    owner_uu_identity: str
    members: tuple[Member, ...] = ()
    items: tuple[Item, ...] = ()
    created_at: datetime | None = field(default=None, compare=False)
    updated_at: datetime | None = field(default=None, compare=False)
