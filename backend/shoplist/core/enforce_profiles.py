"""Authorization Gate — profile intersection check per command.

Invariants:
    - Pure: decision depends only on the command and the caller context
    - Commands without required profiles are open; requires_identity only
      demands an authenticated caller
"""

from shoplist.core.commands import Command
from shoplist.core.domain_types import CallerContext, Profile


def has_any_profile(caller: CallerContext, required: frozenset[Profile]) -> bool:
    return bool(caller.profiles & required)


def is_authorized(command: Command, caller: CallerContext) -> bool:
    """Caller profiles must intersect the command's required profiles."""
    if command.requires_identity and not caller.is_authenticated:
        return False
    if command.required_profiles:
        return has_any_profile(caller, command.required_profiles)
    return True
