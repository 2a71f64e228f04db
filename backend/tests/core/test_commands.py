"""Command Table — names, success codes and error key prefixes."""

from shoplist.core import commands
from shoplist.core.domain_types import Profile


def test_every_command_is_namespaced():
    names = [c.name for c in commands.ALL_COMMANDS]
    assert len(names) == len(set(names)) == 8
    assert all(n.startswith("shoppingList/") for n in names)


def test_only_create_returns_201():
    assert commands.CREATE.success_status == 201
    assert {
        c.success_status for c in commands.ALL_COMMANDS if c is not commands.CREATE
    } == {200}


def test_get_and_list_are_open():
    assert commands.GET.required_profiles == frozenset()
    assert commands.LIST.required_profiles == frozenset()


def test_member_management_is_owner_or_authorities():
    expected = frozenset({Profile.OWNER, Profile.AUTHORITIES})
    assert commands.ADD_MEMBER.required_profiles == expected
    assert commands.REMOVE_MEMBER.required_profiles == expected


def test_rule_violations_are_unique_per_command():
    for command in commands.ALL_COMMANDS:
        violations = [r.violation for r in command.rules]
        assert len(violations) == len(set(violations)), command.name
