"""Tests for phrase_validation.matchers.registry module."""

import pytest

from phrase_validation.errors import MatcherNotFound
from phrase_validation.expect import Expect
from phrase_validation.matchers import (
    BUILTIN_MATCHERS,
    MatcherRegistry,
    MatcherResult,
    create_default_registry,
    get_default_registry,
    reset_default_registry,
)
from phrase_validation.matchers.registry import RESERVED_NAMES


@pytest.fixture(autouse=True)
def clean_default_registry():
    """Rebuild the default registry before and after each test."""
    reset_default_registry()
    yield
    reset_default_registry()


def always(ctx, *args):
    return MatcherResult(passed=True, message="always")


def never(ctx, *args):
    return MatcherResult(passed=False, message="never")


class TestMatcherRegistry:
    def test_register_and_lookup(self):
        registry = MatcherRegistry()
        registry.register("to_pass_always", always)

        assert registry.lookup("to_pass_always") is always
        assert "to_pass_always" in registry
        assert len(registry) == 1

    def test_last_registration_wins(self):
        registry = MatcherRegistry({"to_check": always})
        registry.register("to_check", never)

        assert registry.lookup("to_check") is never

    def test_update_registers_every_entry(self):
        registry = MatcherRegistry()
        registry.update({"to_a": always, "to_b": never})

        assert list(registry) == ["to_a", "to_b"]

    def test_unknown_name(self):
        with pytest.raises(MatcherNotFound, match="to_fly matcher not found") as exc_info:
            MatcherRegistry().lookup("to_fly")

        assert exc_info.value.name == "to_fly"
        assert isinstance(exc_info.value, AttributeError)

    def test_rejects_non_callable(self):
        with pytest.raises(TypeError, match="Matcher 'to_x' must be callable"):
            MatcherRegistry().register("to_x", 42)

    def test_rejects_private_names(self):
        with pytest.raises(ValueError, match="must not start with an underscore"):
            MatcherRegistry().register("_hidden", always)

    @pytest.mark.parametrize("name", ["settle", "resolve", "context", "poll", "soft", "not_", "registry"])
    def test_rejects_handle_attribute_names(self, name):
        registry = MatcherRegistry()

        with pytest.raises(ValueError, match=f"'{name}' is reserved by the assertion handle"):
            registry.register(name, always)
        assert name not in registry

    def test_reserved_names_cover_every_handle_attribute(self):
        handle = Expect(1, registry=MatcherRegistry())
        public = {name for name in dir(Expect) if not name.startswith("_")}
        public |= {name for name in vars(handle) if not name.startswith("_")}

        assert public <= RESERVED_NAMES


class TestDerivedRegistry:
    def test_child_falls_back_to_parent(self):
        parent = MatcherRegistry({"to_a": always})
        child = parent.derive({"to_b": never})

        assert child.lookup("to_a") is always
        assert child.lookup("to_b") is never
        assert child.names() == {"to_a", "to_b"}

    def test_child_registrations_do_not_reach_parent(self):
        parent = MatcherRegistry({"to_a": always})
        child = parent.derive()
        child.register("to_b", never)

        assert "to_b" not in parent
        with pytest.raises(MatcherNotFound):
            parent.lookup("to_b")

    def test_child_shadows_parent(self):
        parent = MatcherRegistry({"to_a": always})
        child = parent.derive({"to_a": never})

        assert child.lookup("to_a") is never
        assert parent.lookup("to_a") is always
        assert len(child) == 1

    def test_later_parent_registrations_are_visible(self):
        parent = MatcherRegistry()
        child = parent.derive()
        parent.register("to_late", always)

        assert child.lookup("to_late") is always


class TestDefaultRegistry:
    def test_holds_builtin_matchers(self):
        registry = get_default_registry()

        assert registry.names() == set(BUILTIN_MATCHERS)
        assert registry.lookup("to_equal") is BUILTIN_MATCHERS["to_equal"]

    def test_is_shared(self):
        assert get_default_registry() is get_default_registry()

    def test_reset_returns_fresh_registry(self):
        before = get_default_registry()
        before.register("to_custom", always)

        after = reset_default_registry()

        assert after is not before
        assert after is get_default_registry()
        assert "to_custom" not in after

    def test_create_default_registry_is_independent(self):
        registry = create_default_registry()
        registry.register("to_custom", always)

        assert "to_custom" not in get_default_registry()
