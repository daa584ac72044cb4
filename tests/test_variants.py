"""
测试载荷变体和变体注册表
"""
import sys
import os
from dataclasses import dataclass

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from fish_tree.core.node.entity import TreeNode
from fish_tree.data.variants import (
    BaseVariant, OneFish, TwoFish, RedFish, BlueFish, VariantRegistry
)
from fish_tree.exceptions import (
    InvalidArgumentError, VariantNotFoundError, VariantValidationError
)


class TestPayloads:
    """测试各个载荷的默认字段"""

    def test_one_fish_defaults(self):
        payload = OneFish()
        assert payload.some_prop is False
        assert payload.was_constructor_called is True

    def test_two_fish_requires_two_args(self):
        payload = TwoFish("first", "second")
        assert payload.first == "first"
        assert payload.second == "second"
        assert payload.post_constructor_called is False

    def test_two_fish_with_one_arg(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            TwoFish("only")
        assert exc_info.value.details["argument"] == "second"

    def test_two_fish_without_args(self):
        with pytest.raises(InvalidArgumentError):
            TwoFish()

    def test_red_fish_set_something(self):
        payload = RedFish()
        assert (payload.x, payload.y, payload.z) == (0, 1, -1)

        payload.set_something(3, 4, 5)
        assert (payload.x, payload.y, payload.z) == (3, 4, 5)

    def test_blue_fish_has_no_fields(self):
        assert BlueFish().to_dict() == {}

    def test_payload_does_not_change_tree_behavior(self):
        parent = TreeNode(payload=RedFish())
        child = TreeNode(payload=TwoFish(1, 2))
        parent.add_child(child)

        assert parent.variant == "red_fish"
        assert child.variant == "two_fish"
        assert child.get_parent() is parent

    def test_from_dict_ignores_unknown_fields(self):
        payload = RedFish.from_dict({"x": 7, "y": 8, "z": 9, "color": "red"})
        assert payload.to_dict() == {"x": 7, "y": 8, "z": 9}


class TestVariantRegistry:
    """测试变体注册表"""

    @pytest.fixture
    def registry(self):
        return VariantRegistry()

    def test_builtin_variants(self, registry):
        assert registry.list_variants() == ["blue_fish", "one_fish", "red_fish", "two_fish"]
        assert "one_fish" in registry
        assert len(registry) == 4

    def test_create_payload(self, registry):
        payload = registry.create_payload("two_fish", "a", "b")
        assert isinstance(payload, TwoFish)

    def test_create_payload_propagates_argument_error(self, registry):
        with pytest.raises(InvalidArgumentError):
            registry.create_payload("two_fish", "a")

    def test_unknown_variant(self, registry):
        with pytest.raises(VariantNotFoundError):
            registry.get_variant("green_fish")

    def test_register_custom_variant(self, registry):
        @dataclass
        class GreenFish(BaseVariant):
            variant_name = "green_fish"
            shade: int = 0

        registry.register(GreenFish)
        assert registry.create_payload("green_fish", shade=3).shade == 3

        registry.unregister("green_fish")
        assert not registry.has_variant("green_fish")

    def test_duplicate_registration(self, registry):
        with pytest.raises(VariantValidationError):
            registry.register(OneFish)

    def test_register_non_variant(self, registry):
        with pytest.raises(VariantValidationError):
            registry.register(dict)
