from __future__ import annotations

import pytest

from contemplate.errors import UnknownClassError
from contemplate.registry import REGISTRY
from contemplate.resolver import resolve


@pytest.mark.parametrize("class_name", sorted(REGISTRY))
def test_resolve_known_classes(class_name):
    descriptor = resolve(class_name)
    assert descriptor.class_name == class_name


@pytest.mark.parametrize("class_name", ["not-a-real-class", "Phat-Contract", "phat-contract ", ""])
def test_resolve_unknown_class_lists_supported(class_name):
    with pytest.raises(UnknownClassError) as excinfo:
        resolve(class_name)

    error = excinfo.value
    assert error.class_name == class_name
    assert error.supported == ("phat-contract", "phat-contract-with-sideprog")
    assert "phat-contract, phat-contract-with-sideprog" in str(error)


def test_resolve_against_custom_registry(registry):
    assert resolve("demo", registry).class_name == "demo"
    with pytest.raises(UnknownClassError, match="supported classes: demo"):
        resolve("phat-contract", registry)
