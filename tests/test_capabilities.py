from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from aurimyth.atomic_kit.domain.exceptions import UpsertArgumentError
from aurimyth.atomic_kit.domain.upsert import capabilities
from aurimyth.atomic_kit.domain.upsert.capabilities import (
    CapabilityRegistry,
    get_capability_registry,
    mapped_attributes,
)
from tests.models import Account, BrokenSoftDelete, LegacyRecord, Member, Subscriber


def test_nullable_marker_model_supports_soft_delete(registry: CapabilityRegistry) -> None:
    capability = registry.capability(Member)
    assert capability.supported
    assert capability.column == "deleted_at"
    assert capability.live_value is None


def test_sentinel_marker_model_supports_soft_delete(registry: CapabilityRegistry) -> None:
    capability = registry.capability(Subscriber)
    assert capability.supported
    assert capability.live_value == 0
    assert capability.is_live(0)
    assert not capability.is_live(1700000000)


def test_plain_model_does_not_support_soft_delete(registry: CapabilityRegistry) -> None:
    assert not registry.supports_soft_delete(Account)


def test_deleted_at_column_alone_is_not_a_capability(registry: CapabilityRegistry) -> None:
    assert "deleted_at" in mapped_attributes(LegacyRecord)
    assert not registry.supports_soft_delete(LegacyRecord)


def test_declared_marker_must_be_mapped(registry: CapabilityRegistry) -> None:
    with pytest.raises(TypeError, match="removed_at"):
        registry.capability(BrokenSoftDelete)


def test_capability_is_computed_once(registry: CapabilityRegistry, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[type] = []
    original = capabilities._inspect_capability

    def counting(model_class: type):
        calls.append(model_class)
        return original(model_class)

    monkeypatch.setattr(capabilities, "_inspect_capability", counting)

    first = registry.capability(Member)
    second = registry.capability(Member)
    registry.supports_soft_delete(Member)

    assert first is second
    assert calls == [Member]
    assert len(registry) == 1


def test_concurrent_first_lookups_converge(registry: CapabilityRegistry) -> None:
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: registry.capability(Subscriber), range(32)))

    assert len({id(result) for result in results}) == 1
    assert results[0] is registry.capability(Subscriber)


def test_clear_empties_cache(registry: CapabilityRegistry) -> None:
    registry.capability(Member)
    registry.clear()
    assert len(registry) == 0


def test_default_registry_is_shared() -> None:
    assert get_capability_registry() is get_capability_registry()


def test_mapped_attributes_rejects_unmapped_class() -> None:
    class NotAModel:
        pass

    with pytest.raises(UpsertArgumentError):
        mapped_attributes(NotAModel)
