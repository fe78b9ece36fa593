"""
Unit tests for provider selection, configuration and the storage factory.
"""

import pytest
from pathlib import Path

from collection_manager.storage.factory import (
    create_collection_provider,
    create_collection_service,
    create_default_collection_service,
    create_provider_registry,
    load_storage_config,
)
from collection_manager.storage.notifications import CollectionChanged, ObserverList
from collection_manager.storage.providers.filesystem import FilesystemCollectionProvider
from collection_manager.storage.providers.memory import MemoryCollectionProvider
from collection_manager.storage.registry import ProviderConfigurationError, ProviderRegistry
from collection_manager.storage.service import CollectionService


class TestProviderRegistry:
    """Test cases for ProviderRegistry."""

    def test_first_candidate_is_selected(self):
        first = MemoryCollectionProvider()
        second = MemoryCollectionProvider()

        registry = ProviderRegistry([first, second])

        assert registry.selected() is first
        assert registry.selected() is first
        assert registry.candidates == (first, second)

    def test_candidates_are_captured_once(self):
        def candidates():
            yield MemoryCollectionProvider()

        registry = ProviderRegistry(candidates())

        assert registry.selected() is registry.selected()
        assert len(registry.candidates) == 1

    def test_no_candidates_fails_fast(self):
        registry = ProviderRegistry([])

        with pytest.raises(ProviderConfigurationError):
            registry.selected()


class TestObserverList:
    """Test cases for ObserverList."""

    def test_register_notify_unregister(self):
        received = []
        listener = received.append
        observers = ObserverList("collection_added")

        observers.register(listener)
        assert len(observers) == 1
        assert observers.notify("c1") == 1
        assert received == [CollectionChanged(collection_id="c1")]

        assert observers.unregister(listener) is True
        assert observers.unregister(listener) is False
        assert observers.notify("c2") == 0
        assert received == [CollectionChanged(collection_id="c1")]

    def test_notify_without_listeners(self):
        assert ObserverList("collection_deleted").notify("c1") == 0

    def test_failing_listener_is_isolated(self):
        received = []

        def broken(event):
            raise ValueError("bad listener")

        observers = ObserverList("collection_edited")
        observers.register(broken)
        observers.register(received.append)

        assert observers.notify("c1") == 1
        assert [e.collection_id for e in received] == ["c1"]

    def test_listener_may_unregister_itself(self):
        observers = ObserverList("active_collection_changed")
        calls = []

        def once(event):
            calls.append(event.collection_id)
            observers.unregister(once)

        observers.register(once)
        observers.notify("c1")
        observers.notify("c2")

        assert calls == ["c1"]


class TestStorageFactory:
    """Test cases for storage factory functions."""

    @pytest.fixture
    def config_file(self, tmp_path):
        path = tmp_path / "collections.yaml"
        path.write_text(
            "storage:\n"
            "  providers:\n"
            f"    - type: filesystem\n"
            f"      path: {tmp_path / 'collections.json'}\n"
            "    - type: memory\n",
            encoding="utf-8"
        )
        return path

    @pytest.fixture(autouse=True)
    def clean_environment(self, monkeypatch):
        monkeypatch.delenv("COLLECTIONS_PROVIDER_TYPE", raising=False)
        monkeypatch.delenv("COLLECTIONS_FILESYSTEM_PATH", raising=False)
        monkeypatch.delenv("COLLECTIONS_CONFIG_PATH", raising=False)

    def test_create_filesystem_provider(self):
        provider = create_collection_provider({"type": "filesystem", "path": "/tmp/test/collections.json"})

        assert isinstance(provider, FilesystemCollectionProvider)
        assert provider.storage_path == Path("/tmp/test/collections.json")

    def test_relative_filesystem_path_resolves_against_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        provider = create_collection_provider({"type": "filesystem", "path": "data/c.json"})
        assert provider.storage_path == tmp_path / "data" / "c.json"

    def test_create_memory_provider(self):
        assert isinstance(create_collection_provider({"type": "memory"}), MemoryCollectionProvider)

    def test_unknown_provider_type(self):
        with pytest.raises(ProviderConfigurationError):
            create_collection_provider({"type": "s3"})

    def test_registry_keeps_configured_order(self):
        registry = create_provider_registry({
            "storage": {"providers": [{"type": "memory"}, {"type": "filesystem", "path": "/tmp/c.json"}]}
        })

        assert isinstance(registry.selected(), MemoryCollectionProvider)
        assert len(registry.candidates) == 2

    def test_service_without_providers_fails(self):
        with pytest.raises(ProviderConfigurationError):
            create_collection_service({"storage": {"providers": []}})

    def test_create_collection_service(self):
        service = create_collection_service({"storage": {"providers": [{"type": "memory"}]}})

        assert isinstance(service, CollectionService)
        assert isinstance(service.provider, MemoryCollectionProvider)

    def test_injected_provider_wins(self):
        provider = MemoryCollectionProvider()
        service = create_collection_service({"storage": {"providers": []}}, provider=provider)
        assert service.provider is provider

    def test_load_config(self, config_file, tmp_path):
        config = load_storage_config(config_file)

        providers = config["storage"]["providers"]
        assert [p["type"] for p in providers] == ["filesystem", "memory"]
        assert providers[0]["path"] == str(tmp_path / "collections.json")

    def test_environment_overrides(self, config_file, monkeypatch):
        monkeypatch.setenv("COLLECTIONS_PROVIDER_TYPE", "memory")
        monkeypatch.setenv("COLLECTIONS_FILESYSTEM_PATH", "/srv/collections.json")

        config = load_storage_config(config_file)

        assert config["storage"]["providers"][0]["type"] == "memory"
        assert isinstance(create_collection_service(config).provider, MemoryCollectionProvider)

    def test_filesystem_path_override(self, config_file, monkeypatch):
        monkeypatch.setenv("COLLECTIONS_FILESYSTEM_PATH", "/srv/collections.json")

        service = create_collection_service(load_storage_config(config_file))

        assert service.provider.storage_path == Path("/srv/collections.json")

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(ProviderConfigurationError):
            load_storage_config(tmp_path / "missing.yaml")

    def test_missing_storage_section(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("logging:\n  level: INFO\n", encoding="utf-8")

        with pytest.raises(ProviderConfigurationError):
            load_storage_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("storage: [unclosed\n", encoding="utf-8")

        with pytest.raises(ProviderConfigurationError):
            load_storage_config(path)

    def test_non_mapping_provider_entry_with_override(self, tmp_path, monkeypatch):
        path = tmp_path / "scalar.yaml"
        path.write_text("storage:\n  providers:\n    - memory\n", encoding="utf-8")
        monkeypatch.setenv("COLLECTIONS_PROVIDER_TYPE", "memory")

        with pytest.raises(ProviderConfigurationError):
            load_storage_config(path)

    def test_non_mapping_provider_entry_without_override(self, tmp_path):
        path = tmp_path / "scalar.yaml"
        path.write_text("storage:\n  providers:\n    - memory\n", encoding="utf-8")

        with pytest.raises(ProviderConfigurationError):
            load_storage_config(path)

    def test_create_default_collection_service(self, config_file):
        service = create_default_collection_service(config_file)
        assert isinstance(service.provider, FilesystemCollectionProvider)
