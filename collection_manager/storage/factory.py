"""
Storage factory for creating collection providers and the collection service.

This module provides factory functions for creating the provider registry
and the collection service based on configuration. The concrete providers
are built here and injected; nothing is discovered implicitly.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Any, List, Optional

import yaml

from .providers.base import CollectionProvider
from .providers.filesystem import FilesystemCollectionProvider
from .providers.memory import MemoryCollectionProvider
from .registry import ProviderConfigurationError, ProviderRegistry
from .service import CollectionService

logger = logging.getLogger(__name__)


def load_storage_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load storage configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to configuration file (default: config/collections.yaml)

    Returns:
        Configuration dictionary

    Raises:
        ProviderConfigurationError: If configuration loading fails
    """
    if config_path is None:
        config_path = Path(os.getenv('COLLECTIONS_CONFIG_PATH', 'config/collections.yaml'))
    config_path = Path(config_path)

    if not config_path.exists():
        raise ProviderConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ProviderConfigurationError(f"YAML parsing error: {e}") from e
    except OSError as e:
        raise ProviderConfigurationError(f"Configuration loading failed: {e}") from e

    if not isinstance(config, dict) or not isinstance(config.get('storage'), dict):
        raise ProviderConfigurationError("Invalid configuration: missing 'storage' section")

    return _apply_environment_overrides(config)


def _apply_environment_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Environment variables follow the pattern: COLLECTIONS_<SECTION>_<KEY>

    Args:
        config: Base configuration dictionary

    Returns:
        Configuration with environment overrides applied
    """
    providers = config['storage'].get('providers') or []
    config['storage']['providers'] = providers
    if not isinstance(providers, list):
        # Rejected later by create_provider_registry
        return config

    for provider_config in providers:
        if not isinstance(provider_config, dict):
            raise ProviderConfigurationError(f"Invalid provider entry: {provider_config!r}")

    # Provider type override applies to the selected (first) candidate
    provider_type = os.getenv('COLLECTIONS_PROVIDER_TYPE')
    if provider_type:
        if providers:
            providers[0]['type'] = provider_type
        else:
            providers.append({'type': provider_type})
        logger.info(f"Provider type overridden by environment: {provider_type}")

    fs_path = os.getenv('COLLECTIONS_FILESYSTEM_PATH')
    if fs_path:
        for provider_config in providers:
            if provider_config.get('type') == 'filesystem':
                provider_config['path'] = fs_path
        logger.info(f"Filesystem path overridden by environment: {fs_path}")

    return config


def create_collection_provider(provider_config: Dict[str, Any]) -> CollectionProvider:
    """
    Create one collection provider from its configuration entry.

    Args:
        provider_config: A single entry of ``storage.providers``

    Returns:
        CollectionProvider instance

    Raises:
        ProviderConfigurationError: If the provider type is unknown
    """
    if not isinstance(provider_config, dict):
        raise ProviderConfigurationError(f"Invalid provider entry: {provider_config!r}")

    provider_type = provider_config.get('type', 'filesystem')

    if provider_type == 'filesystem':
        return _create_filesystem_provider(provider_config)
    elif provider_type == 'memory':
        logger.info("Creating in-memory collection provider")
        return MemoryCollectionProvider()
    else:
        raise ProviderConfigurationError(f"Unknown collection provider type: {provider_type}")


def _create_filesystem_provider(provider_config: Dict[str, Any]) -> FilesystemCollectionProvider:
    """
    Create filesystem collection provider.

    Args:
        provider_config: Filesystem provider entry of the configuration

    Returns:
        FilesystemCollectionProvider instance
    """
    storage_path = Path(provider_config.get('path', 'data/collections.json'))
    if not storage_path.is_absolute():
        storage_path = Path.cwd() / storage_path

    logger.info(f"Creating filesystem collection provider: path={storage_path}")

    return FilesystemCollectionProvider(storage_path)


def create_provider_registry(config: Dict[str, Any]) -> ProviderRegistry:
    """
    Create the provider registry from the ordered ``storage.providers`` list.

    Args:
        config: Storage configuration dictionary

    Returns:
        ProviderRegistry holding every configured candidate

    Raises:
        ProviderConfigurationError: If the configuration is malformed
    """
    try:
        provider_configs = config['storage'].get('providers') or []
    except (KeyError, AttributeError) as e:
        raise ProviderConfigurationError(f"Missing required configuration key: {e}") from e

    if not isinstance(provider_configs, list):
        raise ProviderConfigurationError("Invalid configuration: 'storage.providers' must be a list")

    candidates: List[CollectionProvider] = [
        create_collection_provider(provider_config) for provider_config in provider_configs
    ]
    return ProviderRegistry(candidates)


def create_collection_service(config: Dict[str, Any], provider: Optional[CollectionProvider] = None) -> CollectionService:
    """
    Create collection service bound to the selected provider.

    Args:
        config: Storage configuration dictionary
        provider: Optional provider (selected from the configured registry if not provided)

    Returns:
        CollectionService instance

    Raises:
        ProviderConfigurationError: If no provider can be selected
    """
    if provider is None:
        provider = create_provider_registry(config).selected()

    logger.info(f"Creating collection service with provider: {provider.provider_name}")

    return CollectionService(provider)


def create_default_collection_service(config_path: Optional[Path] = None) -> CollectionService:
    """
    Create collection service with default configuration.

    This is the main entry point for creating a collection service with
    configuration loaded from file and environment overrides.

    Args:
        config_path: Optional path to configuration file

    Returns:
        CollectionService instance ready for use

    Raises:
        ProviderConfigurationError: If configuration or creation fails
    """
    try:
        config = load_storage_config(config_path)
        return create_collection_service(config)
    except ProviderConfigurationError as e:
        logger.error(f"Failed to create default collection service: {e}")
        raise
