"""
Configuration management for rail-documents.

This module provides a settings proxy that resolves configuration from
runtime overrides, the Django ``RAIL_DOCUMENTS`` setting and library
defaults, in that order.
"""

from typing import Any, Optional

from django.conf import settings

from .defaults import LIBRARY_DEFAULTS

# Runtime storage for overrides (avoids modifying Django settings)
_RUNTIME_SETTINGS: dict[str, Any] = {}

SETTINGS_NAME = "RAIL_DOCUMENTS"

VALID_SANITIZE_MODES = ("escape", "clean")


class SettingsProxy:
    """
    Proxy for accessing rail-documents settings with hierarchical resolution.

    Settings are resolved in the following order:
    1. Runtime overrides (via configure_runtime_settings)
    2. Django settings (RAIL_DOCUMENTS)
    3. Library defaults (LIBRARY_DEFAULTS)
    """

    def __init__(self):
        self._cache: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value with hierarchical resolution and caching.

        Args:
            key: Setting key to retrieve (dot notation)
            default: Default value if setting is not found

        Returns:
            The setting value from the highest priority source
        """
        if key in self._cache:
            return self._cache[key]

        for source in (_RUNTIME_SETTINGS, self._get_django_settings(), LIBRARY_DEFAULTS):
            value = self._get_nested_value(source, key)
            if value is not None:
                self._cache[key] = value
                return value

        return default

    def _get_django_settings(self) -> dict[str, Any]:
        if not settings.configured:
            return {}
        return getattr(settings, SETTINGS_NAME, {}) or {}

    def _get_nested_value(self, data: dict[str, Any], key: str) -> Any:
        """
        Get nested value from dictionary using dot notation.

        Args:
            data: Dictionary to search in
            key: Key to retrieve (supports dot notation for nested access)

        Returns:
            The value or None if not found
        """
        if not isinstance(data, dict):
            return None

        current = data
        for k in key.split("."):
            if not isinstance(current, dict) or k not in current:
                return None
            current = current[k]

        return current

    def clear_cache(self) -> None:
        """Clear the settings cache."""
        self._cache.clear()

    def validate(self) -> dict[str, Any]:
        """
        Validate current settings configuration.

        Returns:
            Dictionary with validation results
        """
        validation_results = {"valid": True, "errors": [], "warnings": []}

        mode = self.get("filter_settings.sanitize_mode")
        if mode not in VALID_SANITIZE_MODES:
            validation_results["errors"].append(
                f"Unknown sanitize mode '{mode}', expected one of {VALID_SANITIZE_MODES}"
            )
            validation_results["valid"] = False

        suffix = self.get("denormalize_settings.suffix")
        if not isinstance(suffix, str):
            validation_results["errors"].append(
                "Setting 'denormalize_settings.suffix' must be a string"
            )
            validation_results["valid"] = False

        unknown = set(self._get_django_settings()) - set(LIBRARY_DEFAULTS)
        for section in sorted(unknown):
            validation_results["warnings"].append(
                f"Unknown {SETTINGS_NAME} section '{section}' is ignored"
            )

        return validation_results


# Global settings proxy instance
settings_proxy = SettingsProxy()


def get_settings_proxy() -> SettingsProxy:
    """Return the shared settings proxy."""
    return settings_proxy


def get_setting(key: str, default: Any = None) -> Any:
    """
    Get a setting value using the hierarchical settings system.

    Args:
        key: Setting key to retrieve
        default: Default value if setting is not found

    Returns:
        The setting value from the highest priority source
    """
    return settings_proxy.get(key, default)


def configure_runtime_settings(clear_existing: bool = False, **overrides: Any) -> None:
    """
    Configure runtime settings overrides.

    Keys use double underscores for nesting, e.g.
    ``configure_runtime_settings(filter_settings__sanitize=True)``.

    Args:
        clear_existing: Whether to drop previously configured overrides
        **overrides: Setting key-value pairs to override
    """
    if clear_existing:
        _RUNTIME_SETTINGS.clear()

    for raw_key, value in overrides.items():
        keys = raw_key.split("__")
        current = _RUNTIME_SETTINGS
        for k in keys[:-1]:
            current = current.setdefault(k, {})
        current[keys[-1]] = value

    settings_proxy.clear_cache()


def clear_runtime_settings(section: Optional[str] = None) -> None:
    """
    Clear runtime settings overrides.

    Args:
        section: If provided, only clear this section. If None, clear all.
    """
    if section:
        _RUNTIME_SETTINGS.pop(section, None)
    else:
        _RUNTIME_SETTINGS.clear()

    settings_proxy.clear_cache()
