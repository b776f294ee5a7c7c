import pytest
from django.test import override_settings

from rail_documents.config_proxy import (
    SettingsProxy,
    clear_runtime_settings,
    configure_runtime_settings,
    get_setting,
)

pytestmark = pytest.mark.unit


def test_library_defaults():
    assert get_setting("filter_settings.default_filter_role") == "nofilter"
    assert get_setting("filter_settings.sanitize") is False
    assert get_setting("denormalize_settings.suffix") == ""
    assert get_setting("missing.key", "fallback") == "fallback"


def test_django_settings_override_defaults():
    with override_settings(RAIL_DOCUMENTS={"filter_settings": {"sanitize": True}}):
        proxy = SettingsProxy()

        assert proxy.get("filter_settings.sanitize") is True
        assert proxy.get("filter_settings.sanitize_mode") == "escape"


def test_runtime_overrides_win_and_can_be_cleared():
    configure_runtime_settings(denormalize_settings__suffix="_obj")
    assert get_setting("denormalize_settings.suffix") == "_obj"

    clear_runtime_settings("denormalize_settings")
    assert get_setting("denormalize_settings.suffix") == ""


def test_validate_reports_bad_values():
    with override_settings(
        RAIL_DOCUMENTS={
            "filter_settings": {"sanitize_mode": "rot13"},
            "graphql": {},
        }
    ):
        results = SettingsProxy().validate()

    assert results["valid"] is False
    assert any("rot13" in error for error in results["errors"])
    assert results["warnings"] == ["Unknown RAIL_DOCUMENTS section 'graphql' is ignored"]
