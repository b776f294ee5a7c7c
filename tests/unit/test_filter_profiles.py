import pytest

from rail_documents import ConfigurationError
from rail_documents.config_proxy import configure_runtime_settings
from rail_documents.filtering.profiles import FilterKind, FilterProfileRegistry

from .conftest import USER_FILTER

pytestmark = pytest.mark.unit


def test_read_keys_always_carry_primary_key(user_descriptor):
    profiles = FilterProfileRegistry.from_options(user_descriptor, USER_FILTER)

    assert profiles.get_filter_keys("read", "public") == ["name", "fb.name", "_id"]
    assert profiles.get_read_filter_keys("public") == "name fb.name _id"


def test_primary_key_is_appended_even_when_listed(user_descriptor):
    profiles = FilterProfileRegistry(
        user_descriptor, read_filter={"ids": ["_id", "name"]}
    )

    assert profiles.get_filter_keys(FilterKind.READ, "ids") == ["_id", "name", "_id"]


def test_write_keys_do_not_carry_primary_key(user_descriptor):
    profiles = FilterProfileRegistry.from_options(user_descriptor, USER_FILTER)

    assert profiles.get_filter_keys("write", "owner") == [
        "name",
        "address",
        "fb.id",
        "writeOnlyField",
    ]
    assert profiles.get_write_filter_keys("owner") == "name address fb.id writeOnlyField"


def test_nofilter_and_unknown_roles(user_descriptor):
    profiles = FilterProfileRegistry.from_options(user_descriptor, USER_FILTER)

    assert profiles.get_filter_keys("read", "nofilter") is None
    assert profiles.get_read_filter_keys("nofilter") is None
    # default role is nofilter
    assert profiles.get_filter_keys("read", "stranger") is None
    assert profiles.get_filter_keys("write", None) is None


def test_unknown_role_falls_back_to_default_role(user_descriptor):
    options = dict(USER_FILTER, defaultFilterRole="owner")
    profiles = FilterProfileRegistry.from_options(user_descriptor, options)

    assert profiles.get_filter_keys("read", "stranger") == profiles.get_filter_keys(
        "read", "owner"
    )
    assert profiles.get_filter_keys("write", "public") == profiles.get_filter_keys(
        "write", "owner"
    )


def test_default_role_without_profile_is_a_configuration_error(user_descriptor):
    options = dict(USER_FILTER, defaultFilterRole="auditor")

    with pytest.raises(ConfigurationError):
        FilterProfileRegistry.from_options(user_descriptor, options)


def test_default_role_missing_from_write_profiles_is_rejected(user_descriptor):
    options = dict(USER_FILTER, defaultFilterRole="public")

    with pytest.raises(ConfigurationError, match="write"):
        FilterProfileRegistry.from_options(user_descriptor, options)


def test_default_role_missing_from_unconfigured_direction_is_rejected(user_descriptor):
    with pytest.raises(ConfigurationError, match="write"):
        FilterProfileRegistry.from_options(
            user_descriptor,
            {"read_filter": {"public": ["name"]}, "default_filter_role": "public"},
        )


def test_direction_without_profiles_is_unrestricted_under_nofilter(user_descriptor):
    profiles = FilterProfileRegistry(user_descriptor, read_filter={"public": ["name"]})

    assert profiles.get_filter_keys("read", "public") == ["name", "_id"]
    assert profiles.get_filter_keys("write", "public") is None


def test_unknown_field_in_profile_is_rejected(user_descriptor):
    with pytest.raises(ConfigurationError) as excinfo:
        FilterProfileRegistry(user_descriptor, read_filter={"public": ["nickname"]})

    assert excinfo.value.field_name == "nickname"
    assert excinfo.value.type_name == "User"


def test_path_through_scalar_field_is_rejected(user_descriptor):
    with pytest.raises(ConfigurationError):
        FilterProfileRegistry(user_descriptor, write_filter={"owner": ["name.first"]})


def test_unknown_nested_field_is_rejected(user_descriptor):
    with pytest.raises(ConfigurationError):
        FilterProfileRegistry(user_descriptor, read_filter={"owner": ["fb.password"]})


def test_nofilter_cannot_be_redefined(user_descriptor):
    with pytest.raises(ConfigurationError, match="reserved"):
        FilterProfileRegistry(user_descriptor, read_filter={"nofilter": ["name"]})


def test_unknown_option_is_rejected(user_descriptor):
    with pytest.raises(ConfigurationError):
        FilterProfileRegistry.from_options(user_descriptor, {"readFilters": {}})


def test_settings_provide_defaults(user_descriptor):
    configure_runtime_settings(
        filter_settings__default_filter_role="public",
        filter_settings__sanitize=True,
    )
    profiles = FilterProfileRegistry.from_options(
        user_descriptor,
        {"read_filter": {"public": ["name"]}, "write_filter": {"public": ["name"]}},
    )

    assert profiles.default_filter_role == "public"
    assert profiles.sanitize is True
