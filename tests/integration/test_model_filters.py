import pytest

from tests.models import Address, Member

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


@pytest.fixture
def member(registry):
    address = Address.objects.create(city="Seattle")
    return Member.objects.create(
        name="Foo Bar",
        fb={"id": 10, "name": "foo", "accessToken": "secret"},
        address=address,
        write_only_field="w",
        read_only_field="r",
    )


def test_read_projection_strings(registry):
    members = registry.get(Member)

    assert members.get_read_filter_keys("public") == "name fb.name id"
    assert members.get_read_filter_keys("nofilter") is None
    assert members.get_write_filter_keys("owner") == "name address fb.id write_only_field"


def test_apply_read_filter_on_instance(member):
    assert member.apply_read_filter("public") == {
        "id": member.pk,
        "name": "Foo Bar",
        "fb": {"name": "foo"},
    }


def test_owner_read_keeps_reference_identifier(member):
    document = member.apply_read_filter("owner")

    assert document["address"] == member.address_id
    assert document["fb"] == {"id": 10, "name": "foo"}
    assert "write_only_field" not in document


def test_unknown_role_reads_everything_with_nofilter_default(member):
    document = member.apply_read_filter("stranger")

    assert document["fb"]["accessToken"] == "secret"
    assert document["tickets"] == []


def test_apply_write_filter_on_instance(member):
    assert member.apply_write_filter("owner") == {
        "name": "Foo Bar",
        "address": member.address_id,
        "fb": {"id": 10},
        "write_only_field": "w",
    }


def test_extend_with_write_filter_updates_only_writable_fields(member):
    other = Address.objects.create(city="Portland")

    member.extend_with_write_filter(
        {
            "name": "<b>New</b>",
            "address": other.pk,
            "read_only_field": "hacked",
            "bankaccount": 99,
        },
        "owner",
    )
    member.save()
    member.refresh_from_db()

    assert member.name == "&lt;b&gt;New&lt;/b&gt;"
    assert member.address_id == other.pk
    assert member.read_only_field == "r"
    assert member.bankaccount_id is None


def test_extend_with_write_filter_drops_empty_reference(member):
    address_id = member.address_id

    member.extend_with_write_filter({"name": "Renamed", "address": ""}, "owner")

    assert member.name == "Renamed"
    assert member.address_id == address_id
