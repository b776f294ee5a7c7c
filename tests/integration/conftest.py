import pytest

from rail_documents import DocumentRegistry
from tests.models import Address, BankAccount, Member, Ticket

MEMBER_FILTER = {
    "read_filter": {
        "owner": ["name", "address", "fb.id", "fb.name", "read_only_field"],
        "public": ["name", "fb.name"],
    },
    "write_filter": {
        "owner": ["name", "address", "fb.id", "write_only_field"],
    },
    "sanitize": True,
}


@pytest.fixture
def registry():
    registry = DocumentRegistry()
    registry.register(Address, filter={"read_filter": {"public": ["city"]}})
    registry.register(Ticket, filter={"read_filter": {"public": ["title"]}})
    registry.register(BankAccount)
    registry.register(
        Member,
        filter=MEMBER_FILTER,
        denormalize={"defaults": ["address", "tickets"], "exclude": "bankaccount"},
    )
    yield registry
    registry.clear()
