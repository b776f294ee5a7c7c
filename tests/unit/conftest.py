import pytest

from rail_documents import DocumentRegistry, TypeDescriptor

USER_FIELDS = {
    "name": "scalar",
    "address": "reference:Address",
    "fb": {"id": "scalar", "name": "scalar", "accessToken": "scalar"},
    "transactions": "array:reference:Transaction",
    "tickets": "array:reference:Ticket",
    "bankaccount": "reference:BankAccount",
    "writeOnlyField": "scalar",
    "readOnlyField": "scalar",
}

USER_FILTER = {
    "readFilter": {
        "owner": ["name", "address", "fb.id", "fb.name", "readOnlyField"],
        "public": ["name", "fb.name"],
        "social": ["fb"],
        "fbid": ["fb.id"],
    },
    "writeFilter": {
        "owner": ["name", "address", "fb.id", "writeOnlyField"],
    },
    "defaultFilterRole": "nofilter",
}


@pytest.fixture
def user_descriptor():
    return TypeDescriptor("User", USER_FIELDS, primary_key="_id")


@pytest.fixture
def address_descriptor():
    return TypeDescriptor(
        "Address", {"city": "scalar", "street": "scalar"}, primary_key="_id"
    )


@pytest.fixture
def registry(user_descriptor, address_descriptor):
    registry = DocumentRegistry()
    registry.register(
        address_descriptor,
        filter={"read_filter": {"public": ["city"]}},
    )
    registry.register(
        user_descriptor,
        filter=USER_FILTER,
        denormalize={
            "defaults": ["address", "transactions", "tickets"],
            "exclude": "bankaccount",
        },
    )
    return registry


@pytest.fixture
def users(registry):
    return registry.get("User")


@pytest.fixture
def user_document():
    return {
        "_id": 7,
        "name": "Foo Bar",
        "address": 3,
        "fb": {"id": 1, "name": "foo", "accessToken": "secret"},
        "writeOnlyField": "w",
        "readOnlyField": "r",
        "tickets": [1, 2],
    }
