import pytest
from django.conf import settings

from rail_documents.config_proxy import clear_runtime_settings


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without a database")
    config.addinivalue_line("markers", "integration: tests using Django models")
    if not settings.configured:
        settings.configure(
            DEBUG=False,
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME": ":memory:",
                }
            },
            INSTALLED_APPS=[
                "django.contrib.contenttypes",
                "rail_documents",
                "tests",
            ],
            DEFAULT_AUTO_FIELD="django.db.models.AutoField",
            USE_TZ=True,
            RAIL_DOCUMENTS={},
        )


@pytest.fixture(autouse=True)
def _reset_runtime_settings():
    clear_runtime_settings()
    yield
    clear_runtime_settings()
