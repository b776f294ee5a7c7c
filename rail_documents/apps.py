"""
Django app configuration for the rail-documents library.
"""

import logging

from django.apps import AppConfig as BaseAppConfig

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for rail-documents."""

    name = "rail_documents"
    verbose_name = "Rail Documents"
    label = "rail_documents"

    def ready(self):
        """Validate library settings once Django has loaded."""
        from .config_proxy import get_settings_proxy

        results = get_settings_proxy().validate()
        for warning in results["warnings"]:
            logger.warning(warning)
        if not results["valid"]:
            from django.core.exceptions import ImproperlyConfigured

            raise ImproperlyConfigured("; ".join(results["errors"]))
        logger.debug("rail-documents settings validated")
