from django.apps import AppConfig


class FinanceConfig(AppConfig):
    # Application name (Python path)
    name = "finance"
    verbose_name = "Finance API client"

    def ready(self):
        """Log the backend the client is configured against."""
        import logging

        from django.conf import settings

        logger = logging.getLogger(__name__)
        logger.info(
            "Finance app ready",
            extra={
                "base_url": settings.FINANCE_API_BASE_URL,
                "action": "finance_app_ready",
                "component": "FinanceConfig",
            },
        )
