"""
Category service for the backend's ``/categories`` endpoints.

Handles default and user-created categories, their statistics and cleanup,
plus the client-side display and validation helpers used by forms.
"""

import logging
import re

from django.core.exceptions import ValidationError

from ..constants import CATEGORY_MAX_LENGTH, DEFAULT_CATEGORY_COLOR
from ..models import Category
from ..utils.wire_utils import parse_timestamp

logger = logging.getLogger(__name__)

HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


class CategoryService:
    """
    Client-side gateway to category management.

    Categories are referenced by name from transactions; nothing here
    enforces that a transaction's category exists.
    """

    def __init__(self, api_client):
        self.api = api_client

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    @staticmethod
    def format_for_api(category):
        return {
            "name": category.get("name"),
            "description": category.get("description") or None,
            "color": category.get("color") or DEFAULT_CATEGORY_COLOR,
        }

    @staticmethod
    def format_from_api(payload):
        return Category(
            id=payload.get("id"),
            name=payload.get("name"),
            description=payload.get("description"),
            color=payload.get("color") or DEFAULT_CATEGORY_COLOR,
            is_default=bool(payload.get("isDefault")),
            transaction_count=int(payload.get("transactionCount") or 0),
            created_at=parse_timestamp(payload.get("createdAt")),
            updated_at=parse_timestamp(payload.get("updatedAt")),
        )

    def _format_list(self, payload):
        return [self.format_from_api(item) for item in payload or []]

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def create_category(self, category_data):
        """
        Create a user category after client-side validation.

        Raises:
            ValidationError: name or color rejected before any network call
        """
        self._raise_for_invalid(category_data)
        category = self.format_from_api(
            self.api.post("/categories", data=self.format_for_api(category_data))
        )

        logger.info(
            "Category created",
            extra={
                "category_id": category.id,
                "category_name": category.name,
                "action": "category_created",
                "component": "CategoryService",
            },
        )
        return category

    def get_all_categories(self):
        """User categories together with the default ones."""
        return self._format_list(self.api.get("/categories"))

    def get_user_categories(self):
        return self._format_list(self.api.get("/categories/user"))

    def get_default_categories(self):
        return self._format_list(self.api.get("/categories/default"))

    def get_category(self, category_id):
        return self.format_from_api(self.api.get(f"/categories/{category_id}"))

    def update_category(self, category_id, category_data):
        self._raise_for_invalid(category_data)
        category = self.format_from_api(
            self.api.put(f"/categories/{category_id}", data=self.format_for_api(category_data))
        )

        logger.info(
            "Category updated",
            extra={
                "category_id": category_id,
                "action": "category_updated",
                "component": "CategoryService",
            },
        )
        return category

    def delete_category(self, category_id):
        result = self.api.delete(f"/categories/{category_id}")

        logger.info(
            "Category deleted",
            extra={
                "category_id": category_id,
                "action": "category_deleted",
                "component": "CategoryService",
            },
        )
        return result

    def get_categories_with_transaction_count(self):
        return self._format_list(self.api.get("/categories/with-counts"))

    def get_category_statistics(self):
        return self.api.get("/categories/statistics") or {}

    def cleanup_unused_categories(self):
        result = self.api.delete("/categories/cleanup")

        logger.info(
            "Unused categories cleaned up",
            extra={
                "result": result,
                "action": "categories_cleanup",
                "component": "CategoryService",
            },
        )
        return result

    # ------------------------------------------------------------------
    # Display and validation helpers
    # ------------------------------------------------------------------

    @staticmethod
    def get_color(category):
        return getattr(category, "color", None) or DEFAULT_CATEGORY_COLOR

    @staticmethod
    def get_display_name(category):
        return getattr(category, "name", None) or "Uncategorized"

    @staticmethod
    def validate_name(name):
        if not name or not name.strip():
            return "Category name is required"
        if len(name.strip()) > CATEGORY_MAX_LENGTH:
            return f"Category name must not exceed {CATEGORY_MAX_LENGTH} characters"
        return None

    @staticmethod
    def validate_color(color):
        if not color:
            return None
        if not HEX_COLOR_PATTERN.match(color):
            return "Color must be a valid hex color code (e.g., #FF5733)"
        return None

    def _raise_for_invalid(self, category_data):
        error = self.validate_name(category_data.get("name")) or self.validate_color(
            category_data.get("color")
        )
        if error:
            logger.warning(
                "Category rejected by client-side validation",
                extra={
                    "category_name": category_data.get("name"),
                    "error_message": error,
                    "action": "category_validation_failed",
                    "component": "CategoryService",
                    "severity": "low",
                },
            )
            raise ValidationError(error)
