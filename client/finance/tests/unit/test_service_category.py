# finance/tests/unit/test_service_category.py
from unittest.mock import MagicMock, patch

import pytest
from django.core.exceptions import ValidationError

from finance.models import Category
from finance.services.category_service import CategoryService

from ..factories import CategoryPayloadFactory


@pytest.fixture
def api():
    return MagicMock()


@pytest.fixture
def service(api):
    return CategoryService(api)


class TestCategoryService:
    """Tests for CategoryService"""

    def test_format_from_api_defaults(self):
        category = CategoryService.format_from_api({"id": 1, "name": "Food"})

        assert category.color == "#6B7280"
        assert category.is_default is False
        assert category.transaction_count == 0

    def test_format_for_api(self):
        assert CategoryService.format_for_api({"name": "Pets", "description": ""}) == {
            "name": "Pets",
            "description": None,
            "color": "#6B7280",
        }

    @patch("finance.services.category_service.logger")
    def test_create_category(self, mock_logger, service, api):
        api.post.return_value = CategoryPayloadFactory(id=4, name="Pets", color="#FF5733")

        category = service.create_category({"name": "Pets", "color": "#FF5733"})

        api.post.assert_called_once_with(
            "/categories", data={"name": "Pets", "description": None, "color": "#FF5733"}
        )
        assert category.id == 4
        assert mock_logger.info.call_args[1]["extra"]["action"] == "category_created"

    def test_create_rejects_invalid_color_without_request(self, service, api):
        with pytest.raises(ValidationError, match="valid hex color"):
            service.create_category({"name": "Pets", "color": "red"})
        api.post.assert_not_called()

    def test_update_rejects_blank_name(self, service, api):
        with pytest.raises(ValidationError, match="Category name is required"):
            service.update_category(2, {"name": "  "})
        api.put.assert_not_called()

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get_all_categories", "/categories"),
            ("get_user_categories", "/categories/user"),
            ("get_default_categories", "/categories/default"),
            ("get_categories_with_transaction_count", "/categories/with-counts"),
        ],
    )
    def test_list_endpoints(self, service, api, method, path):
        api.get.return_value = CategoryPayloadFactory.build_batch(2)

        categories = getattr(service, method)()

        api.get.assert_called_once_with(path)
        assert len(categories) == 2
        assert all(isinstance(c, Category) for c in categories)

    def test_delete_and_cleanup(self, service, api):
        api.delete.return_value = "3 categories removed"

        service.delete_category(9)
        assert service.cleanup_unused_categories() == "3 categories removed"

        api.delete.assert_any_call("/categories/9")
        api.delete.assert_any_call("/categories/cleanup")

    def test_display_helpers(self):
        assert CategoryService.get_color(None) == "#6B7280"
        assert CategoryService.get_display_name(None) == "Uncategorized"
        assert CategoryService.get_display_name(Category(id=1, name="Food")) == "Food"

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Food", None),
            ("", "Category name is required"),
            ("x" * 100, None),
            ("x" * 101, "Category name must not exceed 100 characters"),
        ],
    )
    def test_validate_name(self, name, expected):
        assert CategoryService.validate_name(name) == expected

    @pytest.mark.parametrize("color, valid", [("#FF5733", True), ("#ff5733", True), (None, True), ("#FFF", False), ("FF5733", False)])
    def test_validate_color(self, color, valid):
        assert (CategoryService.validate_color(color) is None) is valid
