# finance/tests/unit/test_service_currency.py
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from finance.services.currency_service import CurrencyService
from finance.utils.currency_utils import CurrencyConversionError

from ..factories import ConversionPayloadFactory


@pytest.fixture
def api():
    return MagicMock()


@pytest.fixture
def service(api):
    return CurrencyService(api)


class TestCurrencyService:
    """Tests for CurrencyService"""

    @patch("finance.services.currency_service.logger")
    def test_convert_currency(self, mock_logger, service, api):
        api.post.return_value = ConversionPayloadFactory()

        result = service.convert_currency(100, "USD", "EUR")

        api.post.assert_called_once_with(
            "/currency/convert",
            data={"amount": Decimal("100"), "fromCurrency": "USD", "toCurrency": "EUR"},
        )
        assert result.converted_amount == Decimal("92.0")
        assert result.exchange_rate == Decimal("0.92")
        assert result.timestamp is not None
        assert mock_logger.info.call_args[1]["extra"]["action"] == "currency_conversion_completed"

    def test_convert_currency_rejects_non_numeric_amount(self, service, api):
        with pytest.raises(CurrencyConversionError) as excinfo:
            service.convert_currency("abc", "USD", "EUR")

        assert excinfo.value.message == "Amount must be a valid number"
        assert excinfo.value.to_currency == "EUR"
        api.post.assert_not_called()

    def test_get_exchange_rate(self, service, api):
        api.get.return_value = {"fromCurrency": "USD", "toCurrency": "GBP", "exchangeRate": 0.79}

        assert service.get_exchange_rate("USD", "GBP") == Decimal("0.79")
        api.get.assert_called_once_with("/currency/rate/USD/GBP")

    def test_get_exchange_rates(self, service, api):
        api.get.return_value = {"baseCurrency": "USD", "rates": {"EUR": 0.92, "JPY": 149.5}}

        rates = service.get_exchange_rates("USD")

        assert rates == {"EUR": Decimal("0.92"), "JPY": Decimal("149.5")}

    def test_convert_multiple_currencies(self, service, api):
        api.post.return_value = [
            ConversionPayloadFactory(toCurrency="EUR"),
            ConversionPayloadFactory(toCurrency="GBP", exchangeRate=0.79),
        ]

        results = service.convert_multiple_currencies(100, "USD", ["EUR", "GBP"])

        api.post.assert_called_once_with(
            "/currency/convert-multiple",
            params={"amount": 100, "fromCurrency": "USD", "toCurrencies": "EUR,GBP"},
        )
        assert [r.to_currency for r in results] == ["EUR", "GBP"]

    def test_info_and_cache_endpoints(self, service, api):
        api.get.side_effect = [["USD", "EUR"], {"code": "EUR"}, {"cacheStale": False, "message": "ok"}]
        api.delete.return_value = "Exchange rate cache cleared"

        assert service.get_supported_currencies() == ["USD", "EUR"]
        assert service.get_currency_info("EUR") == {"code": "EUR"}
        assert service.get_cache_status()["cacheStale"] is False
        assert service.clear_cache() == "Exchange rate cache cleared"
        api.delete.assert_called_once_with("/currency/cache")

    def test_display_helpers(self):
        assert CurrencyService.format_amount_with_currency(Decimal("92"), "EUR") == "€92.00"
        assert CurrencyService.get_currency_name("JPY") == "Japanese Yen"
        assert CurrencyService.validate_amount(0) == "Amount must be greater than 0"
