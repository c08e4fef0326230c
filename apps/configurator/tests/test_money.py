import pytest

from apps.configurator.conf import WidgetConfig
from apps.configurator.exceptions import MoneyFormatError
from apps.configurator.services.money import MoneyFormatter, shop_money_format


@pytest.mark.parametrize('cents,money_format,expected', [
    (3600, '${{amount}}', '$36.00'),
    (123456, '${{amount}}', '$1,234.56'),
    (123456, '{{amount_with_comma_separator}} €', '1.234,56 €'),
    (123456, '${{ amount_no_decimals }}', '$1,235'),
    (123456, 'R$ {{amount_no_decimals_with_comma_separator}}', 'R$ 1.235'),
    (123456, "{{amount_with_apostrophe_separator}} CHF", "1'234.56 CHF"),
    ('3600', '${{amount}}', '$36.00'),
])
def test_shop_money_format(cents, money_format, expected):
    assert shop_money_format(cents, money_format) == expected


@pytest.mark.parametrize('money_format', ['', '$ amount', '{{price}}'])
def test_shop_money_format_rejects_unknown_templates(money_format):
    with pytest.raises(MoneyFormatError):
        shop_money_format(100, money_format)


def test_host_formatter_is_used_first():
    formatter = MoneyFormatter(
        money_format='{{amount_with_comma_separator}} €',
        host_formatter=shop_money_format,
    )
    assert formatter.format(3600) == '36,00 €'


def test_broken_host_formatter_falls_back_to_locale():
    def broken(cents, money_format):
        raise RuntimeError('boom')

    assert MoneyFormatter(host_formatter=broken).format(3600) == '$36.00'
    assert MoneyFormatter(host_formatter=lambda c, f: '').format(3600) == '$36.00'


def test_localized_with_currency_symbol():
    assert MoneyFormatter(currency_code='EUR').format(123456) == '€1,234.56'
    assert MoneyFormatter(currency_code='CHF').format(3600) == 'CHF 36.00'
    assert MoneyFormatter(currency_code='BRL', language='pt-br').format(123456) == 'R$1.234,56'


def test_invalid_currency_falls_back_to_plain():
    assert MoneyFormatter(currency_code='US').format(3600) == '$36.00'


def test_plain_format():
    assert MoneyFormatter.format_plain(5) == '$0.05'


def test_formatted_amount_tracks_cents():
    formatter = MoneyFormatter()
    assert [formatter.format(c) for c in (99, 100, 1999, 100000)] == [
        '$0.99', '$1.00', '$19.99', '$1,000.00',
    ]


def test_host_formatter_from_settings(settings):
    settings.CONFIGURATOR = {
        'MONEY_FORMATTER': 'apps.configurator.services.money.shop_money_format',
        'MONEY_FORMAT': '{{amount_with_comma_separator}} kr',
    }
    formatter = MoneyFormatter.from_config(WidgetConfig.load())
    assert formatter.host_formatter is shop_money_format
    assert formatter.format(3600) == '36,00 kr'


def test_unimportable_host_formatter_is_ignored(settings):
    settings.CONFIGURATOR = {'MONEY_FORMATTER': 'apps.configurator.nowhere.fmt'}
    assert MoneyFormatter.load_host_formatter() is None
