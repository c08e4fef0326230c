"""
Money formatting with a three-stage fallback:

1. host formatter (``CONFIGURATOR['MONEY_FORMATTER']``, called with
   ``(cents, money_format)``)
2. locale-aware formatting through Django's localization under the
   widget language, prefixed with the currency symbol
3. ``"$" + two decimals``

Each stage is guarded on its own, so a broken host formatter still gets
the localized output and a broken locale still gets the plain one.
"""

import logging
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Optional

from django.utils import formats, numberformat, translation
from django.utils.module_loading import import_string

from apps.configurator.conf import WidgetConfig, get_setting
from apps.configurator.exceptions import MoneyFormatError
from apps.configurator.utils import to_int

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = {
    'USD': '$',
    'CAD': 'CA$',
    'AUD': 'A$',
    'EUR': '€',
    'GBP': '£',
    'BRL': 'R$',
    'JPY': '¥',
}

_CURRENCY_RE = re.compile(r'^[A-Z]{3}$')
_PLACEHOLDER_RE = re.compile(r'\{\{\s*(\w+)\s*\}\}')

# placeholder -> (decimal places, thousands separator, decimal separator)
_SHOP_FORMATS = {
    'amount': (2, ',', '.'),
    'amount_no_decimals': (0, ',', '.'),
    'amount_with_comma_separator': (2, '.', ','),
    'amount_no_decimals_with_comma_separator': (0, '.', ','),
    'amount_with_apostrophe_separator': (2, "'", '.'),
}

MoneyFormatterCallable = Callable[[int, str], str]


def cents_to_decimal(cents: int) -> Decimal:
    return Decimal(int(cents)) / Decimal(100)


def shop_money_format(cents: Any, money_format: str = '${{amount}}') -> str:
    """
    Storefront-template money formatting, e.g. ``'${{amount}}'`` or
    ``'{{amount_with_comma_separator}} €'``.

    Raises:
        MoneyFormatError: if the template has no known placeholder.
    """
    match = _PLACEHOLDER_RE.search(money_format or '')
    if not match or match.group(1) not in _SHOP_FORMATS:
        raise MoneyFormatError(f'Unsupported money format {money_format!r}')

    places, thousands, decimal_sep = _SHOP_FORMATS[match.group(1)]
    amount = cents_to_decimal(to_int(cents, 0))
    amount = amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    number = numberformat.format(
        amount,
        decimal_sep,
        decimal_pos=places,
        grouping=3,
        thousand_sep=thousands,
        force_grouping=True,
    )
    return money_format[:match.start()] + number + money_format[match.end():]


class MoneyFormatter:

    def __init__(
        self,
        currency_code: str = 'USD',
        money_format: str = '${{amount}}',
        language: str = 'en-us',
        host_formatter: Optional[MoneyFormatterCallable] = None,
    ):
        self.currency_code = currency_code
        self.money_format = money_format
        self.language = language
        self.host_formatter = host_formatter

    @classmethod
    def from_config(cls, config: WidgetConfig) -> 'MoneyFormatter':
        return cls(
            currency_code=config.currency_code,
            money_format=config.money_format,
            language=config.language,
            host_formatter=cls.load_host_formatter(),
        )

    @staticmethod
    def load_host_formatter() -> Optional[MoneyFormatterCallable]:
        path = get_setting('MONEY_FORMATTER')
        if not path:
            return None
        if callable(path):
            return path
        try:
            return import_string(path)
        except ImportError as e:
            logger.warning('MONEY_FORMATTER %r could not be imported: %s', path, e)
            return None

    def format(self, cents: Any) -> str:
        safe_cents = to_int(cents, 0)

        for stage in (self.format_with_host, self.format_localized):
            try:
                return stage(safe_cents)
            except Exception as e:
                logger.debug('Money stage %s failed: %s', stage.__name__, e)

        return self.format_plain(safe_cents)

    def format_with_host(self, cents: int) -> str:
        if self.host_formatter is None:
            raise MoneyFormatError('No host money formatter configured')
        result = self.host_formatter(cents, self.money_format)
        if not isinstance(result, str) or not result:
            raise MoneyFormatError(f'Host formatter returned {result!r}')
        return result

    def format_localized(self, cents: int) -> str:
        code = (self.currency_code or '').upper()
        if not _CURRENCY_RE.match(code):
            raise MoneyFormatError(f'Invalid currency code {self.currency_code!r}')

        with translation.override(self.language):
            number = formats.number_format(
                cents_to_decimal(cents),
                decimal_pos=2,
                use_l10n=True,
                force_grouping=True,
            )

        symbol = CURRENCY_SYMBOLS.get(code)
        if symbol:
            return f'{symbol}{number}'
        return f'{code} {number}'

    @staticmethod
    def format_plain(cents: int) -> str:
        return f'${cents_to_decimal(cents):.2f}'
