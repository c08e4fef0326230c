"""
Widget configuration.

Project-wide defaults come from ``settings.CONFIGURATOR``; a product can
override the widget-level keys through ``Product.widget_config``. Every value
is parsed leniently: anything absent or unparseable falls back to its default.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from django.conf import settings

from apps.configurator.utils import to_bool, to_int

logger = logging.getLogger(__name__)

DEFAULTS = {
    'DEFAULT_PACK': 2,
    'PACK_OPTION_INDEX': None,
    'HAS_PACK_OPTION': None,
    'CURRENCY_CODE': 'USD',
    'ALLOWED_QUANTITIES': (1, 2, 4),
    'MONEY_FORMAT': '${{amount}}',
    'LANGUAGE': 'en-us',
    'ADD_TO_CART_TEXT': 'Add to cart',
    'SOLD_OUT_TEXT': 'Sold out',
    'NARROW_VIEWPORT_MAX_WIDTH': 989,
    # Project-level only, never read from a product's widget_config
    'MONEY_FORMATTER': None,
    'CATALOG_CACHE_TIMEOUT': 300,
}

PROJECT_ONLY_KEYS = ('MONEY_FORMATTER', 'CATALOG_CACHE_TIMEOUT')

_CURRENCY_RE = re.compile(r'^[A-Z]{3}$')


def get_setting(name: str) -> Any:
    """Read one key of ``settings.CONFIGURATOR`` with the built-in default."""
    user_settings = getattr(settings, 'CONFIGURATOR', None) or {}
    return user_settings.get(name, DEFAULTS[name])


def catalog_cache_timeout() -> int:
    """Seconds a normalized catalog stays cached; 0 disables caching."""
    default = DEFAULTS['CATALOG_CACHE_TIMEOUT']
    timeout = to_int(get_setting('CATALOG_CACHE_TIMEOUT'), default)
    return timeout if timeout >= 0 else default


def _positive_int(value: Any, default: int) -> int:
    parsed = to_int(value, default)
    return parsed if parsed > 0 else default


def _quantities(value: Any, default: Tuple[int, ...]) -> Tuple[int, ...]:
    if isinstance(value, str):
        value = value.split(',')
    if not isinstance(value, Iterable):
        return default
    parsed = {to_int(item, 0) for item in value}
    parsed = tuple(sorted(q for q in parsed if q > 0))
    return parsed or default


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


@dataclass(frozen=True)
class WidgetConfig:
    default_pack: int = DEFAULTS['DEFAULT_PACK']
    pack_option_index: Optional[int] = None
    has_pack_option: Optional[bool] = None
    currency_code: str = DEFAULTS['CURRENCY_CODE']
    allowed_quantities: Tuple[int, ...] = DEFAULTS['ALLOWED_QUANTITIES']
    money_format: str = DEFAULTS['MONEY_FORMAT']
    language: str = DEFAULTS['LANGUAGE']
    add_to_cart_text: str = DEFAULTS['ADD_TO_CART_TEXT']
    sold_out_text: str = DEFAULTS['SOLD_OUT_TEXT']
    narrow_viewport_max_width: int = DEFAULTS['NARROW_VIEWPORT_MAX_WIDTH']

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> 'WidgetConfig':
        """Build a config from a mapping with any key casing."""
        data = {}
        if isinstance(raw, Mapping):
            data = {str(k).upper(): v for k, v in raw.items()}
        elif raw is not None:
            logger.warning('Ignoring widget config of type %s', type(raw).__name__)

        pack_index = data.get('PACK_OPTION_INDEX')
        if pack_index is not None:
            pack_index = to_int(pack_index, -1)
            if pack_index < 0:
                pack_index = None

        currency = data.get('CURRENCY_CODE')
        currency = currency.strip().upper() if isinstance(currency, str) else ''
        if not _CURRENCY_RE.match(currency):
            currency = DEFAULTS['CURRENCY_CODE']

        return cls(
            default_pack=_positive_int(data.get('DEFAULT_PACK'), DEFAULTS['DEFAULT_PACK']),
            pack_option_index=pack_index,
            has_pack_option=to_bool(data.get('HAS_PACK_OPTION'), None),
            currency_code=currency,
            allowed_quantities=_quantities(
                data.get('ALLOWED_QUANTITIES'), DEFAULTS['ALLOWED_QUANTITIES']
            ),
            money_format=_text(data.get('MONEY_FORMAT'), DEFAULTS['MONEY_FORMAT']),
            language=_text(data.get('LANGUAGE'), DEFAULTS['LANGUAGE']),
            add_to_cart_text=_text(data.get('ADD_TO_CART_TEXT'), DEFAULTS['ADD_TO_CART_TEXT']),
            sold_out_text=_text(data.get('SOLD_OUT_TEXT'), DEFAULTS['SOLD_OUT_TEXT']),
            narrow_viewport_max_width=_positive_int(
                data.get('NARROW_VIEWPORT_MAX_WIDTH'), DEFAULTS['NARROW_VIEWPORT_MAX_WIDTH']
            ),
        )

    @classmethod
    def load(cls, overrides: Optional[Mapping[str, Any]] = None) -> 'WidgetConfig':
        """Project settings, then per-product overrides on top."""
        merged: Dict[str, Any] = {
            k: v for k, v in (getattr(settings, 'CONFIGURATOR', None) or {}).items()
            if k not in PROJECT_ONLY_KEYS
        }
        if isinstance(overrides, Mapping):
            for key, value in overrides.items():
                if str(key).upper() in PROJECT_ONLY_KEYS:
                    continue
                merged[str(key).upper()] = value
        return cls.from_mapping(merged)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'default_pack': self.default_pack,
            'pack_option_index': self.pack_option_index,
            'has_pack_option': self.has_pack_option,
            'currency_code': self.currency_code,
            'allowed_quantities': list(self.allowed_quantities),
            'money_format': self.money_format,
            'language': self.language,
            'add_to_cart_text': self.add_to_cart_text,
            'sold_out_text': self.sold_out_text,
            'narrow_viewport_max_width': self.narrow_viewport_max_width,
        }
