"""
Pack-option detection: which option (if any) encodes a bundle size.
Computed once per catalog; the result is immutable.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from apps.configurator.conf import WidgetConfig
from apps.configurator.services.catalog import Catalog

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r'\d+')


def parse_pack_size(value: Any) -> Optional[int]:
    """
    Bundle size encoded in a raw option value: the first run of digits.

    Example:
        '4-pack' -> 4, 'Pack of 12' -> 12, 'Single' -> None
    """
    if value is None:
        return None
    match = _DIGITS_RE.search(str(value))
    if not match:
        return None
    size = int(match.group(0))
    return size if size > 0 else None


@dataclass(frozen=True)
class PackDesignation:
    """
    Result of pack detection.

    ``size_values`` maps every bundle size to the first raw option value
    (catalog order) that encodes it. Pack semantics are on only when that
    mapping is non-empty.
    """
    option_index: Optional[int] = None
    size_values: Dict[int, str] = field(default_factory=dict)

    @property
    def enabled(self) -> bool:
        return self.option_index is not None and bool(self.size_values)

    @property
    def sizes(self) -> Tuple[int, ...]:
        return tuple(sorted(self.size_values))

    def value_for_size(self, size: int) -> Optional[str]:
        return self.size_values.get(size)

    def size_for_value(self, value: Any) -> Optional[int]:
        size = parse_pack_size(value)
        return size if size in self.size_values else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'enabled': self.enabled,
            'option_index': self.option_index if self.enabled else None,
            'sizes': list(self.sizes),
            'values': {str(size): self.size_values[size] for size in self.sizes},
        }


class PackOptionDetector:
    """Detects the pack option of a catalog, honoring widget overrides."""

    @staticmethod
    def detect(catalog: Catalog, config: Optional[WidgetConfig] = None) -> PackDesignation:
        config = config or WidgetConfig()

        if config.has_pack_option is False or catalog.option_count == 0:
            return PackDesignation()

        index = PackOptionDetector._designated_index(catalog, config)
        if index is None:
            return PackDesignation()

        size_values = PackOptionDetector.size_map(catalog, index)
        if not size_values:
            logger.debug('Option %d carries no bundle sizes, pack semantics off', index)
            return PackDesignation()

        return PackDesignation(option_index=index, size_values=size_values)

    @staticmethod
    def size_map(catalog: Catalog, index: int) -> Dict[int, str]:
        """Size -> first-seen raw value for one option index."""
        mapping: Dict[int, str] = {}
        for variant in catalog.variants:
            value = variant.values[index]
            size = parse_pack_size(value)
            if size is not None and size not in mapping:
                mapping[size] = value
        return mapping

    @staticmethod
    def _designated_index(catalog: Catalog, config: WidgetConfig) -> Optional[int]:
        override = config.pack_option_index
        if override is not None:
            if override < catalog.option_count:
                return override
            logger.warning(
                'pack_option_index %d out of range for %d options, detecting instead',
                override, catalog.option_count,
            )

        for option in catalog.options:
            if option.is_pack_named:
                return option.position

        # No option named after packs: pick the one with the most distinct sizes
        best_index = None
        best_count = 0
        for option in catalog.options:
            count = len(PackOptionDetector.size_map(catalog, option.position))
            if count > best_count:
                best_index = option.position
                best_count = count
        return best_index
