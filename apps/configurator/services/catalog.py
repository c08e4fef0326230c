"""
Catalog Model: the typed, immutable shape every other service works on.

Catalog documents come from the stored product (``Product.to_catalog_document``)
or straight from a storefront host, and their shape is loose: option values
may be a list or ``option1``/``option2``/``option3`` fields, prices may be
strings, media may be missing. Everything is normalized here, once, so the
resolver and projector only ever see ``Catalog``.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from apps.configurator.exceptions import CatalogError
from apps.configurator.utils import to_int

logger = logging.getLogger(__name__)

MAX_POSITIONAL_OPTIONS = 3

_QUERY_RE = re.compile(r'[?#].*$')
_SCHEME_RE = re.compile(r'^https?:', re.IGNORECASE)
_SIZE_SUFFIX_RE = re.compile(r'_(?:\d+x\d+|\d+x|\d+)(?=\.[a-z0-9]+$)', re.IGNORECASE)


def normalize_media_locator(src: Any) -> Optional[str]:
    """
    Reduce a media URL to a comparable locator.

    Drops the query string/fragment, the scheme (so ``//cdn`` and
    ``https://cdn`` compare equal) and a trailing size token right before
    the extension: ``_600x600``, ``_600x`` or ``_2``.
    """
    if not src or not isinstance(src, str):
        return None
    locator = _QUERY_RE.sub('', src.strip())
    locator = _SCHEME_RE.sub('', locator)
    locator = _SIZE_SUFFIX_RE.sub('', locator)
    return locator.lower() or None


@dataclass(frozen=True)
class Option:
    name: str
    position: int

    @property
    def is_pack_named(self) -> bool:
        return 'pack' in self.name.lower()


@dataclass(frozen=True)
class Variant:
    """One purchasable entry. ``values`` has one raw string per option."""
    id: str
    values: Tuple[str, ...]
    price: int = 0
    compare_at_price: int = 0
    available: bool = False
    media_id: Optional[str] = None
    media_src: Optional[str] = None
    title: str = ''
    sku: str = ''

    @property
    def media_locator(self) -> Optional[str]:
        return normalize_media_locator(self.media_src)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'sku': self.sku,
            'options': list(self.values),
            'price': self.price,
            'compare_at_price': self.compare_at_price,
            'available': self.available,
            'featured_media': (
                {'id': self.media_id, 'src': self.media_src}
                if self.media_id or self.media_src else None
            ),
        }


@dataclass(frozen=True)
class MediaItem:
    id: str
    src: Optional[str] = None
    alt: str = ''

    @property
    def locator(self) -> Optional[str]:
        return normalize_media_locator(self.src)


@dataclass(frozen=True)
class Catalog:
    """
    Options, variants and media of one product, in catalog order.

    Catalog order is meaningful: every "first" fallback in the resolver
    uses it as the tie-break.
    """
    options: Tuple[Option, ...] = ()
    variants: Tuple[Variant, ...] = ()
    media: Tuple[MediaItem, ...] = ()

    @classmethod
    def from_document(cls, document: Any) -> 'Catalog':
        return CatalogNormalizer.normalize(document)

    @property
    def is_empty(self) -> bool:
        return not self.variants

    @property
    def option_count(self) -> int:
        return len(self.options)

    @property
    def option_names(self) -> List[str]:
        return [option.name for option in self.options]

    @property
    def first_variant(self) -> Optional[Variant]:
        return self.variants[0] if self.variants else None

    @property
    def first_available_variant(self) -> Optional[Variant]:
        for variant in self.variants:
            if variant.available:
                return variant
        return None

    @property
    def available_variants(self) -> Tuple[Variant, ...]:
        return tuple(v for v in self.variants if v.available)

    def get_variant(self, variant_id: Any) -> Optional[Variant]:
        needle = str(variant_id or '')
        if not needle:
            return None
        for variant in self.variants:
            if variant.id == needle:
                return variant
        return None

    def get_media(self, media_id: Any) -> Optional[MediaItem]:
        needle = str(media_id or '')
        if not needle:
            return None
        for item in self.media:
            if item.id == needle:
                return item
        return None

    def to_document(self) -> Dict[str, Any]:
        return {
            'options': self.option_names,
            'variants': [v.to_dict() for v in self.variants],
            'media': [{'id': m.id, 'src': m.src, 'alt': m.alt} for m in self.media],
        }


class CatalogNormalizer:
    """
    Converts a raw catalog document into a ``Catalog``.

    A missing or unreadable document gives an empty catalog; a malformed
    variant is skipped. Nothing here raises to the caller.
    """

    @staticmethod
    def normalize(document: Any) -> Catalog:
        try:
            data = CatalogNormalizer._load(document)
        except CatalogError as e:
            logger.warning('Catalog document unusable, using empty catalog: %s', e)
            return Catalog()

        raw_variants = data.get('variants')
        if not isinstance(raw_variants, list):
            if raw_variants is not None:
                logger.warning('Catalog "variants" is not a list, ignoring it')
            raw_variants = []

        option_names = CatalogNormalizer._option_names(data.get('options'))
        if not option_names and raw_variants:
            option_names = CatalogNormalizer._infer_option_names(raw_variants)

        options = tuple(
            Option(name=name, position=index)
            for index, name in enumerate(option_names)
        )

        variants = []
        for position, raw in enumerate(raw_variants):
            try:
                variants.append(
                    CatalogNormalizer.normalize_variant(raw, len(options))
                )
            except CatalogError as e:
                logger.warning('Skipping catalog variant #%d: %s', position, e)

        return Catalog(
            options=options,
            variants=tuple(variants),
            media=tuple(CatalogNormalizer._normalize_media(data.get('media'))),
        )

    @staticmethod
    def normalize_variant(raw: Any, option_count: int) -> Variant:
        """
        Normalize a single variant.

        Raises:
            CatalogError: if the variant has no id or its option values do
                not line up with the product's options.
        """
        if not isinstance(raw, dict):
            raise CatalogError(f'variant must be an object, got {type(raw).__name__}')

        raw_id = raw.get('id')
        if raw_id is None or str(raw_id).strip() == '':
            raise CatalogError('variant has no id')

        values = CatalogNormalizer._variant_values(raw)
        if len(values) != option_count:
            raise CatalogError(
                f'variant {raw_id} has {len(values)} option values, '
                f'expected {option_count}'
            )

        media_id, media_src = CatalogNormalizer._variant_media(raw)

        return Variant(
            id=str(raw_id).strip(),
            values=values,
            price=max(0, to_int(raw.get('price'), 0)),
            compare_at_price=max(0, to_int(raw.get('compare_at_price'), 0)),
            available=bool(raw.get('available', False)),
            media_id=media_id,
            media_src=media_src,
            title=str(raw.get('title') or ''),
            sku=str(raw.get('sku') or ''),
        )

    @staticmethod
    def _load(document: Any) -> Dict[str, Any]:
        if document is None:
            raise CatalogError('no catalog document')
        if isinstance(document, (bytes, bytearray)):
            document = document.decode('utf-8', errors='replace')
        if isinstance(document, str):
            if not document.strip():
                raise CatalogError('catalog document is blank')
            try:
                document = json.loads(document)
            except ValueError as e:
                raise CatalogError(f'catalog JSON parse failed: {e}')
        if not isinstance(document, dict):
            raise CatalogError(f'catalog must be an object, got {type(document).__name__}')
        return document

    @staticmethod
    def _option_names(raw_options: Any) -> List[str]:
        if not isinstance(raw_options, list):
            return []
        names = []
        for index, raw in enumerate(raw_options):
            if isinstance(raw, dict):
                raw = raw.get('name')
            name = str(raw).strip() if raw is not None else ''
            names.append(name or f'Option {index + 1}')
        return names

    @staticmethod
    def _infer_option_names(raw_variants: List[Any]) -> List[str]:
        for raw in raw_variants:
            if not isinstance(raw, dict):
                continue
            try:
                values = CatalogNormalizer._variant_values(raw)
            except CatalogError:
                continue
            return [f'Option {index + 1}' for index in range(len(values))]
        return []

    @staticmethod
    def _variant_values(raw: Dict[str, Any]) -> Tuple[str, ...]:
        values = raw.get('values')
        if not isinstance(values, list):
            values = raw.get('options')
        if not isinstance(values, list):
            values = []
            for n in range(1, MAX_POSITIONAL_OPTIONS + 1):
                value = raw.get(f'option{n}')
                if value is None:
                    break
                values.append(value)

        normalized = []
        for value in values:
            if value is None or isinstance(value, (dict, list)):
                raise CatalogError(f'unusable option value {value!r}')
            normalized.append(str(value))
        return tuple(normalized)

    @staticmethod
    def _variant_media(raw: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
        for key in ('featured_media', 'featured_image'):
            media = raw.get(key)
            if not isinstance(media, dict):
                continue
            media_id = media.get('id')
            src = media.get('src')
            if not src and isinstance(media.get('preview_image'), dict):
                src = media['preview_image'].get('src')
            if media_id is not None or src:
                return (
                    str(media_id) if media_id is not None else None,
                    str(src) if src else None,
                )
        return None, None

    @staticmethod
    def _normalize_media(raw_media: Any) -> List[MediaItem]:
        if not isinstance(raw_media, list):
            return []
        items = []
        for raw in raw_media:
            if not isinstance(raw, dict) or raw.get('id') is None:
                continue
            src = raw.get('src')
            if not src and isinstance(raw.get('preview_image'), dict):
                src = raw['preview_image'].get('src')
            items.append(MediaItem(
                id=str(raw['id']),
                src=str(src) if src else None,
                alt=str(raw.get('alt') or ''),
            ))
        return items
