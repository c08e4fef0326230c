"""
Resolution engine: selection vector -> one catalog variant.

Pure and deterministic. A selection that matches nothing is not an error;
the fallback chain always lands on something unless the catalog is empty.
"""

from typing import Optional, Sequence, Tuple

from apps.configurator.services.catalog import Catalog, Variant
from apps.configurator.services.pack_detection import PackDesignation

Selection = Tuple[Optional[str], ...]


class VariantResolver:
    """
    Resolves selections against one catalog.

    Priority chain (first hit wins, catalog order breaks ties):
        1. exact match on every option, available or not
        2. available variant matching every option except the pack option
        3. available variant sharing at least one selected value
        4. first available variant
        5. first variant
        6. None (empty catalog)
    """

    def __init__(self, catalog: Catalog, pack: Optional[PackDesignation] = None):
        self.catalog = catalog
        self.pack = pack or PackDesignation()

    def resolve(self, selection: Sequence[Optional[str]]) -> Optional[Variant]:
        selection = tuple(selection)
        catalog = self.catalog

        if catalog.is_empty:
            return None

        # Sold-out exact matches are returned as-is so the shopper sees them
        exact = self.find_exact(selection)
        if exact is not None:
            return exact

        available = catalog.available_variants

        if self.pack.enabled:
            skip = self.pack.option_index
            for variant in available:
                if self._matches(variant, selection, skip=skip):
                    return variant

        for variant in available:
            if self._overlaps(variant, selection):
                return variant

        if available:
            return available[0]

        return catalog.first_variant

    def resolve_for_pack_size(
        self,
        size: int,
        selection: Sequence[Optional[str]]
    ) -> Optional[Variant]:
        """
        Resolve the variant a given bundle size would select, without
        committing anything: only the pack slot of a copy of ``selection``
        is replaced.
        """
        return self.resolve(self.substitute_pack(selection, size))

    def substitute_pack(
        self,
        selection: Sequence[Optional[str]],
        size: int
    ) -> Selection:
        hypothetical = list(selection)
        if not self.pack.enabled:
            return tuple(hypothetical)
        value = self.pack.value_for_size(size)
        index = self.pack.option_index
        if value is not None and index < len(hypothetical):
            hypothetical[index] = value
        return tuple(hypothetical)

    def find_exact(self, selection: Selection) -> Optional[Variant]:
        if len(selection) != self.catalog.option_count:
            return None
        for variant in self.catalog.variants:
            if variant.values == selection:
                return variant
        return None

    @staticmethod
    def _matches(variant: Variant, selection: Selection, skip: Optional[int] = None) -> bool:
        if len(selection) != len(variant.values):
            return False
        return all(
            value == selection[index]
            for index, value in enumerate(variant.values)
            if index != skip
        )

    @staticmethod
    def _overlaps(variant: Variant, selection: Selection) -> bool:
        return any(
            index < len(selection) and selection[index] is not None
            and value == selection[index]
            for index, value in enumerate(variant.values)
        )
