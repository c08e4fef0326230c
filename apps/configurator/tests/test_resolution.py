from apps.configurator.services import Catalog, PackOptionDetector, VariantResolver


def test_exact_match_wins_even_when_sold_out(resolver):
    variant = resolver.resolve(('Red', '4-pack'))
    assert variant.id == '3'
    assert variant.available is False
    assert variant.price == 6800


def test_partial_overlap_picks_first_in_catalog_order(resolver):
    variant = resolver.resolve(('Green', '2-pack'))
    assert variant.id == '2'
    assert variant.price == 3600
    assert variant.compare_at_price == 4000


def test_same_non_pack_values_beat_overlap(resolver):
    # Blue 4-pack does not exist; the only available Blue is the 2-pack
    assert resolver.resolve(('Blue', '4-pack')).id == '4'


def test_unset_slots_are_ignored_for_overlap(resolver):
    assert resolver.resolve((None, '2-pack')).id == '2'


def test_nothing_shared_falls_back_to_first_available(resolver):
    assert resolver.resolve(('Green', '8-pack')).id == '1'


def test_all_sold_out_falls_back_to_first_variant():
    catalog = Catalog.from_document({
        'options': ['Color'],
        'variants': [
            {'id': 'a', 'options': ['Red'], 'available': False},
            {'id': 'b', 'options': ['Blue'], 'available': False},
        ],
    })
    assert VariantResolver(catalog).resolve(('Green',)).id == 'a'


def test_empty_catalog_resolves_to_none():
    assert VariantResolver(Catalog()).resolve(()) is None


def test_resolution_is_deterministic(resolver):
    results = {resolver.resolve(('Green', '2-pack')).id for _ in range(20)}
    assert results == {'2'}


def test_resolve_for_pack_size_does_not_touch_the_selection(resolver):
    selection = ('Blue', '2-pack')
    assert resolver.resolve_for_pack_size(2, selection).id == '4'
    assert resolver.resolve_for_pack_size(1, selection).id == '4'
    assert selection == ('Blue', '2-pack')


def test_resolve_for_pack_size_on_red(resolver):
    assert resolver.resolve_for_pack_size(1, ('Red', '2-pack')).id == '1'
    assert resolver.resolve_for_pack_size(4, ('Red', '2-pack')).id == '3'


def test_any_single_shared_value_counts_as_overlap():
    catalog = Catalog.from_document({
        'options': ['Color', 'Material', 'Pack'],
        'variants': [
            {'id': 1, 'options': ['Red', 'Cotton', '1-pack'], 'available': True},
            {'id': 2, 'options': ['Blue', 'Linen', '2-pack'], 'available': True},
            {'id': 3, 'options': ['Blue', 'Linen', '1-pack'], 'available': True},
        ],
    })
    resolver = VariantResolver(catalog, PackOptionDetector.detect(catalog))
    # Variant 3 shares two values but variant 1 comes first and shares one
    assert resolver.resolve(('Blue', 'Silk', '1-pack')).id == '1'


def test_without_pack_designation_substitution_is_a_no_op(catalog):
    resolver = VariantResolver(catalog)
    assert resolver.substitute_pack(('Red', '1-pack'), 4) == ('Red', '1-pack')
