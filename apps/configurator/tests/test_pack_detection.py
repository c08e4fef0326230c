import pytest

from apps.configurator.conf import WidgetConfig
from apps.configurator.services import Catalog, PackOptionDetector, parse_pack_size


def _catalog(options, rows):
    return Catalog.from_document({
        'options': options,
        'variants': [
            {'id': i + 1, 'options': list(row), 'available': True}
            for i, row in enumerate(rows)
        ],
    })


@pytest.mark.parametrize('value,expected', [
    ('4-pack', 4),
    ('Pack of 12', 12),
    ('2', 2),
    ('Single', None),
    ('0-pack', None),
    (None, None),
])
def test_parse_pack_size(value, expected):
    assert parse_pack_size(value) == expected


def test_detects_option_named_pack(pack):
    assert pack.enabled
    assert pack.option_index == 1
    assert pack.sizes == (1, 2, 4)
    assert pack.value_for_size(4) == '4-pack'
    assert pack.size_for_value('2-pack') == 2
    assert pack.size_for_value('3-pack') is None


def test_explicit_override_wins():
    catalog = _catalog(['Bundle', 'Model'], [('1 unit', 'X2'), ('3 units', 'X5')])
    pack = PackOptionDetector.detect(catalog, WidgetConfig(pack_option_index=1))
    assert pack.option_index == 1
    assert pack.sizes == (2, 5)


def test_out_of_range_override_falls_back_to_detection(catalog):
    pack = PackOptionDetector.detect(catalog, WidgetConfig(pack_option_index=7))
    assert pack.option_index == 1


def test_pack_semantics_can_be_disabled(catalog):
    pack = PackOptionDetector.detect(catalog, WidgetConfig(has_pack_option=False))
    assert not pack.enabled
    assert pack.sizes == ()


def test_without_pack_name_most_distinct_sizes_wins():
    catalog = _catalog(
        ['Size', 'Bundle'],
        [('Small', '1 unit'), ('Large', '3 units'), ('Small 2', '6 units')],
    )
    pack = PackOptionDetector.detect(catalog)
    assert pack.option_index == 1
    assert pack.sizes == (1, 3, 6)


def test_size_tie_goes_to_lowest_index():
    catalog = _catalog(['A', 'B'], [('1', '10'), ('2', '20')])
    assert PackOptionDetector.detect(catalog).option_index == 0


def test_no_numeric_values_means_no_pack():
    catalog = _catalog(['Color', 'Material'], [('Red', 'Cotton'), ('Blue', 'Linen')])
    pack = PackOptionDetector.detect(catalog)
    assert not pack.enabled
    assert pack.to_dict() == {'enabled': False, 'option_index': None, 'sizes': [], 'values': {}}


def test_first_seen_value_represents_a_size():
    catalog = _catalog(['Pack'], [('2-pack',), ('Pack of 2',)])
    pack = PackOptionDetector.detect(catalog)
    assert pack.value_for_size(2) == '2-pack'


def test_empty_catalog_has_no_pack():
    assert not PackOptionDetector.detect(Catalog()).enabled
