import itertools

import pytest

from apps.configurator.services.visibility import (
    StickyVisibility,
    compute_sticky_visibility,
    is_narrow_viewport,
)


@pytest.mark.parametrize(
    'hero,form,footer,is_narrow',
    list(itertools.product([False, True], repeat=4)),
)
def test_sticky_formula_over_all_combinations(hero, form, footer, is_narrow):
    expected = is_narrow and not hero and not form and not footer
    assert compute_sticky_visibility(hero, form, footer, is_narrow) is expected


def test_literal_scenario():
    state = StickyVisibility(hero=False, form=False, footer=False)
    assert state.should_show(True) is True
    assert state.with_signal('footer', True).should_show(True) is False


def test_defaults_keep_the_bar_hidden():
    assert StickyVisibility().should_show(True) is False


def test_update_order_does_not_matter():
    updates = [('hero', False), ('form', False), ('footer', True), ('footer', False)]
    forward = StickyVisibility()
    for name, visible in updates:
        forward = forward.with_signal(name, visible)

    shuffled = StickyVisibility()
    for name, visible in [updates[1], updates[0], updates[2], updates[3]]:
        shuffled = shuffled.with_signal(name, visible)

    assert forward == shuffled
    assert forward.should_show(True) is True


def test_missing_observer_entry_falls_back_to_default():
    state = StickyVisibility(hero=False, form=True, footer=True)
    state = state.with_signal('hero', None).with_signal('form', None).with_signal('footer', None)
    assert state == StickyVisibility()


def test_unknown_signal():
    with pytest.raises(ValueError):
        StickyVisibility().with_signal('header', True)


def test_to_dict_sets_aria_hidden():
    data = StickyVisibility(hero=False).to_dict(is_narrow=True)
    assert data['show'] is True
    assert data['aria_hidden'] is False
    assert StickyVisibility().to_dict(is_narrow=True)['aria_hidden'] is True


def test_geometry_sampling():
    state = StickyVisibility.from_geometry(
        800, hero_bottom=10, form_top=900, form_bottom=1400, footer_top=2000
    )
    assert state == StickyVisibility(hero=False, form=False, footer=False)

    state = StickyVisibility.from_geometry(
        800, hero_bottom=10, form_top=500, form_bottom=700, footer_top=2000
    )
    assert state.form is True

    state = StickyVisibility.from_geometry(800, hero_bottom=10, form_top=-600, form_bottom=50, footer_top=700)
    assert state.form is False
    assert state.footer is True


def test_geometry_without_elements_uses_defaults():
    assert StickyVisibility.from_geometry(800) == StickyVisibility()


@pytest.mark.parametrize('width,expected', [
    (375, True),
    (989, True),
    ('989', True),
    (990, False),
    (1440, False),
    ('wide', False),
    (None, False),
])
def test_is_narrow_viewport(width, expected):
    assert is_narrow_viewport(width, 989) is expected
