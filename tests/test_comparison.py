from designer.comparison import comparison_rows, resolve_designs
from designer.schemas import DesignComparisonProps


def test_default_prices_and_order():
    designs = resolve_designs(DesignComparisonProps())
    assert [(d.key, d.price) for d in designs] == [('luxury', 8500), ('budget', 1350), ('minimalist', 630)]
    assert designs[0].colors == {'primary': "#faf8f3", 'secondary': "#d4c4b0", 'accent': "#b5a642"}


def test_overrides_apply_to_every_design():
    props = DesignComparisonProps.model_validate({
        'budgetDesign': {'totalPrice': 999, 'colors': {'primary': '#000'}},
        'minimalistDesign': {'totalPrice': 450},
    })
    designs = {d.key: d for d in resolve_designs(props)}
    assert designs['budget'].price == 999
    assert designs['budget'].colors == {'primary': '#000000'}
    assert designs['minimalist'].price == 450
    assert designs['minimalist'].colors['accent'] == "#000000"
    assert designs['luxury'].price == 8500


def test_comparison_rows():
    rows = comparison_rows(resolve_designs(DesignComparisonProps()))
    assert rows[0] == {'Aspect': 'Price', '👑 Luxury': '$8,500', '💰 Budget': '$1,350', '📐 Minimalist': '$630'}
    assert [row['Aspect'] for row in rows] == ['Price', 'Best For', 'Design Feel', 'Maintenance']
