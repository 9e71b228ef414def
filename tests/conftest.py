"""Shared fixtures for the catalog test suite.

Engine fixtures are plain in-memory indexes (no database); `catalog` builds
a small product in the database for model and API tests.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest
from rest_framework.test import APIClient

from apps.catalog.models import (
    Product,
    AttributeType,
    AttributeOption,
    UnitCombination,
    Variant,
    VariantAttribute,
)
from apps.catalog.services import (
    AttributeDefinition,
    InMemorySelectionStore,
    VariationAttribute,
    VariationIndex,
    VariationRecord,
    VariationSelectResolver,
)


COLOR, SIZE = 1, 2
RED, BLUE = 11, 12
SMALL, MEDIUM = 21, 22
UNIT_A, UNIT_B, UNIT_C = 100, 200, 300


def record(variation_id, unit_id, **attributes):
    """VariationRecord from keyword attributes, e.g. record(1, UNIT_A, color=RED)."""
    ids = {'color': COLOR, 'size': SIZE}
    return VariationRecord(
        variation_id=variation_id,
        unit_combination_id=unit_id,
        attributes=tuple(
            VariationAttribute(ids[name], value) for name, value in attributes.items()
        ),
    )


def fake_translate(key, params=None):
    if params:
        return f"{key}:{params['name']}"
    return key


class RecordingNotifier:
    def __init__(self):
        self.warnings = []

    def warn(self, message):
        self.warnings.append(message)


class RecordingLoader:
    def __init__(self):
        self.loaded = []

    def __call__(self, variation_id):
        self.loaded.append(variation_id)
        return {'id': variation_id}


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def color_index():
    """V1: A/Red, V2: A/Blue, V3: B/no attributes."""
    return VariationIndex(
        attributes=[AttributeDefinition(COLOR, 'Color')],
        variations=[
            record(1, UNIT_A, color=RED),
            record(2, UNIT_A, color=BLUE),
            record(3, UNIT_B),
        ],
    )


@pytest.fixture
def shirt_index():
    """Two attributes over two units; Blue/Small only exists in unit B."""
    return VariationIndex(
        attributes=[
            AttributeDefinition(COLOR, 'Color'),
            AttributeDefinition(SIZE, 'Size'),
        ],
        variations=[
            record(1, UNIT_A, color=RED, size=SMALL),
            record(2, UNIT_A, color=RED, size=MEDIUM),
            record(3, UNIT_A, color=BLUE, size=MEDIUM),
            record(4, UNIT_B, color=RED, size=SMALL),
            record(5, UNIT_B, color=BLUE, size=SMALL),
        ],
    )


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def loader():
    return RecordingLoader()


@pytest.fixture
def make_resolver(notifier, loader):
    """Resolver whose store starts at the given variation of the index."""
    def _make(index, variation_id=None):
        attributes, unit_id = index.initial_selection(variation_id)
        store = InMemorySelectionStore(attributes, unit_id)
        return VariationSelectResolver(
            index,
            store,
            translate=fake_translate,
            notifier=notifier,
            loader=loader,
        )
    return _make


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture
def catalog(db):
    """
    Camiseta Básica in Cor (Vermelho, Azul) x Tamanho (P, M):
    Vermelho/P and Vermelho/M per unit, Azul/P only in packs of 6.
    """
    product = Product.objects.create(name='Camiseta Básica', slug='camiseta-basica')

    color = AttributeType.objects.create(name='Cor', slug='cor', display_order=1)
    size = AttributeType.objects.create(name='Tamanho', slug='tamanho', display_order=2)

    red = AttributeOption.objects.create(
        attribute_type=color, product=product, value='Vermelho',
        color_hex='#FF0000', display_order=0,
    )
    blue = AttributeOption.objects.create(
        attribute_type=color, product=product, value='Azul',
        color_hex='#0000FF', display_order=1,
    )
    small = AttributeOption.objects.create(
        attribute_type=size, product=product, value='P', display_order=0,
    )
    medium = AttributeOption.objects.create(
        attribute_type=size, product=product, value='M', display_order=1,
    )

    unit = UnitCombination.objects.create(product=product, unit='un', content=1)
    pack = UnitCombination.objects.create(
        product=product, unit='pct', content=6, name='Pacote com 6', display_order=1,
    )

    def make_variant(sku, unit_combination, *options):
        variant = Variant.objects.create(
            product=product,
            unit_combination=unit_combination,
            sku=sku,
            sell_price=Decimal('79.90'),
            stock_quantity=10,
        )
        for option in options:
            VariantAttribute.objects.create(variant=variant, attribute_option=option)
        return variant

    red_small = make_variant('CAM-VER-P', unit, red, small)
    red_medium = make_variant('CAM-VER-M', unit, red, medium)
    blue_small_pack = make_variant('CAM-AZU-P-6', pack, blue, small)

    return SimpleNamespace(
        product=product,
        color=color,
        size=size,
        red=red,
        blue=blue,
        small=small,
        medium=medium,
        unit=unit,
        pack=pack,
        red_small=red_small,
        red_medium=red_medium,
        blue_small_pack=blue_small_pack,
    )


@pytest.fixture
def api_client():
    return APIClient()
