"""Catalog models, their admin and the variation index built from them."""

from decimal import Decimal

import pytest
from django.contrib import admin

from apps.catalog.admin import VariantResource, describe_selection
from apps.catalog.api.serializers import VariantSerializer
from apps.catalog.models import (
    AttributeOption,
    AttributeType,
    Product,
    UnitCombination,
    Variant,
    VariantAttribute,
)
from apps.catalog.services import build_variation_index


pytestmark = pytest.mark.django_db


class TestBuildVariationIndex:
    def test_catalog_order(self, catalog):
        index = build_variation_index(catalog.product)

        assert [a.name for a in index.attributes] == ['Cor', 'Tamanho']
        assert index.attribute_values == {
            catalog.color.pk: (catalog.red.pk, catalog.blue.pk),
            catalog.size.pk: (catalog.small.pk, catalog.medium.pk),
        }
        assert index.units == (catalog.unit.pk, catalog.pack.pk)
        assert [v.variation_id for v in index.variations] == [
            catalog.red_small.pk, catalog.red_medium.pk, catalog.blue_small_pack.pk,
        ]

    def test_records_mirror_variants(self, catalog):
        index = build_variation_index(catalog.product)
        record = index.get_variation(catalog.blue_small_pack.pk)

        assert record.unit_combination_id == catalog.pack.pk
        assert record.attribute_map() == catalog.blue_small_pack.get_selection()

    def test_inactive_variants_are_left_out(self, catalog):
        catalog.red_medium.is_active = False
        catalog.red_medium.save()

        index = build_variation_index(catalog.product)

        assert index.get_variation(catalog.red_medium.pk) is None
        assert catalog.medium.pk not in index.attribute_values[catalog.size.pk]

    def test_units_without_variants_are_kept(self, catalog):
        kilo = UnitCombination.objects.create(
            product=catalog.product, unit='kg', content=Decimal('0.5'), display_order=2,
        )
        assert build_variation_index(catalog.product).has_unit(kilo.pk)


class TestInitialVariant:
    def test_first_active_variant(self, catalog):
        assert catalog.product.get_initial_variant() == catalog.red_small

    def test_default_variant(self, catalog):
        catalog.product.default_variant = catalog.blue_small_pack
        catalog.product.save()
        assert catalog.product.get_initial_variant() == catalog.blue_small_pack

    def test_inactive_default_variant_is_skipped(self, catalog):
        catalog.blue_small_pack.is_active = False
        catalog.blue_small_pack.save()
        catalog.product.default_variant = catalog.blue_small_pack
        catalog.product.save()
        assert catalog.product.get_initial_variant() == catalog.red_small

    def test_product_without_variants(self, db):
        product = Product.objects.create(name='Vazio')
        assert product.get_initial_variant() is None
        assert product.slug == 'vazio'


class TestUnitCombination:
    def test_generated_name(self, catalog):
        assert catalog.unit.name == '1 un'
        assert catalog.pack.get_display_name() == 'Pacote com 6'

    def test_generated_name_drops_trailing_zeros(self, catalog):
        roll = UnitCombination.objects.create(
            product=catalog.product, unit='m', content=Decimal('100.000'),
        )
        assert roll.name == '100 m'

    def test_variant_must_use_unit_of_its_product(self, catalog):
        other = Product.objects.create(name='Meia')
        with pytest.raises(ValueError):
            Variant.objects.create(
                product=other,
                unit_combination=catalog.unit,
                sku='MEIA-01',
                sell_price=Decimal('19.90'),
            )

    def test_serializer_rejects_unit_of_other_product(self, catalog):
        other = Product.objects.create(name='Meia')
        serializer = VariantSerializer(data={
            'product': other.pk,
            'unit_combination': catalog.unit.pk,
            'sku': 'MEIA-01',
            'sell_price': '19.90',
        })
        assert not serializer.is_valid()
        assert 'unit_combination' in serializer.errors


class TestVariant:
    def test_get_selection(self, catalog):
        assert catalog.red_medium.get_selection() == {
            catalog.color.pk: catalog.red.pk,
            catalog.size.pk: catalog.medium.pk,
        }

    def test_history_is_recorded(self, catalog):
        catalog.red_small.sell_price = Decimal('69.90')
        catalog.red_small.save()
        assert catalog.red_small.history.count() == 2

    def test_second_option_of_a_type_replaces_the_first(self, catalog):
        VariantAttribute.objects.create(variant=catalog.red_small, attribute_option=catalog.blue)

        assert catalog.red_small.get_selection() == {
            catalog.color.pk: catalog.blue.pk,
            catalog.size.pk: catalog.small.pk,
        }

    def test_option_of_another_product_is_rejected(self, catalog):
        other = Product.objects.create(name='Meia')
        green = AttributeOption.objects.create(
            attribute_type=catalog.color, product=other, value='Verde',
        )
        with pytest.raises(ValueError):
            VariantAttribute.objects.create(variant=catalog.red_small, attribute_option=green)

    @pytest.mark.parametrize('track_inventory, stock_quantity, in_stock', [
        (True, 0, False),
        (True, 3, True),
        (False, 0, True),
    ])
    def test_is_in_stock(self, catalog, track_inventory, stock_quantity, in_stock):
        variant = catalog.red_small
        variant.track_inventory = track_inventory
        variant.stock_quantity = stock_quantity
        assert variant.is_in_stock is in_stock


class TestAdmin:
    def test_registration(self):
        for model in (Product, AttributeType, AttributeOption, UnitCombination, Variant):
            assert admin.site.is_registered(model)

    def test_describe_selection(self, catalog):
        assert describe_selection(catalog.blue_small_pack) == (
            'Cor: Azul / Tamanho: P @ Pacote com 6'
        )

    def test_describe_variant_without_options(self, catalog):
        plain = Variant.objects.create(
            product=catalog.product,
            unit_combination=catalog.unit,
            sku='CAM-LISA',
            sell_price=Decimal('49.90'),
        )
        assert describe_selection(plain) == '(sem opções) @ 1 un'

    def test_export_includes_selection(self, catalog):
        dataset = VariantResource().export()

        assert 'selection' in dataset.headers
        row = dataset.dict[[r['sku'] for r in dataset.dict].index('CAM-VER-M')]
        assert row['selection'] == 'Cor: Vermelho / Tamanho: M @ 1 un'

    def test_variant_changelist(self, admin_client, catalog):
        response = admin_client.get('/admin/catalog/variant/', {'unit_combination__id__exact': catalog.pack.pk})

        assert response.status_code == 200
        assert b'CAM-AZU-P-6' in response.content
        assert b'CAM-VER-P' not in response.content
