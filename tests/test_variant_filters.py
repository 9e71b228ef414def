"""Variant list filters of the catalog API."""

import pytest


pytestmark = pytest.mark.django_db


def skus(response):
    return sorted(v['sku'] for v in response.data)


class TestVariantFilter:
    def test_unit(self, api_client, catalog):
        response = api_client.get('/api/variants/', {'unit': catalog.pack.pk})
        assert skus(response) == ['CAM-AZU-P-6']

    def test_options_require_every_option(self, api_client, catalog):
        red = api_client.get('/api/variants/', {'options': f'{catalog.red.pk}'})
        red_small = api_client.get(
            '/api/variants/', {'options': f'{catalog.red.pk},{catalog.small.pk}'}
        )
        blue_medium = api_client.get(
            '/api/variants/', {'options': f'{catalog.blue.pk},{catalog.medium.pk}'}
        )

        assert skus(red) == ['CAM-VER-M', 'CAM-VER-P']
        assert skus(red_small) == ['CAM-VER-P']
        assert skus(blue_medium) == []

    def test_attribute_slug_and_value(self, api_client, catalog):
        response = api_client.get('/api/variants/', {'attribute': 'tamanho:P'})
        assert skus(response) == ['CAM-AZU-P-6', 'CAM-VER-P']

    def test_product_and_unit_together(self, api_client, catalog):
        response = api_client.get('/api/variants/', {
            'product': catalog.product.slug,
            'unit': catalog.unit.pk,
        })
        assert skus(response) == ['CAM-VER-M', 'CAM-VER-P']

    def test_list_exposes_the_selection(self, api_client, catalog):
        response = api_client.get('/api/variants/', {'sku': 'CAM-AZU-P-6'})
        assert response.data[0]['attributes'] == {
            str(catalog.color.pk): catalog.blue.pk,
            str(catalog.size.pk): catalog.small.pk,
        }
