from django_filters import rest_framework as filters
from apps.catalog.models import Variant


class NumberInFilter(filters.BaseInFilter, filters.NumberFilter):
    pass


class VariantFilter(filters.FilterSet):
    """
    Filter variants by product, unit combination and attribute options.

    `?options=3,7` keeps the variants that declare every listed option,
    the same question the variation selector asks of its index.
    `?attribute=cor:Azul` matches one option by attribute slug and value.
    """

    product = filters.CharFilter(field_name='product__slug')
    product_id = filters.NumberFilter(field_name='product__id')
    unit = filters.NumberFilter(field_name='unit_combination__id')
    options = NumberInFilter(method='filter_by_options')
    attribute = filters.CharFilter(method='filter_by_attribute')

    class Meta:
        model = Variant
        fields = ['product', 'product_id', 'unit', 'is_active', 'sku']

    def filter_by_options(self, queryset, name, value):
        for option_id in value:
            queryset = queryset.filter(variantattribute__attribute_option_id=option_id)
        return queryset.distinct()

    def filter_by_attribute(self, queryset, name, value):
        if ':' not in value:
            return queryset

        attr_slug, option_value = value.split(':', 1)
        return queryset.filter(
            variantattribute__attribute_option__attribute_type__slug=attr_slug,
            variantattribute__attribute_option__value=option_value
        ).distinct()
