from django.contrib import admin
from import_export import resources, fields
from import_export.admin import ImportExportModelAdmin
from import_export.widgets import ForeignKeyWidget
from adminsortable2.admin import SortableAdminMixin, SortableAdminBase, SortableInlineAdminMixin
from simple_history.admin import SimpleHistoryAdmin

from .models import (
    Product,
    AttributeType,
    AttributeOption,
    UnitCombination,
    Variant,
    VariantAttribute,
    VariantImage,
)


def describe_selection(variant):
    """Options and unit of a variant as the selector shows them: "Cor: Azul / Tamanho: P @ 1 un"."""
    options = ' / '.join(
        str(va.attribute_option)
        for va in variant.variantattribute_set.select_related(
            'attribute_option__attribute_type'
        ).order_by('attribute_option__attribute_type__display_order')
    )
    return f"{options or '(sem opções)'} @ {variant.unit_combination.get_display_name()}"


# =============================================================================
# Import/Export
# =============================================================================

class VariantResource(resources.ModelResource):
    """Variants with their unit; the selection column is export-only."""

    product_name = fields.Field(
        column_name='product_name',
        attribute='product',
        widget=ForeignKeyWidget(Product, 'name')
    )
    unit_combination_name = fields.Field(
        column_name='unit_combination',
        attribute='unit_combination',
        widget=ForeignKeyWidget(UnitCombination, 'name')
    )
    selection = fields.Field(column_name='selection', readonly=True)

    class Meta:
        model = Variant
        import_id_fields = ['sku']
        fields = (
            'sku', 'product_name', 'unit_combination_name', 'selection', 'name',
            'sell_price', 'compare_at_price', 'stock_quantity', 'track_inventory',
            'is_active'
        )
        export_order = fields

    def dehydrate_selection(self, variant):
        return describe_selection(variant)


# =============================================================================
# Inlines
# =============================================================================

class AttributeOptionInline(SortableInlineAdminMixin, admin.TabularInline):
    model = AttributeOption
    extra = 1
    fields = ['product', 'value', 'display_value', 'color_hex', 'display_order']


class UnitCombinationInline(SortableInlineAdminMixin, admin.TabularInline):
    model = UnitCombination
    extra = 1
    fields = ['name', 'unit', 'content', 'display_order']


class VariantAttributeInline(admin.TabularInline):
    model = VariantAttribute
    extra = 1
    autocomplete_fields = ['attribute_option']


class VariantImageInline(SortableInlineAdminMixin, admin.TabularInline):
    model = VariantImage
    extra = 0
    fields = ['image', 'alt_text', 'is_primary', 'display_order']


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Product)
class ProductAdmin(SortableAdminBase, SimpleHistoryAdmin):
    list_display = ['name', 'slug', 'active_variant_count', 'default_variant', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
    raw_id_fields = ['default_variant']
    inlines = [UnitCombinationInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'slug', 'description', 'is_active')
        }),
        ('Seletor de variantes', {
            'fields': ('default_variant',)
        }),
    )


@admin.register(AttributeType)
class AttributeTypeAdmin(SortableAdminMixin, admin.ModelAdmin):
    list_display = ['name', 'slug', 'display_order']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
    inlines = [AttributeOptionInline]


@admin.register(AttributeOption)
class AttributeOptionAdmin(admin.ModelAdmin):
    list_display = ['value', 'attribute_type', 'product', 'display_order']
    list_filter = ['attribute_type', 'product']
    search_fields = ['value', 'display_value', 'attribute_type__name', 'product__name']
    autocomplete_fields = ['product']


@admin.register(UnitCombination)
class UnitCombinationAdmin(admin.ModelAdmin):
    list_display = ['get_display_name', 'product', 'unit', 'content', 'display_order']
    list_filter = ['unit', 'product']
    search_fields = ['name', 'product__name']
    autocomplete_fields = ['product']


@admin.register(Variant)
class VariantAdmin(SortableAdminBase, ImportExportModelAdmin, SimpleHistoryAdmin):
    resource_class = VariantResource
    list_display = ['sku', 'product', 'selection', 'sell_price', 'is_active']
    list_filter = ['product', 'unit_combination', 'is_active']
    search_fields = ['sku', 'name', 'product__name']
    autocomplete_fields = ['product']
    readonly_fields = ['selection', 'created_at', 'updated_at']
    inlines = [VariantAttributeInline, VariantImageInline]

    fieldsets = (
        (None, {
            'fields': ('product', 'unit_combination', 'selection', 'sku', 'name', 'is_active')
        }),
        ('Detalhe carregado pelo seletor', {
            'fields': ('sell_price', 'compare_at_price', 'stock_quantity', 'track_inventory')
        }),
        ('Informações', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('product', 'unit_combination')

    @admin.display(description='Seleção')
    def selection(self, obj):
        if not obj.pk:
            return '-'
        return describe_selection(obj)
