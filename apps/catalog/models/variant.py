from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
from simple_history.models import HistoricalRecords
from imagekit.models import ProcessedImageField, ImageSpecField
from imagekit.processors import ResizeToFill, ResizeToFit


class Variant(models.Model):
    """
    One selectable variation of a product: a unit combination plus at most
    one option per attribute type. A variant without options is the
    product's "empty option" for its unit.

    Price, stock and images make up the detail the selector loads once the
    visitor's selection resolves to this variant.
    """
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name='Produto'
    )
    unit_combination = models.ForeignKey(
        'catalog.UnitCombination',
        on_delete=models.PROTECT,
        related_name='variants',
        verbose_name='Unidade de venda'
    )
    sku = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='SKU'
    )
    name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Nome',
        help_text='Gerado a partir das opções se vazio'
    )

    sell_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço de venda'
    )
    compare_at_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço comparativo',
        help_text='Preço "de" para mostrar desconto'
    )
    stock_quantity = models.IntegerField(
        default=0,
        verbose_name='Quantidade em estoque'
    )
    track_inventory = models.BooleanField(
        default=True,
        verbose_name='Rastrear estoque'
    )

    # Inactive variants are left out of the variation index
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    attribute_options = models.ManyToManyField(
        'catalog.AttributeOption',
        through='VariantAttribute',
        related_name='variants',
        verbose_name='Opções de atributos'
    )

    history = HistoricalRecords()

    class Meta:
        ordering = ['product', 'sku']
        verbose_name = 'Variante'
        verbose_name_plural = 'Variantes'

    def __str__(self):
        return self.name or self.sku

    def save(self, *args, **kwargs):
        if not self.name:
            self.name = self._generate_name()
        super().save(*args, **kwargs)

    def _generate_name(self):
        """Product name followed by the options and the unit, e.g. "Camiseta - Azul / P (Pacote com 6)"."""
        if not self.pk:
            return self.sku

        labels = [
            va.attribute_option.get_display_value()
            for va in self.variantattribute_set.select_related(
                'attribute_option__attribute_type'
            ).order_by('attribute_option__attribute_type__display_order')
        ]
        name = self.product.name
        if labels:
            name = f"{name} - {' / '.join(labels)}"
        return f"{name} ({self.unit_combination.get_display_name()})"

    def get_selection(self):
        """Return dict of {attribute_type_id: attribute_option_id}, as used by the variation selector."""
        return {
            va.attribute_option.attribute_type_id: va.attribute_option_id
            for va in self.variantattribute_set.select_related('attribute_option')
        }

    @property
    def is_on_sale(self):
        return bool(self.compare_at_price and self.compare_at_price > self.sell_price)

    @property
    def discount_percentage(self):
        if not self.is_on_sale:
            return 0
        return int(((self.compare_at_price - self.sell_price) / self.compare_at_price) * 100)

    @property
    def is_in_stock(self):
        return not self.track_inventory or self.stock_quantity > 0

    @property
    def primary_image(self):
        return self.images.filter(is_primary=True).first() or self.images.first()


class VariantAttribute(models.Model):
    """
    Option a variant declares for one attribute type.

    A variant declares each attribute type at most once and only with
    options of its own product; saving a second option of the same type
    replaces the first.
    """
    variant = models.ForeignKey(
        Variant,
        on_delete=models.CASCADE,
        verbose_name='Variante'
    )
    attribute_option = models.ForeignKey(
        'catalog.AttributeOption',
        on_delete=models.CASCADE,
        verbose_name='Opção de Atributo'
    )

    class Meta:
        unique_together = ['variant', 'attribute_option']
        verbose_name = 'Atributo da Variante'
        verbose_name_plural = 'Atributos das Variantes'

    def __str__(self):
        return f"{self.variant.sku} - {self.attribute_option}"

    def save(self, *args, **kwargs):
        if self.attribute_option.product_id != self.variant.product_id:
            raise ValueError(
                f"Option {self.attribute_option_id} does not belong "
                f"to product {self.variant.product_id}"
            )

        VariantAttribute.objects.filter(
            variant=self.variant,
            attribute_option__attribute_type=self.attribute_option.attribute_type_id,
        ).exclude(pk=self.pk).delete()

        super().save(*args, **kwargs)


class VariantImage(models.Model):
    """Images shown with a variant once it is selected."""
    variant = models.ForeignKey(
        Variant,
        on_delete=models.CASCADE,
        related_name='images',
        verbose_name='Variante'
    )
    image = ProcessedImageField(
        upload_to='variants/%Y/%m/',
        processors=[ResizeToFit(1200, 1200)],
        format='JPEG',
        options={'quality': 85},
        verbose_name='Imagem'
    )
    thumbnail = ImageSpecField(
        source='image',
        processors=[ResizeToFill(300, 300)],
        format='JPEG',
        options={'quality': 70}
    )
    alt_text = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Texto alternativo'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )
    is_primary = models.BooleanField(
        default=False,
        verbose_name='Imagem principal'
    )

    class Meta:
        ordering = ['-is_primary', 'display_order']
        verbose_name = 'Imagem da Variante'
        verbose_name_plural = 'Imagens das Variantes'

    def __str__(self):
        return f"{self.variant.sku} - Imagem {self.display_order}"

    def save(self, *args, **kwargs):
        if self.is_primary:
            VariantImage.objects.filter(
                variant=self.variant,
                is_primary=True
            ).exclude(pk=self.pk).update(is_primary=False)

        if not self.alt_text:
            self.alt_text = str(self.variant)

        super().save(*args, **kwargs)
