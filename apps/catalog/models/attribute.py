from django.db import models
from django.core.validators import RegexValidator


class AttributeType(models.Model):
    """
    Attribute a visitor picks a value for in the variation selector
    (Cor, Tamanho, Comprimento). Shared by all products; `display_order`
    is the order the selector lists them in.
    """
    name = models.CharField(
        max_length=100,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=100,
        unique=True,
        verbose_name='Slug'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )

    class Meta:
        ordering = ['display_order', 'name']
        verbose_name = 'Tipo de Atributo'
        verbose_name_plural = 'Tipos de Atributos'

    def __str__(self):
        return self.name


hex_color_validator = RegexValidator(
    regex=r'^#[0-9A-Fa-f]{6}$',
    message='Cor deve estar no formato hexadecimal (#RRGGBB)'
)


class AttributeOption(models.Model):
    """
    Value of an attribute type for one product, e.g. "Azul" for the Cor of
    "Camiseta Básica". Only options some active variant declares show up
    in the product's variation index.
    """
    attribute_type = models.ForeignKey(
        AttributeType,
        on_delete=models.CASCADE,
        related_name='options',
        verbose_name='Tipo de Atributo'
    )
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='attribute_options',
        verbose_name='Produto'
    )
    value = models.CharField(
        max_length=100,
        verbose_name='Valor'
    )
    display_value = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Valor de exibição',
        help_text='Texto mostrado no seletor (opcional)'
    )
    color_hex = models.CharField(
        max_length=7,
        blank=True,
        validators=[hex_color_validator],
        verbose_name='Cor Hex',
        help_text='Amostra de cor no seletor (#RRGGBB)'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )

    class Meta:
        ordering = ['display_order', 'value']
        unique_together = ['attribute_type', 'product', 'value']
        verbose_name = 'Opção de Atributo'
        verbose_name_plural = 'Opções de Atributos'

    def __str__(self):
        return f"{self.attribute_type.name}: {self.get_display_value()}"

    def get_display_value(self):
        return self.display_value or self.value
