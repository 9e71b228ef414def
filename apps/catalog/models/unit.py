from decimal import Decimal

from django.db import models
from django.core.validators import MinValueValidator


class UnitCombination(models.Model):
    """
    Unit of measure and content a product is sold in.
    Examples: "1 un", "Pacote com 6", "Rolo 100m"

    Every variant is sold in exactly one unit combination of its product.
    """
    UNIT_CHOICES = [
        ('un', 'Unidade'),
        ('pct', 'Pacote'),
        ('m', 'Metro'),
        ('kg', 'Quilograma'),
        ('l', 'Litro'),
    ]

    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='unit_combinations',
        verbose_name='Produto'
    )
    name = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Nome',
        help_text='Nome de exibição (gerado automaticamente se vazio)'
    )
    unit = models.CharField(
        max_length=10,
        choices=UNIT_CHOICES,
        default='un',
        verbose_name='Unidade'
    )
    content = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        default=Decimal('1'),
        validators=[MinValueValidator(Decimal('0.001'))],
        verbose_name='Conteúdo'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )

    class Meta:
        ordering = ['display_order', 'pk']
        unique_together = ['product', 'unit', 'content']
        verbose_name = 'Unidade de Venda'
        verbose_name_plural = 'Unidades de Venda'

    def __str__(self):
        return f"{self.get_display_name()} [{self.product.name}]"

    def save(self, *args, **kwargs):
        if not self.name:
            self.name = self.get_display_name()
        super().save(*args, **kwargs)

    def get_display_name(self):
        if self.name:
            return self.name
        return f"{Decimal(self.content).normalize():f} {self.unit}"
