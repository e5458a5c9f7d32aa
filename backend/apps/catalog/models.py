from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.crypto import get_random_string

PRODUCT_ID_LENGTH = 16


def generate_product_id() -> str:
    return get_random_string(PRODUCT_ID_LENGTH)


class Product(models.Model):
    # Opaque string ids (e.g. "v4sLtEcMpzabRyfx"), exposed on the wire as `_id`
    id = models.CharField(
        primary_key=True,
        max_length=32,
        default=generate_product_id,
        editable=False,
    )
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=100)
    cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    rating = models.PositiveSmallIntegerField(
        default=0, validators=[MaxValueValidator(5)]
    )
    image = models.URLField(max_length=500)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
            models.Index(fields=["category"], name="product_category_idx"),
        ]

    def __str__(self):
        return self.name
