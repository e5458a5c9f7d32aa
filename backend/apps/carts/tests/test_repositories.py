from decimal import Decimal
from unittest.mock import patch

from django.db.models.query import QuerySet
from django.test import TestCase

from apps.carts.models import CartProduct
from apps.carts.repositories import CartProductRepository, CartRepository
from apps.catalog.models import Product
from apps.users.models import User


class CartProductRepositoryTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="lineuser", password="TestPass123")
        self.cart = CartRepository().get_or_create_for_user(self.user.id)
        self.product = Product.objects.create(
            id="KCRwjF7lN97HnEaY",
            name="Tan Leatherette Weekender Duffle",
            category="Fashion",
            cost=Decimal("150"),
            rating=4,
            image="https://crio-directus-assets.s3.ap-south-1.amazonaws.com/ff071a1c.png",
        )
        self.repo = CartProductRepository()

    def test_save_quantity_inserts_then_updates_same_row(self):
        first, created = self.repo.save_quantity(self.cart, self.product, 1)
        self.assertTrue(created)
        second, created = self.repo.save_quantity(self.cart, self.product, 3)
        self.assertFalse(created)
        self.assertEqual(first.id, second.id)
        self.assertEqual(
            list(CartProduct.objects.values_list("quantity", flat=True)), [3]
        )

    def test_concurrent_first_add_updates_instead_of_failing(self):
        # Another request inserted the line after this one looked it up.
        CartProduct.objects.create(cart=self.cart, product=self.product, quantity=1)
        real_get = QuerySet.get
        missed = []

        def miss_first_lookup(qs, *args, **kwargs):
            if qs.model is CartProduct and not missed:
                missed.append(True)
                raise CartProduct.DoesNotExist
            return real_get(qs, *args, **kwargs)

        with patch.object(QuerySet, "get", autospec=True, side_effect=miss_first_lookup):
            line, created = self.repo.save_quantity(self.cart, self.product, 5)

        self.assertTrue(missed)
        self.assertFalse(created)
        self.assertEqual(line.quantity, 5)
        self.assertEqual(CartProduct.objects.filter(cart=self.cart).count(), 1)
        self.assertEqual(CartProduct.objects.get(cart=self.cart).quantity, 5)
