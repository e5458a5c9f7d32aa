from django.core.management import call_command
from django.test import TestCase

from apps.carts.models import Cart
from apps.catalog.models import Product
from apps.common.management.commands.seed_qkart import PRODUCTS
from apps.users.models import User


class SeedCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_qkart", verbosity=0)
        call_command("seed_qkart", verbosity=0)
        self.assertEqual(Product.objects.count(), len(PRODUCTS))

    def test_seed_refreshes_existing_rows(self):
        call_command("seed_qkart", verbosity=0)
        Product.objects.filter(id="KCRwjF7lN97HnEaY").update(name="Renamed")
        call_command("seed_qkart", verbosity=0)
        self.assertEqual(
            Product.objects.get(id="KCRwjF7lN97HnEaY").name,
            "Tan Leatherette Weekender Duffle",
        )

    def test_seed_creates_missing_carts(self):
        user = User.objects.create_user(username="crio.do", password="learnbydoing1")
        call_command("seed_qkart", verbosity=0)
        self.assertTrue(Cart.objects.filter(user=user).exists())
