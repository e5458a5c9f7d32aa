from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.carts.models import Cart, CartProduct
from apps.carts.utils import ensure_user_cart
from apps.catalog.container import build_product_service
from apps.catalog.models import Product
from apps.catalog.repositories import ProductRepository
from apps.common import get_logger
from apps.users.models import User

logger = get_logger(__name__).bind(component="common", layer="command")

ASSET_HOST = "https://crio-directus-assets.s3.ap-south-1.amazonaws.com"

# (id, name, category, cost, rating, image file)
PRODUCTS = [
    ("BW0jAAeDJmlZCF8i", "Bonsai Dining Chair", "Home & Kitchen", "300", 5, "bonsai-dining-chair.png"),
    ("KCRwjF7lN97HnEaY", "Tan Leatherette Weekender Duffle", "Fashion", "150", 4, "tan-weekender-duffle.png"),
    ("upLK9JbQ4rMhTwt4", "Atrangi Wall Clock", "Home & Kitchen", "75", 3, "atrangi-wall-clock.png"),
    ("a4sLtEcMpzabRyfx", "YONEX Smash Badminton Racquet", "Sports", "100", 5, "yonex-smash-racquet.png"),
    ("v4sLtEcMpzabRyf7", "Crio Stickers", "Stationery", "1", 4, "crio-stickers.png"),
    ("TwMM4OAhmK0VQ93S", "Nivia Dominator Football", "Sports", "40", 4, "nivia-football.png"),
    ("ZxT9SZfAIx2ZLHbu", "Adidas Superstar Sneakers", "Footwear", "120", 5, "adidas-superstar.png"),
    ("xQ3LeGx2HObdVMpo", "Noise Colorfit Smart Watch", "Electronics", "60", 4, "noise-colorfit.png"),
    ("nZHe2D7Ksg5MlVIl", "Classic Blue Denim Jacket", "Fashion", "89", 3, "blue-denim-jacket.png"),
    ("ij2nFBcv2Efo0RIy", "Moleskine Classic Notebook", "Stationery", "18", 4, "moleskine-notebook.png"),
    ("kRw7hM0AuAf9hHzJ", "Sony WH-1000XM4 Headphones", "Electronics", "350", 5, "sony-wh1000xm4.png"),
    ("m1p2SgvTmKaT8lLL", "Prestige Pressure Cooker", "Home & Kitchen", "45", 4, "prestige-cooker.png"),
]


class Command(BaseCommand):
    help = "Seed the QKart demo catalog. Safe to run repeatedly."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete products and cart lines before seeding",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing catalog and carts...")
            CartProduct.objects.all().delete()
            Cart.objects.all().delete()
            Product.objects.all().delete()

        self.stdout.write("Seeding products...")
        products = ProductRepository()
        for product_id, name, category, cost, rating, image in PRODUCTS:
            products.upsert(
                product_id,
                name=name,
                category=category,
                cost=Decimal(cost),
                rating=rating,
                image=f"{ASSET_HOST}/{image}",
            )

        self.stdout.write("Ensuring carts for all users...")
        for user_id in User.objects.values_list("id", flat=True):
            ensure_user_cart(user_id)

        version = build_product_service().bump_cache_version()
        logger.info(
            "Seeded catalog", products=len(PRODUCTS), cache_version=version
        )
        self.stdout.write(self.style.SUCCESS("QKart seed completed."))
