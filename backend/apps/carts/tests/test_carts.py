from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.carts.models import Cart
from apps.catalog.models import Product
from apps.users.models import User


class TestCart(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="cartuser", password="TestPass123")
        self.cart_url = reverse("api-cart")
        self.login_url = reverse("auth-login")
        self.duffle = Product.objects.create(
            id="KCRwjF7lN97HnEaY",
            name="Tan Leatherette Weekender Duffle",
            category="Fashion",
            cost=Decimal("150"),
            rating=4,
            image="https://crio-directus-assets.s3.ap-south-1.amazonaws.com/ff071a1c.png",
        )
        self.chair = Product.objects.create(
            id="BW0jAAeDJmlZCF8i",
            name="Bonsai Dining Chair",
            category="Home & Kitchen",
            cost=Decimal("50.5"),
            rating=5,
            image="https://crio-directus-assets.s3.ap-south-1.amazonaws.com/bonsai.png",
        )

    def _auth(self):
        login = self.client.post(
            self.login_url,
            {"username": "cartuser", "password": "TestPass123"},
            format="json",
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['token']}")

    def test_missing_token_is_unauthorized(self):
        res = self.client.get(self.cart_url)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(res.data["success"])

    def test_invalid_token_is_bad_request(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-real-token")
        res = self.client.get(self.cart_url)
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["code"], "INVALID_TOKEN")

    def test_get_empty_cart(self):
        self._auth()
        res = self.client.get(self.cart_url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, [])
        self.assertTrue(Cart.objects.filter(user=self.user).exists())

    def test_upsert_returns_authoritative_cart(self):
        self._auth()
        res = self.client.post(
            self.cart_url, {"productId": self.duffle.id, "qty": 2}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        res = self.client.post(
            self.cart_url, {"productId": self.chair.id, "qty": 1}, format="json"
        )
        self.assertEqual(
            res.data,
            [
                {"productId": self.duffle.id, "qty": 2},
                {"productId": self.chair.id, "qty": 1},
            ],
        )
        res_get = self.client.get(self.cart_url)
        self.assertEqual(res_get.data, res.data)

    def test_zero_quantity_removes_line(self):
        self._auth()
        self.client.post(
            self.cart_url, {"productId": self.duffle.id, "qty": 2}, format="json"
        )
        res = self.client.post(
            self.cart_url, {"productId": self.duffle.id, "qty": 0}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, [])

    def test_unknown_product_returns_not_found(self):
        self._auth()
        res = self.client.post(
            self.cart_url, {"productId": "doesnotexist0000", "qty": 1}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["message"], "Product doesn't exist")

    def test_negative_quantity_is_rejected(self):
        self._auth()
        res = self.client.post(
            self.cart_url, {"productId": self.duffle.id, "qty": -1}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["code"], "VALIDATION_ERROR")
        self.assertEqual(res.data["message"], "Quantity cannot be negative")
