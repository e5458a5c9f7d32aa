import unittest

from apps.storefront.container import build_storefront
from apps.storefront.dtos import CartEntry, Notification
from apps.storefront.errors import CART_CONNECTIVITY_MESSAGE
from .fakes import BASE_URL, VALID_TOKEN, FakeQKartApi, envelope


class StorefrontControllerTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.api = FakeQKartApi()
        self.app = build_storefront(
            base_url=BASE_URL, transport=self.api.transport, search_delay_ms=5
        )
        self.controller = self.app.controller
        self.notifier = self.app.notifier

    async def asyncTearDown(self):
        await self.app.aclose()

    async def _login(self):
        self.app.session.start(VALID_TOKEN, "crio.do", 5000)

    async def test_load_joins_cart_with_catalog(self):
        await self._login()
        self.api.cart = [{"productId": "a", "qty": 2}, {"productId": "b", "qty": 1}]
        await self.controller.load()
        self.assertFalse(self.controller.loading)
        self.assertEqual(len(self.controller.filtered_products), 2)
        self.assertEqual([i.cost for i in self.controller.line_items], [100, 50])
        self.assertEqual(self.controller.total_value, 250)
        self.assertEqual(self.controller.total_quantity, 3)
        self.assertFalse(self.controller.is_empty)

    async def test_empty_cart_state(self):
        await self._login()
        await self.controller.load()
        self.assertTrue(self.controller.is_empty)
        self.assertEqual(self.controller.total_value, 0)
        self.assertEqual(self.controller.total_quantity, 0)

    async def test_anonymous_load_skips_cart(self):
        await self.controller.load()
        self.assertEqual(self.controller.cart, [])
        self.assertEqual(self.api.calls("GET", "cart"), [])

    async def test_invalid_token_on_cart_fetch_logs_out(self):
        self.app.session.start("expired", "crio.do", 5000)
        await self.controller.load()
        self.assertIsNone(self.app.session.token)
        self.assertIsNone(self.app.session.username)
        self.assertIsNone(self.app.session.balance)
        self.assertEqual(self.app.navigator.current, "/login")
        self.assertEqual(
            self.notifier.notifications[-1],
            Notification("Token Invalid, Please Login Again", "error"),
        )
        self.assertEqual(self.controller.cart, [])

    async def test_cart_fetch_failure_notifies_and_empties(self):
        await self._login()
        self.api.unreachable.add(("GET", "cart"))
        await self.controller.load()
        self.assertEqual(self.controller.cart, [])
        self.assertEqual(self.notifier.messages, [CART_CONNECTIVITY_MESSAGE])
        self.assertTrue(self.app.session.is_authenticated)

    async def test_add_to_cart_then_duplicate_is_warned(self):
        await self._login()
        await self.controller.load()
        self.assertTrue(await self.controller.add_to_cart("a"))
        self.assertEqual(self.controller.cart, [CartEntry("a", 1)])

        posts = len(self.api.calls("POST", "cart"))
        self.assertFalse(await self.controller.add_to_cart("a"))
        self.assertEqual(len(self.api.calls("POST", "cart")), posts)
        self.assertEqual(self.notifier.notifications[-1].variant, "warning")
        self.assertEqual(self.controller.cart, [CartEntry("a", 1)])

    async def test_add_to_cart_requires_login(self):
        await self.controller.load()
        self.assertFalse(await self.controller.add_to_cart("a"))
        self.assertEqual(
            self.notifier.notifications[-1],
            Notification("Login to add an item to the Cart", "warning"),
        )
        self.assertEqual(self.api.calls("POST", "cart"), [])

    async def test_change_quantity_to_zero_hides_line(self):
        await self._login()
        self.api.cart = [{"productId": "a", "qty": 2}]
        await self.controller.load()
        await self.controller.change_quantity("a", 0)
        self.assertEqual(self.controller.line_items, [])
        self.assertTrue(self.controller.is_empty)

    async def test_missing_product_message_keeps_mirror(self):
        await self._login()
        self.api.cart = [{"productId": "a", "qty": 2}]
        await self.controller.load()
        self.assertFalse(await self.controller.change_quantity("ghost", 1))
        self.assertEqual(
            self.notifier.notifications[-1],
            Notification("Product doesn't exist", "error"),
        )
        self.assertEqual(self.controller.cart, [CartEntry("a", 2)])

    async def test_malformed_cart_response_keeps_mirror(self):
        await self._login()
        self.api.cart = [{"productId": "a", "qty": 2}]
        await self.controller.load()
        self.api.override("POST", "cart", 200, json={"unexpected": True})
        self.assertFalse(await self.controller.change_quantity("a", 5))
        self.assertEqual(self.notifier.messages[-1], CART_CONNECTIVITY_MESSAGE)
        self.assertEqual(self.controller.cart, [CartEntry("a", 2)])

    async def test_search_found(self):
        await self.controller.load()
        self.controller.on_search_input("kitchen")
        self.assertTrue(self.controller.loading)
        await self.controller.search.drain()
        self.assertFalse(self.controller.loading)
        self.assertTrue(self.controller.products_found)
        self.assertEqual([p.id for p in self.controller.filtered_products], ["b"])
        self.assertEqual(len(self.controller.products), 2)

    async def test_search_not_found(self):
        await self.controller.load()
        self.controller.on_search_input("laptop")
        await self.controller.search.drain()
        self.assertFalse(self.controller.products_found)
        self.assertEqual(self.controller.filtered_products, [])

    async def test_search_backend_failure(self):
        await self.controller.load()
        self.api.override(
            "GET", "products/search", 500, json=envelope("SERVER_ERROR", "boom")
        )
        self.controller.on_search_input("chair")
        await self.controller.search.drain()
        self.assertFalse(self.controller.products_found)
        self.assertEqual(self.controller.filtered_products, [])
        self.assertEqual(self.notifier.notifications, [])

    async def test_debounced_search_sends_only_last_query(self):
        await self.controller.load()
        for text in ("c", "ch", "cha", "chair"):
            self.controller.on_search_input(text)
        await self.controller.search.drain()
        searches = self.api.calls("GET", "products/search")
        self.assertEqual([r.url.params["value"] for r in searches], ["chair"])
        self.assertEqual(self.controller.search_key, "chair")

    async def test_product_list_failure_leaves_empty_catalog(self):
        self.api.unreachable.add(("GET", "products"))
        await self.controller.load()
        self.assertEqual(self.controller.products, [])
        self.assertFalse(self.controller.loading)
