from apps.storefront.dtos import CartEntry, CartLineItem, Product
from apps.storefront.projection import (
    generate_cart_items,
    total_quantity,
    total_value,
    visible_items,
)

PRODUCTS = [
    Product(id="a", name="Duffle", category="Fashion", cost=100, rating=4, image_url="a.png"),
    Product(id="b", name="Chair", category="Home", cost=50, rating=5, image_url="b.png"),
]


def test_empty_or_absent_cart_projects_to_nothing():
    assert generate_cart_items([], PRODUCTS) == []
    assert generate_cart_items(None, PRODUCTS) == []


def test_projection_preserves_cart_order_and_length():
    cart = [CartEntry("b", 1), CartEntry("a", 2)]
    items = generate_cart_items(cart, PRODUCTS)
    assert [i.product_id for i in items] == ["b", "a"]
    assert [i.quantity for i in items] == [1, 2]
    assert items[1].name == "Duffle"
    assert items[1].image_url == "a.png"


def test_unknown_product_yields_partial_item():
    items = generate_cart_items([CartEntry("ghost", 3)], PRODUCTS)
    assert items == [CartLineItem(product_id="ghost", quantity=3)]
    assert items[0].is_partial
    assert total_value(items) == 0
    assert total_quantity(items) == 3


def test_totals_for_joined_cart():
    items = generate_cart_items([CartEntry("a", 2), CartEntry("b", 1)], PRODUCTS)
    assert [i.cost for i in items] == [100, 50]
    assert total_value(items) == 250
    assert total_quantity(items) == 3


def test_totals_of_empty_cart_are_zero():
    assert total_value([]) == 0
    assert total_quantity([]) == 0
    assert total_value() == 0
    assert total_quantity(None) == 0


def test_fractional_costs_add_up():
    products = [Product("c", "Clock", "Home", 75.5, 3, "c.png")]
    items = generate_cart_items([CartEntry("c", 2)], products)
    assert total_value(items) == 151.0


def test_visible_items_hide_zero_quantity_lines():
    items = generate_cart_items([CartEntry("a", 0), CartEntry("b", 2)], PRODUCTS)
    assert [i.product_id for i in visible_items(items)] == ["b"]
    assert visible_items(None) == []
