"""Storefront client: the non-presentational logic of the QKart shop page."""
