"""Delivery zone resolution and fee calculation service."""
