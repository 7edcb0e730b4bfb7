"""Barbershop booking core: clients, price list and appointments."""

__version__ = "1.0.0"
