"""
Test configuration package initialization.
"""

from .constants import REFERENCE_NOW, TEST_DATABASE_URL, TestData

__all__ = ["REFERENCE_NOW", "TEST_DATABASE_URL", "TestData"]
