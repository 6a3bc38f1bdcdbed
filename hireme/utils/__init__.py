"""
Shared utilities for HireMe.

Common functionality used across contexts:
- LLM provider abstraction
- Logger setup
- Timestamps and item identifiers
"""

from hireme.utils.errors import HireMeError
from hireme.utils.timestamp import new_item_id, now, today

__all__ = ["HireMeError", "new_item_id", "now", "today"]
