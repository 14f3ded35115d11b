"""
Shared utilities for Careersie.

Common functionality used across contexts:
- LLM provider access
- Logging setup
- Timestamps
"""

from careersie.utils.timestamp import now_exact, today

__all__ = ["now_exact", "today"]
