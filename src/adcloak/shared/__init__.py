"""adcloak Shared Module.

This package contains constants and error handling used across adcloak.
"""

__all__ = ["constants", "errors"]
