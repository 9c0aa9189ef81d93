# boutique/modules/customer/__init__.py

"""
Customer module package exports.

The Qt table model lives in `.model` and is imported from there, so the
history service stays usable without a Qt runtime.
"""

from .history import CustomerHistoryService

__all__ = [
    "CustomerHistoryService",
]
