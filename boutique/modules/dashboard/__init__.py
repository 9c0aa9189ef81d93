# boutique/modules/dashboard/__init__.py

"""
Dashboard module package exports.
"""

from .insights import InsightClient, InsightError, build_business_prompt

__all__ = [
    "InsightClient",
    "InsightError",
    "build_business_prompt",
]
