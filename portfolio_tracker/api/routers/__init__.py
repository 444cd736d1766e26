"""
API routers.
"""

from . import analytics, reports

__all__ = ["analytics", "reports"]
