"""
Routers package for FastAPI endpoints.

Organized by domain:
- quotations: PDF processing, quotation listing and price comparison
- tenants: Tenant registration and lookup
"""

from . import quotations, tenants

__all__ = ["quotations", "tenants"]
