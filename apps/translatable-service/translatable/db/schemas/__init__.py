"""
Pydantic schemas shared by the repositories and services.
"""

from .pagination import Page, PageRequest

__all__ = ["Page", "PageRequest"]
