"""
Infrastructure layer package for PlantDaddy.
Provides database engine and session management.
"""

__all__ = []
