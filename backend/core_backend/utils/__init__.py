"""
Utility helpers shared across the backend apps.
"""
