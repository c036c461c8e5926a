"""
Dash UI layer: layout builders, table widgets, and callback registration.
"""

from .dash_app import create_dash_app

__all__ = ["create_dash_app"]
