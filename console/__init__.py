"""
TruePortMe Admin Console

Navigation, filtering and name resolution logic behind the
super-admin and institute-admin dashboards.
"""

__version__ = "0.1.0"
