"""
Integrations Package

External service integrations: the REST backend and the geo directory.
"""

from console.integrations.api_client import ApiClient, ApiError, Pagination
from console.integrations.admin_api import EventsAPI, InstituteAdminAPI, SuperAdminAPI
from console.integrations.geo import load_state_districts

__all__ = [
    'ApiClient',
    'ApiError',
    'Pagination',
    'SuperAdminAPI',
    'InstituteAdminAPI',
    'EventsAPI',
    'load_state_districts',
]
