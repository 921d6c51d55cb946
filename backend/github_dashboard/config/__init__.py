"""Application configuration: environment settings and the seed catalog."""

from github_dashboard.config.settings import AppSettings, get_settings
from github_dashboard.config.catalog import CatalogLoader, get_catalog_loader

__all__ = [
    "AppSettings",
    "get_settings",
    "CatalogLoader",
    "get_catalog_loader",
]
