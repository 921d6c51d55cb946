"""
Seed catalog loader.

Loads config/catalog.yml, the single source of truth for the activity
types, dashboard types, tiers and features every deployment starts with.

Usage:
    from github_dashboard.config.catalog import get_catalog_loader

    catalog = get_catalog_loader()
    for activity in catalog.activity_types:
        ...
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "catalog.yml"


class CatalogLoader:
    """Read-only view over a catalog YAML file."""

    def __init__(self, config_path: Optional[Path] = None):
        self._config_path = Path(config_path) if config_path else DEFAULT_CATALOG_PATH
        self._raw: Dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        if not self._config_path.exists():
            raise FileNotFoundError(f"Catalog file not found: {self._config_path}")

        logger.info("Loading catalog from %s", self._config_path)
        with open(self._config_path, "r") as f:
            self._raw = yaml.safe_load(f) or {}

        logger.info(
            "Loaded catalog: %d activity types, %d dashboard types, %d tiers",
            len(self.activity_types),
            len(self.dashboard_types),
            len(self.tier_types),
        )

    @property
    def activity_types(self) -> List[Dict[str, Any]]:
        return list(self._raw.get("activity_types", []))

    @property
    def dashboard_types(self) -> List[Dict[str, Any]]:
        return list(self._raw.get("dashboard_types", []))

    @property
    def tier_types(self) -> List[Dict[str, Any]]:
        return list(self._raw.get("tier_types", []))

    @property
    def features(self) -> List[Dict[str, Any]]:
        return list(self._raw.get("features", []))


_loader: Optional[CatalogLoader] = None


def get_catalog_loader() -> CatalogLoader:
    """Return the loader for the bundled catalog."""
    global _loader
    if _loader is None:
        _loader = CatalogLoader()
    return _loader
