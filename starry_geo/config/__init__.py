"""Configuration for the Starry Geo dashboard."""
from starry_geo.config.settings import config, GeoDashboardConfig

__all__ = ["config", "GeoDashboardConfig"]
