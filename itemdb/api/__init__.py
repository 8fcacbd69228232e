"""External API integrations - catalog server client."""

from .catalog_api import CatalogAPI, CatalogAPIError

__all__ = ["CatalogAPI", "CatalogAPIError"]
