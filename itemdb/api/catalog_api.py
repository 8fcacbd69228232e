"""HTTP client for the catalog server.

Talks to the endpoints served by `catalog_server`:

    POST {base_url}/items            multipart: name, category, image
    GET  {base_url}/items            -> {"items": [{"name", "category", "image"}, ...]}
    GET  {base_url}/items/{position} -> {"name", "category", "image"}
    GET  {base_url}/search?keyword=  -> {"items": [...]}
    GET  {base_url}/image/{filename} -> raw image bytes
"""

from pathlib import Path
from typing import Optional

import requests


class CatalogAPIError(Exception):
    """Raised when the catalog server returns an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CatalogAPI:
    """Client for the catalog HTTP API."""

    def __init__(self, base_url: str, timeout: float = 30.0):
        """Initialize the client.

        Args:
            base_url: Base URL of the catalog server (e.g., 'http://localhost:9000')
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        try:
            response = requests.request(
                method,
                f"{self.base_url}{endpoint}",
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            raise CatalogAPIError(f"Request failed: {e}")

        if response.status_code != 200:
            raise CatalogAPIError(
                f"API error {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response

    def add_item(self, name: str, category: str, image_path: str | Path) -> dict:
        """Upload an image file and create an item.

        Raises:
            CatalogAPIError: If the API call fails
            FileNotFoundError: If the image file doesn't exist
        """
        image_path = Path(image_path)
        if not image_path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")

        with open(image_path, "rb") as f:
            return self.add_item_from_bytes(name, category, f.read(), image_path.name)

    def add_item_from_bytes(
        self,
        name: str,
        category: str,
        image_bytes: bytes,
        filename: str = "image.jpg",
    ) -> dict:
        response = self._request(
            "POST",
            "/items",
            data={"name": name, "category": category},
            files={"image": (filename, image_bytes, "application/octet-stream")},
        )
        return response.json()

    def list_items(self) -> list[dict]:
        return self._request("GET", "/items").json().get("items") or []

    def get_item(self, position: int) -> dict:
        return self._request("GET", f"/items/{position}").json()

    def search(self, keyword: str) -> list[dict]:
        response = self._request("GET", "/search", params={"keyword": keyword})
        return response.json().get("items") or []

    def get_image(self, image_filename: str) -> bytes:
        return self._request("GET", f"/image/{image_filename}").content

    def health_check(self) -> bool:
        """Check if the API is available.

        Returns:
            True if the API is reachable, False otherwise
        """
        for endpoint in ["/health", "/"]:
            try:
                response = requests.get(f"{self.base_url}{endpoint}", timeout=5.0)
                if response.status_code < 500:
                    return True
            except requests.RequestException:
                continue
        return False
