"""
Product URL Resolver

Looks up the URL of a published product from the products:list-all output.
"""

import logging
from typing import Optional

from .client import ApicClient, CatalogTarget
from ..core.constants import ErrorMessages
from ..core.exceptions import ProductNotFoundError
from ..core.utils import product_identifier

logger = logging.getLogger(__name__)


class ProductResolver:
    """Resolves name:version identifiers to product URLs"""

    def __init__(self, client: ApicClient):
        self.client = client

    def resolve_product_url(self, target: CatalogTarget, name: str, version: str) -> str:
        """
        Resolve the URL of a product published in the target space

        Args:
            target: Catalog scope to search
            name: Product name
            version: Product version

        Returns:
            str: Product URL, the last column of the matching listing line

        Raises:
            ProductNotFoundError: If no listing line carries the name:version token
        """
        identifier = product_identifier(name, version)
        logger.info(f"Looking up product URL for {identifier} in {target}")

        listing = self.client.list_products(target)
        url = self.extract_product_url(listing, identifier)

        if not url:
            raise ProductNotFoundError(
                identifier,
                ErrorMessages.PRODUCT_URL_NOT_FOUND.format(identifier=identifier)
            )

        logger.info(f"Found product URL: {url}")
        return url

    @staticmethod
    def extract_product_url(listing: str, identifier: str) -> Optional[str]:
        """
        Extract the product URL for identifier from list-all output

        Each listing line has the form '<name>:<version> [<state> ...] <url>'.
        Only lines where identifier appears as a whole whitespace-separated
        field match, so 'orders:1.0' does not match 'orders:1.0.1'. The first
        matching line wins.

        Args:
            listing: Raw products:list-all output
            identifier: name:version token to look for

        Returns:
            The last field of the first matching line, or None
        """
        for line in listing.splitlines():
            columns = line.split()
            if len(columns) > 1 and identifier in columns[:-1]:
                return columns[-1]
        return None
