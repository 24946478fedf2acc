"""
Mapping Documents

Builds the short-lived YAML documents consumed by products:supersede,
products:replace and products:update, and manages their lifetime on disk.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from ..core.constants import ErrorMessages, ProductState
from ..core.exceptions import LifecycleError

logger = logging.getLogger(__name__)


def build_plan_mapping(product_url: str, plan: str) -> Dict[str, Any]:
    """
    Build a plan mapping document for supersede/replace

    Args:
        product_url: URL of the product being superseded or replaced
        plan: Plan name, mapped onto the plan of the same name

    Returns:
        Dict with product_url and a single source -> target plan entry
    """
    return {
        "product_url": product_url,
        "plans": [
            {"source": plan, "target": plan}
        ]
    }


def build_state_mapping(state: ProductState) -> Dict[str, str]:
    """Build a lifecycle state document"""
    return {"state": ProductState(state).value}


class MappingFile:
    """
    Context manager for a transient mapping document.

    The document is written on entry and removed on exit, whether the
    block completes or raises.
    """

    def __init__(self, path: Path, document: Dict[str, Any]):
        """
        Initialize mapping file

        Args:
            path: File to write
            document: YAML document content
        """
        self.path = Path(path)
        self.document = document

    def __enter__(self) -> Path:
        """
        Write the document and return its path.

        Returns:
            Path of the written mapping file
        """
        return self.write()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Remove the document."""
        self.remove()

    def write(self) -> Path:
        """
        Write the document as YAML

        Raises:
            LifecycleError: If the file cannot be written
        """
        content = yaml.safe_dump(self.document, default_flow_style=False, sort_keys=False)
        try:
            self.path.write_text(content)
        except OSError as e:
            raise LifecycleError(ErrorMessages.MAPPING_WRITE_FAILED.format(path=self.path, error=e))
        logger.debug(f"Wrote mapping file {self.path}:\n{content.rstrip()}")
        return self.path

    def remove(self) -> None:
        """Delete the document if it exists"""
        try:
            self.path.unlink()
            logger.debug(f"Removed mapping file {self.path}")
        except FileNotFoundError:
            pass
