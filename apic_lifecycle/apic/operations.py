"""
Product Operations

The five lifecycle handlers. Each one is a fixed sequence of apic commands
driven by the configuration passed in; the first failure raises and ends
the run.
"""

import logging
from pathlib import Path

from .client import ApicClient, CatalogTarget
from .mapping import MappingFile, build_plan_mapping, build_state_mapping
from .resolver import ProductResolver
from ..core.config import LifecycleConfig
from ..core.constants import ActionType, ErrorMessages, FileConstants, ProductState
from ..core.exceptions import ArtifactNotFoundError
from ..core.utils import format_step, product_identifier

logger = logging.getLogger(__name__)


class ProductOperations:
    """Lifecycle handlers for API products"""

    def __init__(self, client: ApicClient, resolver: ProductResolver = None):
        """
        Initialize product operations

        Args:
            client: ApicClient running the commands
            resolver: Product URL resolver (defaults to one backed by client)
        """
        self.client = client
        self.resolver = resolver or ProductResolver(client)

    @property
    def work_dir(self) -> Path:
        return self.client.work_dir

    def handler_for(self, action: ActionType):
        """
        Get the handler for an action

        Args:
            action: Validated action

        Returns:
            Bound handler taking a LifecycleConfig
        """
        handlers = {
            ActionType.PUBLISH: self.publish,
            ActionType.SUPERSEDE: self.supersede,
            ActionType.REPLACE: self.replace,
            ActionType.DEPRECATE: self.deprecate,
            ActionType.RETIRE: self.retire,
        }
        return handlers[ActionType(action)]

    @staticmethod
    def _target(config: LifecycleConfig) -> CatalogTarget:
        return CatalogTarget(config.server, config.org, config.catalog, config.space)

    def publish(self, config: LifecycleConfig) -> None:
        """
        Create a product from an API definition and publish it

        Raises:
            ArtifactNotFoundError: If apic create did not write <NAME>.yaml
            CommandFailedError: If create or publish fails
        """
        logger.info(format_step("STEP 2: Creating and Publishing Product"))
        product_file = f"{config.name}{FileConstants.PRODUCT_FILE_EXTENSION}"

        self.client.create_product(config.title, config.name, config.version, config.api_file)

        if not (self.work_dir / product_file).is_file():
            raise ArtifactNotFoundError(ErrorMessages.PRODUCT_FILE_NOT_CREATED.format(product_file=product_file))

        target = self._target(config)
        logger.info(f"Product file created: {product_file}")
        logger.info(f"Publishing product to {target}...")

        self.client.publish_product(product_file, target)
        logger.info(f"Product {product_identifier(config.name, config.version)} published successfully.")

    def supersede(self, config: LifecycleConfig) -> None:
        """Supersede a published product version with a new version"""
        logger.info(format_step("STEP 2: Superseding Existing Product"))
        target = self._target(config)

        old_url = self.resolver.resolve_product_url(
            target, config.product_supersede, config.old_version_supersede
        )
        identifier = product_identifier(config.product_supersede, config.new_version_supersede)
        mapping = build_plan_mapping(old_url, config.plan_supersede)

        with MappingFile(self.work_dir / FileConstants.MappingFileName.SUPERSEDE.value, mapping) as path:
            self.client.supersede_product(target, identifier, path.name)

        logger.info("Product superseded successfully.")

    def replace(self, config: LifecycleConfig) -> None:
        """Replace a published product with another product version"""
        logger.info(format_step("STEP 2: Replacing Existing Product"))
        target = self._target(config)

        old_url = self.resolver.resolve_product_url(
            target, config.old_product_replace, config.old_version_replace
        )
        identifier = product_identifier(config.replacement_product, config.new_version_replace)
        mapping = build_plan_mapping(old_url, config.plan_replace)

        with MappingFile(self.work_dir / FileConstants.MappingFileName.REPLACE.value, mapping) as path:
            self.client.replace_product(target, identifier, path.name)

        logger.info("Product replaced successfully.")

    def deprecate(self, config: LifecycleConfig) -> None:
        """Move a published product to the deprecated state"""
        logger.info(format_step("STEP 2: Deprecating Product"))
        self._change_state(
            config,
            product_identifier(config.product_deprecate, config.version_deprecate),
            ProductState.DEPRECATED,
            FileConstants.MappingFileName.DEPRECATE,
            "Deprecate"
        )
        logger.info("Product deprecated successfully.")

    def retire(self, config: LifecycleConfig) -> None:
        """Move a published product to the retired state"""
        logger.info(format_step("STEP 2: Retiring Product"))
        self._change_state(
            config,
            product_identifier(config.product_retire, config.version_retire),
            ProductState.RETIRED,
            FileConstants.MappingFileName.RETIRE,
            "Retire"
        )
        logger.info("Product retired successfully.")

    def _change_state(self, config: LifecycleConfig, identifier: str, state: ProductState,
                      file_name: FileConstants.MappingFileName, operation: str) -> None:
        """Write a state document and apply it with products:update"""
        target = self._target(config)
        logger.info(f"Setting {identifier} to '{state}' in {target}")

        with MappingFile(self.work_dir / file_name.value, build_state_mapping(state)) as path:
            self.client.update_product(target, identifier, path.name, operation=operation)
