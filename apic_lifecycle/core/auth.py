"""
Authentication Module

Handles login to the API Connect management server.
"""

import logging

from .config import LifecycleConfig
from .constants import ErrorMessages
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class ApicAuth:
    """Handles apic login against the management server"""

    def __init__(self, client):
        """
        Initialize authentication handler

        Args:
            client: ApicClient used to run 'apic login'
        """
        self.client = client
        self.authenticated = False

    def login(self, config: LifecycleConfig) -> bool:
        """
        Log in with the server, credentials and realm from config

        Args:
            config: Validated lifecycle configuration

        Returns:
            bool: True once logged in

        Raises:
            AuthenticationError: If apic login exits with a non-zero status
        """
        logger.info(f"Logging in to {config.server} as {config.username} (realm: {config.realm})")

        result = self.client.login(config.server, config.username, config.password, config.realm)

        if not result.succeeded:
            if result.output:
                logger.debug(f"Login output: {result.output}")
            raise AuthenticationError(ErrorMessages.LOGIN_FAILED)

        self.authenticated = True
        logger.info("Login successful.")
        return True

    def is_authenticated(self) -> bool:
        return self.authenticated
