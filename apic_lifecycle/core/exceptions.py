"""
Exceptions

Error types raised by the APIC Lifecycle tool. Every failure is fatal; the
application entry point turns any LifecycleError into exit status 1.
"""


class LifecycleError(Exception):
    """Base class for all APIC Lifecycle errors"""


class ConfigurationError(LifecycleError):
    """Raised when the environment file cannot be loaded"""


class MissingFieldError(ConfigurationError):
    """Raised when a required configuration variable is empty or absent"""

    def __init__(self, field: str, message: str = None):
        self.field = field
        super().__init__(message or f"Missing required variable: {field}")


class InvalidActionError(ConfigurationError):
    """Raised when ACTION is not one of the supported lifecycle actions"""

    def __init__(self, action: str, message: str):
        self.action = action
        super().__init__(message)


class AuthenticationError(LifecycleError):
    """Raised when 'apic login' fails"""


class ApicError(LifecycleError):
    """Base class for failures of the external apic CLI"""


class ApicBinaryNotFoundError(ApicError):
    """Raised when the apic executable cannot be located"""


class CommandFailedError(ApicError):
    """Raised when an apic command exits with a non-zero status"""

    def __init__(self, message: str, result):
        self.result = result
        super().__init__(message)

    @property
    def returncode(self) -> int:
        return self.result.returncode


class ArtifactNotFoundError(LifecycleError):
    """Raised when 'apic create product' did not produce the product file"""


class ProductNotFoundError(LifecycleError):
    """Raised when a name:version identifier is absent from the product listing"""

    def __init__(self, identifier: str, message: str):
        self.identifier = identifier
        super().__init__(message)
