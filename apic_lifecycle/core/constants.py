"""
Constants Module

Centralized constants for the APIC Lifecycle tool to eliminate magic strings
and improve maintainability.
"""

from enum import Enum


class ActionType(str, Enum):
    """Product lifecycle actions selectable through ACTION"""
    PUBLISH = "publish"
    SUPERSEDE = "supersede"
    REPLACE = "replace"
    DEPRECATE = "deprecate"
    RETIRE = "retire"

    def __str__(self) -> str:
        """Return the action literal as written in the configuration file"""
        return self.value

    @classmethod
    def choices(cls) -> list:
        """Get all action literals in dispatch order"""
        return [action.value for action in cls]

    @classmethod
    def usage(cls) -> str:
        """Get the action literals formatted for usage messages"""
        return " | ".join(cls.choices())


class ProductState(str, Enum):
    """Target states written to lifecycle state documents"""
    DEPRECATED = "deprecated"
    RETIRED = "retired"

    def __str__(self) -> str:
        return self.value


class ApicConstants:
    """APIC CLI related constants"""

    DEFAULT_BINARY = "apic"

    # Publication scope used for every catalog command
    SCOPE_SPACE = "space"

    class Command(str, Enum):
        """apic sub-commands invoked by the tool"""
        LOGIN = "login"
        CREATE = "create"
        PUBLISH = "products:publish"
        LIST_ALL = "products:list-all"
        SUPERSEDE = "products:supersede"
        REPLACE = "products:replace"
        UPDATE = "products:update"

        def __str__(self) -> str:
            """Return the sub-command as passed to the apic binary"""
            return self.value

    # Object type for 'apic create'
    CREATE_PRODUCT_TYPE = "product"


class ConfigKeys:
    """Environment file keys"""

    ACTION = "ACTION"
    SERVER = "SERVER"
    ORG = "ORG"
    CATALOG = "CATALOG"
    SPACE = "SPACE"
    USERNAME = "USERNAME"
    PASSWORD = "PASSWORD"
    REALM = "REALM"
    APIC_BINARY = "APIC_BINARY"

    # Keys required regardless of the selected action
    REQUIRED = [SERVER, ORG, CATALOG, USERNAME, PASSWORD, REALM]

    # Keys required by a specific action, checked after the action is known
    ACTION_REQUIRED = {
        ActionType.PUBLISH: [SPACE, "NAME", "TITLE", "VERSION", "API_FILE"],
        ActionType.SUPERSEDE: [
            SPACE,
            "PRODUCT_SUPERSEDE",
            "OLD_VERSION_SUPERSEDE",
            "NEW_VERSION_SUPERSEDE",
            "PLAN_SUPERSEDE",
        ],
        ActionType.REPLACE: [
            SPACE,
            "OLD_PRODUCT_REPLACE",
            "OLD_VERSION_REPLACE",
            "NEW_VERSION_REPLACE",
            "PLAN_REPLACE",
        ],
        ActionType.DEPRECATE: [SPACE, "PRODUCT_DEPRECATE", "VERSION_DEPRECATE"],
        ActionType.RETIRE: [SPACE, "PRODUCT_RETIRE", "VERSION_RETIRE"],
    }

    # Keys whose values must never be logged
    SENSITIVE = [PASSWORD]


class FileConstants:
    """File related constants"""

    DEFAULT_CONFIG_FILE = "apic_inputs.env"
    PRODUCT_FILE_EXTENSION = ".yaml"

    class MappingFileName(str, Enum):
        """Transient mapping documents written next to the product files"""
        SUPERSEDE = "supersede_mapping.yaml"
        REPLACE = "replace_mapping.yaml"
        DEPRECATE = "deprecate_product.yaml"
        RETIRE = "retire_product.yaml"

        def __str__(self) -> str:
            return self.value


class ErrorMessages:
    """Centralized error message templates"""

    CONFIG_FILE_NOT_FOUND = "Environment file '{config_path}' not found."
    CONFIG_PATH_NOT_FILE = "Environment path '{config_path}' is not a file."
    WORK_DIR_NOT_FOUND = "Working directory '{work_dir}' does not exist or is not a directory."
    MAPPING_WRITE_FAILED = "Failed to write mapping file {path}: {error}"
    ACTION_NOT_SET = "ACTION variable not set. Please define ACTION in {config_path}."
    MISSING_VARIABLE = "Missing required variable: {name}"
    INVALID_ACTION = (
        "Invalid ACTION specified: '{action}'. Use one of:\n"
        "       {choices}"
    )

    LOGIN_FAILED = "APIC login failed. Please check your credentials."
    BINARY_NOT_FOUND = (
        "APIC CLI binary '{binary}' not found. Install the API Connect toolkit "
        "and ensure it is in your PATH, or set APIC_BINARY."
    )

    PRODUCT_FILE_NOT_CREATED = "Product file not created: {product_file}"
    PRODUCT_URL_NOT_FOUND = "Unable to locate old product URL for {identifier}."

    OPERATION_FAILED = "{operation} operation failed."
