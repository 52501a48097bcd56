"""
Custom exceptions for the instance template validator.

This module defines a hierarchy of exceptions used by the loaders, the
configurable image registry and callers that want to turn an accumulated
validation report into a raised error.

Business-level validation failures (missing resource group, unsupported
VM size, ...) are NEVER raised out of validate(); they are recorded in the
ConditionAccumulator. The exceptions below cover configuration defects and
caller-side conveniences.

Exception Hierarchy:
    ValidatorError (base)
    ├── ConfigurationError - Invalid or missing plugin/image configuration
    ├── ImageRegistryError - Configurable image lookup failed
    │   ├── ImageMissingError - Image name not present in the registry
    │   └── ImageConfigIncompleteError - Image entry lacks a required field
    └── InstanceTemplateValidationError - Accumulated errors raised by the caller
"""

from typing import Optional, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .accumulator import FailureRecord


class ValidatorError(Exception):
    """
    Base exception for all validator errors.

    Attributes:
        message: Human-readable error description
        field: Optional configuration field the error relates to
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field

        if field:
            full_message = f"{message} [field={field}]"
        else:
            full_message = message

        super().__init__(full_message)


class ConfigurationError(ValidatorError):
    """
    Raised when the plugin configuration is invalid or missing required fields.

    This typically occurs when:
    - The plugin config or configurable images file is missing
    - A file has invalid JSON
    - A required key (e.g. "supported-instances") is missing
    - A configured regular expression does not compile

    Example:
        >>> load_plugin_config(Path("nonexistent.json"))
        ConfigurationError: Required configuration file not found: nonexistent.json (file: nonexistent.json)
    """

    def __init__(self, message: str, config_file: Optional[str] = None):
        self.config_file = config_file
        if config_file:
            message = f"{message} (file: {config_file})"
        super().__init__(message)


class ImageRegistryError(ValidatorError):
    """Base class for configurable image lookup failures."""

    def __init__(self, message: str, image_name: str):
        self.image_name = image_name
        super().__init__(message, field="image")


class ImageMissingError(ImageRegistryError):
    """Raised when an image name is not present in the configurable image list."""

    def __init__(self, image_name: str):
        super().__init__(f"Image '{image_name}' not found in configurable images", image_name)


class ImageConfigIncompleteError(ImageRegistryError):
    """
    Raised when an image entry lacks one of publisher, sku, offer, version.

    Attributes:
        missing_fields: Names of the fields that were absent or not strings
    """

    def __init__(self, image_name: str, missing_fields: List[str]):
        self.missing_fields = missing_fields
        message = (
            f"Image '{image_name}' is missing required fields: "
            f"{', '.join(missing_fields)}"
        )
        super().__init__(message, image_name)


class InstanceTemplateValidationError(ValidatorError):
    """
    Raised by ConditionAccumulator.raise_if_errors() when errors were recorded.

    Attributes:
        records: The error records that caused the failure, in recording order
    """

    def __init__(self, records: List['FailureRecord']):
        self.records = records
        lines = [record.message for record in records]
        message = f"Instance template validation failed with {len(records)} error(s)"
        if lines:
            message += ":\n  - " + "\n  - ".join(lines)
        super().__init__(message)
