"""
Validation package: configurable images, field checks and the validator.

Usage:
    from azure_template_validator.validation import InstanceTemplateValidator
"""

from .images import VmImageInfo, ConfigurableImageRegistry
from .validator import InstanceTemplateValidator

__all__ = [
    "VmImageInfo",
    "ConfigurableImageRegistry",
    "InstanceTemplateValidator",
]
