"""
Configurable image registry.

Maps the logical image name used in an instance template (e.g. "cloudera-centos-68")
to the marketplace descriptor Azure needs (publisher, offer, sku, version).
The registry is loaded once from the configurable images file and is
read-only during validation.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from azure_template_validator.core.exceptions import ImageMissingError, ImageConfigIncompleteError


class VmImageInfo(BaseModel):
    """Marketplace image descriptor. All four fields are required strings."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    publisher: StrictStr
    sku: StrictStr
    offer: StrictStr
    version: StrictStr

    def __str__(self) -> str:
        return f"{self.publisher}/{self.offer}/{self.sku}/{self.version}"


class ConfigurableImageRegistry:
    """
    Read-only image name -> VmImageInfo lookup.

    Entries are validated lazily in get(), so one broken entry only fails the
    templates that reference it.
    """

    def __init__(self, images: Optional[Mapping[str, Any]] = None):
        self._images: Dict[str, Any] = dict(images or {})

    def get(self, name: str) -> VmImageInfo:
        """
        Resolve an image name by exact key match.

        Raises:
            ImageMissingError: Name not present, or the entry is not an object
            ImageConfigIncompleteError: Entry lacks publisher, sku, offer or version
        """
        entry = self._images.get(name)
        if not isinstance(entry, Mapping):
            raise ImageMissingError(name)

        try:
            return VmImageInfo.model_validate(dict(entry))
        except ValidationError as e:
            missing = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            raise ImageConfigIncompleteError(name, missing) from e

    def names(self) -> List[str]:
        return sorted(self._images.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._images

    def __len__(self) -> int:
        return len(self._images)
