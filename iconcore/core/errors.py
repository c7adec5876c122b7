# iconcore/core/errors.py
from __future__ import annotations

__all__ = [
    "ReactorScramError",
    "IconCoreError",
    "PackNotFoundError",
    "ParseError",
    "EncodeError",
    "RegistryUnavailableError",
    "PackageNameNotFoundError",
    "ResourceNotFoundError",
]



class ReactorScramError(Exception):
    """Raised when the process wiring is broken and nothing sensible can continue."""
    pass



class IconCoreError(Exception):
    """Base class for typed failures the icon pack core reports to its callers."""
    pass



class PackNotFoundError(IconCoreError):
    """Requested pack id does not resolve to an installed, accessible package."""
    def __init__(self, packId: str, reason: str | None = None):
        self.packId = packId
        self.reason = reason
        message = f"Icon pack '{packId}' not found"
        if reason:
            message += f": {reason}"
        super().__init__(message)



class ParseError(IconCoreError):
    """The pack's descriptor could not be opened or streamed."""
    def __init__(self, packId: str, reason: str | None = None):
        self.packId = packId
        self.reason = reason
        message = f"Cannot read descriptor of icon pack '{packId}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)



class EncodeError(IconCoreError):
    """Raster buffer could not be allocated or encoded."""
    pass



class RegistryUnavailableError(IconCoreError):
    """The package registry itself cannot be queried."""
    pass

# ----- Platform-level lookups -----

class PackageNameNotFoundError(LookupError):
    """Registry has no installed package with the given name."""
    def __init__(self, packageName: str):
        self.packageName = packageName
        super().__init__(f"Package '{packageName}' is not installed")



class ResourceNotFoundError(LookupError):
    """Resource identifier does not (or no longer does) resolve inside a container."""
    pass
