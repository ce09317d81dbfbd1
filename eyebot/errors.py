"""Error kinds raised by pipeline stages.

Every stage failure inside an attempt is an ``EyebotError``; the retry loop
treats them all the same way. ``AssetLoadError`` and ``ConfigError`` only happen at startup.
"""

from __future__ import annotations


class EyebotError(Exception):
    """Base class for expected pipeline failures."""


class SourceFetchError(EyebotError):
    """Source page or image could not be fetched."""


class ImageLinkNotFoundError(SourceFetchError):
    """The source page had no image preview link."""


class AnnotationError(EyebotError):
    """Annotation service failed or returned nothing usable."""


class NoAnnotationsError(AnnotationError):
    """No (eligible) object annotations for the image."""


class DecodeError(EyebotError):
    """Base image could not be decoded."""


class PublishError(EyebotError):
    """Publish target rejected the post or the dry-run write failed."""


class AssetLoadError(EyebotError):
    """Overlay assets could not be loaded."""


class ConfigError(EyebotError):
    """A label-tables or blocklist file could not be read or is invalid."""
