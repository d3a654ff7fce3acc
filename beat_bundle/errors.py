"""Exceptions raised while reading, decoding and resolving map bundles."""


class BundleError(Exception):
    """Base class for every error raised by beat_bundle."""


class SourceError(BundleError):
    """A named document could not be read from its source."""


class DocumentNotFoundError(SourceError):
    """The source has no entry with exactly the requested name."""

    def __init__(self, name: str, source: str = ""):
        self.name = name
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"No document named {name!r}{where}")


class RemoteFetchError(SourceError):
    """Downloading a map archive failed."""


class DecodeError(BundleError, ValueError):
    """A document does not match any supported schema."""


class SchemaVersionError(DecodeError):
    """The version field is missing, malformed, or names an unsupported major."""


class FieldDecodeError(DecodeError):
    """A field is missing, has the wrong type, or holds an out-of-range value."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path or '<document>'}: {reason}")


class ResolutionError(BundleError):
    """Resolving a bundle failed on one of its difficulty documents.

    The underlying SourceError or DecodeError is available as ``__cause__``.
    """

    def __init__(self, message: str, characteristic: str = "", filename: str = ""):
        self.characteristic = characteristic
        self.filename = filename
        super().__init__(message)


class InvalidReferenceError(BundleError, ValueError):
    """A remote locator matches none of the accepted URL patterns."""
