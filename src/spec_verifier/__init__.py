"""
Spec Verifier - naming and versioning checks for specification artifacts.

Verifies that a built API or standalone-implementation jar carries the
coordinate, manifest attributes and class packages its specification
declaration calls for, in both final and non-final (pre-release) builds.
"""

__version__ = "1.0.0"


def __getattr__(name: str):
    """Lazy import for the public entry points."""
    if name == "RuleEngine":
        from spec_verifier.core.engine import RuleEngine

        return RuleEngine
    if name == "SpecConfig":
        from spec_verifier.models.config import SpecConfig

        return SpecConfig
    if name == "PackageMetadata":
        from spec_verifier.models.metadata import PackageMetadata

        return PackageMetadata
    if name == "VersionCoordinate":
        from spec_verifier.models.coordinate import VersionCoordinate

        return VersionCoordinate
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["RuleEngine", "SpecConfig", "PackageMetadata", "VersionCoordinate", "__version__"]
