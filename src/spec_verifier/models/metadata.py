"""
Package Metadata — the manifest facts a spec artifact carries.

A ``PackageMetadata`` is either extracted from the main attributes of an
archive manifest, or derived from a ``SpecConfig`` as the facts the
artifact is expected to carry:

    jar type    final  Bundle-SymbolicName       Bundle-Version
    api         yes    <api-package>-api         <spec-impl-version>
    api         no     <api-package>-api         <spec>.99.b<spec-build>
    impl        yes    <impl-ns>.<api-package>   <impl-version>
    impl        no     <impl-ns>.<api-package>   <impl-major>.<impl-minor>.99.b<impl-build>
"""

from dataclasses import dataclass

from spec_verifier.models.config import (
    API_SUFFIX,
    CURRENT_PREFIX,
    LEGACY_PREFIX,
    ConfigurationError,
    JarType,
    SpecConfig,
    SpecMode,
)
from spec_verifier.models.coordinate import ArtifactVersion, VersionCoordinate, strip_approved_qualifier
from spec_verifier.models.diagnostics import Category, Diagnostic
from spec_verifier.parsers.manifest import get_attribute

BUNDLE_SYMBOLIC_NAME = "Bundle-SymbolicName"
BUNDLE_SPEC_VERSION = "BundleSpecVersion"
BUNDLE_VERSION = "Bundle-Version"
EXTENSION_NAME = "Extension-Name"
SPECIFICATION_VERSION = "Specification-Version"
IMPLEMENTATION_VERSION = "Implementation-Version"

METADATA_KEYS = (
    BUNDLE_SYMBOLIC_NAME,
    BUNDLE_SPEC_VERSION,
    BUNDLE_VERSION,
    EXTENSION_NAME,
    SPECIFICATION_VERSION,
    IMPLEMENTATION_VERSION,
)

NONFINAL_SPEC_SEPARATOR = ".99."
NONFINAL_BUILD_SEPARATOR = NONFINAL_SPEC_SEPARATOR + "b"


def build_symbolic_name(api_package: str, spec_mode: SpecMode) -> str:
    """
    Bundle symbolic name of an API artifact.

    In dual mode a legacy package prefix is swapped for the current one.
    Only the leading prefix is replaced.
    """
    match spec_mode:
        case SpecMode.DUAL if api_package.startswith(LEGACY_PREFIX):
            return CURRENT_PREFIX + api_package[len(LEGACY_PREFIX) :] + API_SUFFIX
        case SpecMode.DUAL | SpecMode.STRICT:
            return api_package + API_SUFFIX


def nonfinal_bundle_version(config: SpecConfig) -> str:
    """OSGi bundle version of a non-final artifact."""
    match config.jar_type:
        case JarType.API:
            return f"{config.spec_version}{NONFINAL_BUILD_SEPARATOR}{config.spec_build}"
        case JarType.STANDALONE:
            impl = ArtifactVersion.parse(config.impl_version or "")
            return f"{impl.major}.{impl.minor}{NONFINAL_BUILD_SEPARATOR}{config.impl_build}"


def nonfinal_specification_version(config: SpecConfig) -> str:
    """Jar specification version of a non-final artifact."""
    return f"{config.spec_version}{NONFINAL_SPEC_SEPARATOR}{config.build}"


@dataclass(frozen=True)
class PackageMetadata:
    """The six manifest facts, ``""`` when absent."""

    bundle_symbolic_name: str = ""
    bundle_spec_version: str = ""
    bundle_version: str = ""
    extension_name: str = ""
    specification_version: str = ""
    implementation_version: str = ""
    errors: tuple[Diagnostic, ...] = ()

    @classmethod
    def from_manifest(cls, attributes: dict[str, str]) -> "PackageMetadata":
        """
        Extract the facts from manifest main attributes.

        Each absent key yields one error, except ``BundleSpecVersion`` which
        is never read.
        """
        values: dict[str, str] = {}
        errors = []
        for key in METADATA_KEYS:
            if key == BUNDLE_SPEC_VERSION:
                # TODO resolve from Export-Package once bundle spec versions are checked
                continue
            value = get_attribute(attributes, key)
            if value is None:
                errors.append(
                    Diagnostic.error(Category.EXTRACTION_MISSING, f"{key} not found in MANIFEST")
                )
            values[key] = value or ""

        return cls(
            bundle_symbolic_name=values[BUNDLE_SYMBOLIC_NAME],
            bundle_version=values[BUNDLE_VERSION],
            extension_name=values[EXTENSION_NAME],
            specification_version=values[SPECIFICATION_VERSION],
            implementation_version=values[IMPLEMENTATION_VERSION],
            errors=tuple(errors),
        )

    @classmethod
    def from_config(
        cls, config: SpecConfig, coordinate: VersionCoordinate | None = None
    ) -> "PackageMetadata":
        """Derive the facts an artifact built from ``config`` should carry."""
        if not config.spec_version:
            raise ConfigurationError("spec-version is required to derive metadata")
        if not config.api_package:
            raise ConfigurationError("api-package is required to derive metadata")

        spec_version = config.spec_version
        api_package = config.api_package

        match (config.jar_type, config.non_final):
            case (JarType.API, False):
                impl_version = strip_approved_qualifier(config.spec_impl_version) or ""
                return cls(
                    bundle_symbolic_name=build_symbolic_name(api_package, config.spec_mode),
                    bundle_spec_version=spec_version,
                    bundle_version=impl_version,
                    extension_name=api_package,
                    specification_version=spec_version,
                    implementation_version=impl_version,
                )
            case (JarType.API, True):
                osgi_version = nonfinal_bundle_version(config)
                new_version = strip_approved_qualifier(config.new_spec_version) or ""
                return cls(
                    bundle_symbolic_name=build_symbolic_name(api_package, config.spec_mode),
                    bundle_spec_version=osgi_version,
                    bundle_version=osgi_version,
                    extension_name=api_package,
                    specification_version=nonfinal_specification_version(config),
                    implementation_version=f"{new_version}-b{config.spec_build}",
                )
            case (JarType.STANDALONE, False):
                return cls(
                    bundle_symbolic_name=f"{config.impl_namespace}.{api_package}",
                    bundle_spec_version=spec_version,
                    bundle_version=config.impl_version or "",
                    extension_name=api_package,
                    specification_version=spec_version,
                    implementation_version=_artifact_version(coordinate),
                )
            case (JarType.STANDALONE, True):
                new_version = strip_approved_qualifier(config.new_impl_version) or ""
                return cls(
                    bundle_symbolic_name=f"{config.impl_namespace}.{api_package}",
                    bundle_spec_version=f"{spec_version}{NONFINAL_BUILD_SEPARATOR}{config.impl_build}",
                    bundle_version=nonfinal_bundle_version(config),
                    extension_name=api_package,
                    specification_version=nonfinal_specification_version(config),
                    implementation_version=f"{new_version}-b{config.impl_build}",
                )

    def to_properties(self) -> dict[str, str]:
        """Facts keyed by the build properties they populate."""
        return {
            "spec.bundle.symbolic-name": self.bundle_symbolic_name,
            "spec.bundle.spec.version": self.bundle_spec_version,
            "spec.bundle.version": self.bundle_version,
            "spec.extension.name": self.extension_name,
            "spec.specification.version": self.specification_version,
            "spec.implementation.version": self.implementation_version,
        }


def _artifact_version(coordinate: VersionCoordinate | None) -> str:
    if coordinate is None or coordinate.version is None:
        raise ConfigurationError("an artifact version is required to derive Implementation-Version")
    return coordinate.absolute_version or ""
