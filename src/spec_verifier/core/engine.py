"""
Rule Engine — verifies a spec artifact against its declared configuration.

Checks run in two phases:
1. Configuration completeness. Any missing required value produces a
   single aggregated error and stops verification.
2. Consistency checks between the configuration, the artifact coordinate,
   the manifest metadata and (when an archive is available) the packages
   of the classes it contains.

Every finding is returned as a ``Diagnostic``; nothing is raised for a
non-conforming artifact.
"""

import logging
import re
from collections.abc import Iterable

from spec_verifier.models.config import API_SUFFIX, JarType, SpecConfig, SpecMode
from spec_verifier.models.coordinate import ArtifactVersion, VersionCoordinate
from spec_verifier.models.diagnostics import Category, Diagnostic
from spec_verifier.models.metadata import (
    BUNDLE_SYMBOLIC_NAME,
    BUNDLE_VERSION,
    EXTENSION_NAME,
    IMPLEMENTATION_VERSION,
    SPECIFICATION_VERSION,
    PackageMetadata,
    build_symbolic_name,
    nonfinal_bundle_version,
    nonfinal_specification_version,
)

logger = logging.getLogger(__name__)

SPEC_VERSION_RE = re.compile(r"[0-9]+\.[0-9]+")
SPEC_VERSION_RULE = "JCP spec version number must be of the form <major>.<minor>"


def find_misplaced_packages(class_names: Iterable[str], allowed: Iterable[str]) -> list[str]:
    """
    Packages of classes that live outside every allowed package.

    Each package is listed once, in the order it is first seen.
    """
    prefixes = tuple(f"{pkg}." for pkg in allowed)
    misplaced: dict[str, None] = {}
    for name in class_names:
        if name.startswith(prefixes):
            continue
        idx = name.rfind(".")
        misplaced.setdefault(name[:idx] if idx > 0 else name)
    return list(misplaced)


def _exceeds_offset(lower: ArtifactVersion, upper: ArtifactVersion) -> bool:
    return upper.major - lower.major > 1 or upper.minor - lower.minor > 1


class RuleEngine:
    """
    Verifies one artifact.

    Args:
        config: Declared specification parameters.
        coordinate: The artifact's group/artifact/version.
        metadata: Manifest facts extracted from the artifact. When omitted
            the facts derived from ``config`` are checked instead.
        class_names: Dotted class names found in the archive, when one is
            available for the wrong-package scan.
    """

    def __init__(
        self,
        config: SpecConfig,
        coordinate: VersionCoordinate,
        metadata: PackageMetadata | None = None,
        class_names: Iterable[str] | None = None,
    ):
        self.config = config
        self.coordinate = coordinate
        self._metadata = metadata
        self.class_names = list(class_names) if class_names is not None else None

    @property
    def metadata(self) -> PackageMetadata:
        """Extracted metadata, or the metadata derived from the configuration."""
        if self._metadata is not None:
            return self._metadata
        return PackageMetadata.from_config(self.config, self.coordinate)

    def verify(self) -> tuple[Diagnostic, ...]:
        """Run every rule and return the diagnostics in emission order."""
        logger.debug(f"Verifying {self.coordinate} against {self.config.describe()}")

        missing = self.config.missing_fields()
        if missing:
            message = "missing configuration ( " + " ".join(missing) + " )"
            logger.debug(f"Configuration incomplete for {self.coordinate}: {missing}")
            return (Diagnostic.error(Category.CONFIG_INCOMPLETE, message),)

        metadata = self.metadata
        diagnostics: list[Diagnostic] = list(metadata.errors)
        diagnostics.extend(self._check_spec_version())
        diagnostics.extend(self._check_metadata(metadata))

        match self.config.jar_type:
            case JarType.API:
                diagnostics.extend(self._check_api(metadata))
            case JarType.STANDALONE:
                diagnostics.extend(self._check_standalone(metadata))

        logger.debug(f"{self.coordinate}: {len(diagnostics)} diagnostic(s)")
        return tuple(diagnostics)

    # ──────────────────────────────────────────────
    # Common checks
    # ──────────────────────────────────────────────

    def _check_spec_version(self) -> list[Diagnostic]:
        spec_version = self.config.spec_version
        if SPEC_VERSION_RE.fullmatch(spec_version):
            return []
        return [
            Diagnostic.warning(
                Category.FORMAT_MISMATCH,
                f"spec-version ({spec_version}) is invalid, {SPEC_VERSION_RULE}",
            )
        ]

    def _check_metadata(self, metadata: PackageMetadata) -> list[Diagnostic]:
        config = self.config
        absolute_version = self.coordinate.absolute_version
        found = []

        if metadata.implementation_version and metadata.implementation_version != absolute_version:
            found.append(
                Diagnostic.warning(
                    Category.CONSISTENCY_MISMATCH,
                    f"{IMPLEMENTATION_VERSION} ({metadata.implementation_version}) "
                    f"should be equal to Maven-Version ({absolute_version})",
                )
            )

        if metadata.extension_name != config.api_package:
            found.append(_should_be(EXTENSION_NAME, metadata.extension_name, config.api_package))

        if config.non_final:
            expected_bundle_version = nonfinal_bundle_version(config)
            expected_spec_version = nonfinal_specification_version(config)
        else:
            expected_bundle_version = absolute_version
            expected_spec_version = config.spec_version

        if metadata.bundle_version != expected_bundle_version:
            found.append(_should_be(BUNDLE_VERSION, metadata.bundle_version, expected_bundle_version))
        if metadata.specification_version != expected_spec_version:
            found.append(
                _should_be(SPECIFICATION_VERSION, metadata.specification_version, expected_spec_version)
            )
        return found

    def _check_api_package_prefix(self) -> list[Diagnostic]:
        api_package = self.config.api_package
        mode = self.config.spec_mode
        if api_package.startswith(mode.accepted_prefixes):
            return []
        return [
            Diagnostic.warning(
                Category.NAMING_VIOLATION,
                f"API packages ({api_package}) must start with {_quoted(mode)}",
            )
        ]

    def _check_classes(self, *allowed: str) -> list[Diagnostic]:
        if self.class_names is None:
            return []
        active_prefix = self.config.spec_mode.prefix
        return [
            Diagnostic.error(
                Category.NAMING_VIOLATION,
                f"jar file includes class in wrong package ({package})",
            )
            for package in find_misplaced_packages(self.class_names, allowed)
            if package.startswith(active_prefix)
        ]

    # ──────────────────────────────────────────────
    # API artifacts
    # ──────────────────────────────────────────────

    def _check_api(self, metadata: PackageMetadata) -> list[Diagnostic]:
        config = self.config
        group_id = self.coordinate.group_id or ""
        artifact_id = self.coordinate.artifact_id or ""
        found = []

        if not group_id.startswith(config.spec_mode.accepted_prefixes):
            found.append(
                Diagnostic.warning(
                    Category.NAMING_VIOLATION,
                    f"groupId ({group_id}) must start with {_quoted(config.spec_mode)}",
                )
            )
        if not artifact_id.endswith(API_SUFFIX):
            found.append(
                Diagnostic.warning(
                    Category.NAMING_VIOLATION,
                    f"artifactId ({artifact_id}) should end with {API_SUFFIX}",
                )
            )
        found.extend(self._check_api_package_prefix())

        # An absent symbolic name is already reported by extraction
        symbolic_name = build_symbolic_name(config.api_package, config.spec_mode)
        if metadata.bundle_symbolic_name and metadata.bundle_symbolic_name != symbolic_name:
            found.append(
                _should_be(BUNDLE_SYMBOLIC_NAME, metadata.bundle_symbolic_name, symbolic_name)
            )

        found.extend(self._check_classes(config.api_package))

        if config.non_final:
            found.extend(self._check_new_spec_version())
        else:
            spec_version = config.spec_version
            spec_impl_version = config.spec_impl_version
            if not (
                spec_impl_version == spec_version
                or spec_impl_version.startswith(f"{spec_version}.")
                or spec_impl_version.startswith(f"{spec_version}-")
            ):
                found.append(
                    Diagnostic.warning(
                        Category.CONSISTENCY_MISMATCH,
                        f"spec-impl-version ({spec_impl_version}) must start with "
                        f"JCP spec-version number ({spec_version})",
                    )
                )
        return found

    def _check_new_spec_version(self) -> list[Diagnostic]:
        spec_version = self.config.spec_version
        new_spec_version = self.config.new_spec_version
        found = []

        if not SPEC_VERSION_RE.fullmatch(new_spec_version):
            found.append(
                Diagnostic.warning(
                    Category.FORMAT_MISMATCH,
                    f"new-spec-version ({new_spec_version}) is invalid, {SPEC_VERSION_RULE}",
                )
            )

        if spec_version == new_spec_version:
            found.append(
                Diagnostic.warning(
                    Category.PROGRESSION_VIOLATION,
                    f"spec-version ({spec_version}) can't be equal to "
                    f"new-spec-version ({new_spec_version}) for non final artifacts",
                )
            )
            return found

        current = ArtifactVersion.parse(spec_version)
        upcoming = ArtifactVersion.parse(new_spec_version)
        if not upcoming > current:
            found.append(
                Diagnostic.warning(
                    Category.PROGRESSION_VIOLATION,
                    f"new-spec-version ({new_spec_version}) must be greater "
                    f"than spec-version ({spec_version})",
                )
            )
        elif _exceeds_offset(current, upcoming):
            found.append(
                Diagnostic.warning(
                    Category.PROGRESSION_VIOLATION,
                    f"offset between new-spec-version ({new_spec_version}) and "
                    f"spec-version ({spec_version}) can't be greater than 1",
                )
            )
        return found

    # ──────────────────────────────────────────────
    # Standalone implementation artifacts
    # ──────────────────────────────────────────────

    def _check_standalone(self, metadata: PackageMetadata) -> list[Diagnostic]:
        config = self.config
        group_id = self.coordinate.group_id or ""
        artifact_id = self.coordinate.artifact_id or ""
        prefix = config.spec_mode.prefix
        found = []

        if group_id.startswith(prefix):
            found.append(
                Diagnostic.warning(
                    Category.NAMING_VIOLATION,
                    f'groupId ({group_id}) should not start with "{prefix}"',
                )
            )
        if artifact_id.endswith(API_SUFFIX):
            found.append(
                Diagnostic.warning(
                    Category.NAMING_VIOLATION,
                    f"artifactId ({artifact_id}) should not end with {API_SUFFIX}",
                )
            )
        found.extend(self._check_api_package_prefix())

        symbolic_name = f"{config.impl_namespace}.{config.api_package}"
        if metadata.bundle_symbolic_name != symbolic_name:
            found.append(
                _should_be(BUNDLE_SYMBOLIC_NAME, metadata.bundle_symbolic_name, symbolic_name)
            )

        found.extend(self._check_classes(config.api_package, config.impl_namespace))

        if config.non_final:
            found.extend(self._check_new_impl_version())
        return found

    def _check_new_impl_version(self) -> list[Diagnostic]:
        impl_version = self.config.impl_version
        new_impl_version = self.config.new_impl_version

        if impl_version == new_impl_version:
            return [
                Diagnostic.warning(
                    Category.PROGRESSION_VIOLATION,
                    f"impl-version ({impl_version}) can't be equal to "
                    f"new-impl-version ({new_impl_version}) for non final artifacts",
                )
            ]

        current = ArtifactVersion.parse(impl_version)
        upcoming = ArtifactVersion.parse(new_impl_version)
        if not current < upcoming:
            return [
                Diagnostic.warning(
                    Category.PROGRESSION_VIOLATION,
                    f"new-impl-version ({new_impl_version}) must be greater "
                    f"than impl-version ({impl_version})",
                )
            ]
        if _exceeds_offset(current, upcoming):
            return [
                Diagnostic.warning(
                    Category.PROGRESSION_VIOLATION,
                    f"offset between new-impl-version ({new_impl_version}) and "
                    f"impl-version ({impl_version}) can't be greater than 1",
                )
            ]
        return []


def _should_be(key: str, actual: str, expected: str | None) -> Diagnostic:
    return Diagnostic.warning(Category.CONSISTENCY_MISMATCH, f"{key} ({actual}) should be {expected}")


def _quoted(mode: SpecMode) -> str:
    return " or ".join(f'"{prefix}"' for prefix in mode.accepted_prefixes)
