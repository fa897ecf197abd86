"""
Spec Configuration — the declared intent a built artifact is checked against.

Holds the naming mode, the jar type and the version/build values whose
required subset depends on the jar type and on the release maturity.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from spec_verifier.models.coordinate import strip_snapshot_qualifier

logger = logging.getLogger(__name__)

LEGACY_PREFIX = "javax."
CURRENT_PREFIX = "jakarta."
API_SUFFIX = "-api"

# Released versions, never snapshots
SNAPSHOT_STRIPPED_FIELDS = ("spec_impl_version", "impl_version")


class ConfigurationError(ValueError):
    """Raised when a configuration cannot be used for the requested operation."""


class SpecMode(Enum):
    """Group ID and package naming mode."""

    STRICT = "javaee"  # single legacy prefix
    DUAL = "jakarta"  # current prefix, legacy prefix still accepted

    @property
    def prefix(self) -> str:
        """Group ID and package prefix of this mode, including the trailing dot."""
        match self:
            case SpecMode.STRICT:
                return LEGACY_PREFIX
            case SpecMode.DUAL:
                return CURRENT_PREFIX

    @property
    def accepted_prefixes(self) -> tuple[str, ...]:
        match self:
            case SpecMode.STRICT:
                return (LEGACY_PREFIX,)
            case SpecMode.DUAL:
                return (LEGACY_PREFIX, CURRENT_PREFIX)

    @classmethod
    def from_name(cls, name: str | None) -> "SpecMode":
        """Look up a mode by variant or historical name, defaulting to DUAL."""
        if not name:
            return cls.DUAL
        key = name.strip().lower()
        for mode in cls:
            if key in (mode.name.lower(), mode.value):
                return mode
        logger.warning(f"Unknown spec mode {name!r}, using {cls.DUAL.value!r}")
        return cls.DUAL


class JarType(Enum):
    """Role of the artifact: API classes only, or API plus implementation."""

    API = "api"
    STANDALONE = "impl"

    @classmethod
    def from_name(cls, name: str | None) -> "JarType":
        if not name:
            return cls.API
        key = name.strip().lower()
        if key == "standalone":
            return cls.STANDALONE
        for jar_type in cls:
            if key in (jar_type.name.lower(), jar_type.value):
                return jar_type
        raise ConfigurationError(f"Unknown jar type: {name!r}. Use 'api' or 'impl'.")


def _is_missing(value: str | None) -> bool:
    return value is None or value == ""


# property-file key -> SpecConfig attribute
PROPERTY_KEYS = {
    "API_PACKAGE": "api_package",
    "IMPL_NAMESPACE": "impl_namespace",
    "SPEC_VERSION": "spec_version",
    "NEW_SPEC_VERSION": "new_spec_version",
    "SPEC_IMPL_VERSION": "spec_impl_version",
    "IMPL_VERSION": "impl_version",
    "NEW_IMPL_VERSION": "new_impl_version",
    "SPEC_BUILD": "spec_build",
    "IMPL_BUILD": "impl_build",
}


@dataclass
class SpecConfig:
    """
    Declared specification parameters.

    ``None`` means "not configured" and ``""`` means "configured as empty";
    the completeness check treats both as missing. A trailing ``-SNAPSHOT``
    is dropped from ``spec_impl_version`` and ``impl_version`` whenever
    they are assigned.
    """

    spec_mode: SpecMode = SpecMode.DUAL
    jar_type: JarType = JarType.API
    non_final: bool = False
    api_package: str | None = None
    impl_namespace: str | None = None
    spec_version: str | None = None
    new_spec_version: str | None = None
    spec_impl_version: str | None = None
    impl_version: str | None = None
    new_impl_version: str | None = None
    spec_build: str | None = None
    impl_build: str | None = None

    def __setattr__(self, name: str, value) -> None:
        if name in SNAPSHOT_STRIPPED_FIELDS:
            value = strip_snapshot_qualifier(value)
        super().__setattr__(name, value)

    @property
    def build(self) -> str | None:
        """Build number matching the jar type."""
        match self.jar_type:
            case JarType.API:
                return self.spec_build
            case JarType.STANDALONE:
                return self.impl_build

    def missing_fields(self) -> list[str]:
        """Names of required fields that are unset, in reporting order."""
        missing = []
        if _is_missing(self.spec_version):
            missing.append("spec-version")
        if _is_missing(self.api_package):
            missing.append("api-package")
        if self.non_final and _is_missing(self.new_spec_version):
            missing.append("new-spec-version")

        match self.jar_type:
            case JarType.STANDALONE:
                if _is_missing(self.impl_namespace):
                    missing.append("impl-namespace")
                if _is_missing(self.impl_version):
                    missing.append("impl-version")
                if self.non_final and _is_missing(self.new_impl_version):
                    missing.append("new-impl-version")
            case JarType.API:
                if not self.non_final and _is_missing(self.spec_impl_version):
                    missing.append("spec-impl-version")
        return missing

    @classmethod
    def from_properties(cls, props: dict[str, str]) -> "SpecConfig":
        """
        Build a configuration from property-file entries.

        Without an explicit ``NON_FINAL`` entry the spec is non-final
        exactly when ``NEW_SPEC_VERSION`` is present.
        """
        values = {attr: props[key] for key, attr in PROPERTY_KEYS.items() if key in props}
        if "NON_FINAL" in props:
            non_final = props["NON_FINAL"].strip().lower() in ("true", "yes", "1")
        else:
            non_final = "NEW_SPEC_VERSION" in props
        return cls(
            spec_mode=SpecMode.from_name(props.get("SPEC_MODE")),
            jar_type=JarType.from_name(props.get("JAR_TYPE")),
            non_final=non_final,
            **values,
        )

    def describe(self) -> str:
        """One-line summary printed above the diagnostics of an artifact."""
        parts = [f"groupIdPrefix={self.spec_mode.prefix}"]
        if self.spec_version:
            parts.append(f"spec-version={self.spec_version}")
        if self.api_package:
            parts.append(f"apiPackage={self.api_package}")

        match self.jar_type:
            case JarType.STANDALONE:
                parts.append("standalone-impl")
                parts.append(f"impl-namespace={self.impl_namespace}")
                if self.non_final:
                    parts.append("non-final")
                    parts.append(f"new-spec-version={self.new_spec_version}")
                    parts.append(f"new-impl-version={self.new_impl_version}")
                    parts.append(f"impl-build={self.impl_build}")
                else:
                    parts.append("final")
                parts.append(f"impl-version={self.impl_version}")
            case JarType.API:
                parts.append("API")
                if self.non_final:
                    parts.append("non-final")
                    parts.append(f"new-spec-version={self.new_spec_version}")
                    parts.append(f"spec-build={self.spec_build}")
                else:
                    parts.append("final")
                    parts.append(f"spec-impl-version={self.spec_impl_version}")
        return "{ " + " ".join(parts) + " }"
