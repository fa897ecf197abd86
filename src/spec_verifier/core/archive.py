"""
Spec Archive — read access to a built artifact.

Provides the identity descriptor (``pom.properties``), the manifest main
attributes and the class entries of a jar file. Read failures propagate to
the caller unchanged.
"""

import logging
import zipfile
from collections.abc import Iterator
from pathlib import Path

from spec_verifier.models.coordinate import VersionCoordinate
from spec_verifier.models.metadata import PackageMetadata
from spec_verifier.parsers.manifest import parse_manifest
from spec_verifier.parsers.properties import parse_properties

logger = logging.getLogger(__name__)

MANIFEST_ENTRY = "META-INF/MANIFEST.MF"
POM_PROPERTIES_SUFFIX = "pom.properties"
CLASS_SUFFIX = ".class"


class ArchiveFormatError(ValueError):
    """Raised when an archive lacks a descriptor every spec artifact must carry."""


class SpecArchive:
    """
    A jar file opened for inspection.

    Usage:
        with SpecArchive(path) as archive:
            coordinate = archive.read_coordinate()
            metadata = archive.read_metadata()
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._zip = zipfile.ZipFile(self.path)

    def __enter__(self) -> "SpecArchive":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._zip.close()

    def _read_text(self, name: str) -> str:
        # Manifests are UTF-8, property files are ISO-8859-1 with \u escapes
        data = self._zip.read(name)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            return data.decode("latin-1")

    def read_coordinate(self) -> VersionCoordinate:
        """Read group/artifact/version from the first ``pom.properties`` entry."""
        for info in self._zip.infolist():
            if info.filename.endswith(POM_PROPERTIES_SUFFIX):
                props = parse_properties(self._read_text(info.filename))
                coordinate = VersionCoordinate.from_properties(props)
                logger.debug(f"Read {coordinate} from {self.path.name}:{info.filename}")
                return coordinate
        raise ArchiveFormatError(f"unable to find pom.properties inside {self.path}")

    def read_manifest(self) -> dict[str, str]:
        """Main attributes of ``META-INF/MANIFEST.MF``."""
        try:
            content = self._read_text(MANIFEST_ENTRY)
        except KeyError:
            raise ArchiveFormatError(f"unable to find {MANIFEST_ENTRY} inside {self.path}") from None
        return parse_manifest(content)

    def read_metadata(self) -> PackageMetadata:
        return PackageMetadata.from_manifest(self.read_manifest())

    def class_names(self) -> Iterator[str]:
        """Dotted names of the class entries, in archive order."""
        for info in self._zip.infolist():
            if info.is_dir() or not info.filename.endswith(CLASS_SUFFIX):
                continue
            yield info.filename[: -len(CLASS_SUFFIX)].replace("/", ".")
