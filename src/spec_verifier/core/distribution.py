"""
Distribution Checker — verifies every spec artifact found in a directory.

Each archive is matched to a declared configuration by its coordinate.
Archives with no declaration are verified against an empty configuration,
which reports the missing values.
"""

import logging
import zipfile
from fnmatch import fnmatch
from pathlib import Path

from spec_verifier.core.archive import ArchiveFormatError, SpecArchive
from spec_verifier.core.engine import RuleEngine
from spec_verifier.models.config import SpecConfig
from spec_verifier.models.coordinate import VersionCoordinate
from spec_verifier.models.diagnostics import VerificationResult

logger = logging.getLogger(__name__)


def verify_archive(
    path: Path,
    config: SpecConfig,
    coordinate: VersionCoordinate | None = None,
) -> VerificationResult:
    """
    Verify a built archive against ``config``.

    The coordinate is read from the archive unless one is given. I/O and
    format errors propagate.
    """
    with SpecArchive(path) as archive:
        if coordinate is None:
            coordinate = archive.read_coordinate()
        metadata = archive.read_metadata()
        engine = RuleEngine(config, coordinate, metadata, class_names=archive.class_names())

    return VerificationResult(
        coordinate=coordinate,
        description=config.describe(),
        diagnostics=engine.verify(),
        archive=str(path),
        metadata=metadata.to_properties(),
    )


class DistributionChecker:
    """
    Verifies the archives of a distribution directory.

    Args:
        specs: Declared configurations keyed by the coordinate they apply to.
    """

    def __init__(self, specs: dict[VersionCoordinate, SpecConfig] | None = None):
        self.specs = specs or {}

    def find_archives(self, directory: Path, includes: str = "*.jar", excludes: str | None = None) -> list[Path]:
        """Archives under ``directory`` matching the comma-separated patterns."""
        include_patterns = _split_patterns(includes)
        exclude_patterns = _split_patterns(excludes)
        found = []
        for path in sorted(directory.rglob("*")):
            if not path.is_file():
                continue
            relative = path.relative_to(directory).as_posix()
            if not any(_matches(relative, p) for p in include_patterns):
                continue
            if any(_matches(relative, p) for p in exclude_patterns):
                continue
            found.append(path)
        return found

    def config_for(self, coordinate: VersionCoordinate) -> SpecConfig:
        config = self.specs.get(coordinate)
        if config is None:
            logger.info(f"No spec declared for {coordinate}")
            return SpecConfig()
        return config

    def check(
        self, directory: Path, includes: str = "*.jar", excludes: str | None = None
    ) -> list[VerificationResult]:
        """Verify every matching archive; unreadable archives are reported as skipped."""
        directory = Path(directory)
        if not directory.exists():
            raise FileNotFoundError(f"directory ({directory.absolute()}) does not exist")

        results = []
        archives = self.find_archives(directory, includes, excludes)
        logger.info(f"Checking {len(archives)} archive(s) in {directory}")

        for path in archives:
            try:
                with SpecArchive(path) as archive:
                    coordinate = archive.read_coordinate()
                result = verify_archive(path, self.config_for(coordinate), coordinate)
            except (OSError, zipfile.BadZipFile, ArchiveFormatError) as e:
                logger.warning(f"Failed to read {path}: {e}")
                results.append(VerificationResult(coordinate=None, archive=str(path), skipped=str(e)))
                continue

            logger.debug(f"{path.name}: {len(result.diagnostics)} diagnostic(s)")
            results.append(result)

        failed = sum(1 for r in results if not r.passed)
        logger.info(f"Distribution check complete: {len(results)} archive(s), {failed} with issues")
        return results


def _split_patterns(patterns: str | None) -> list[str]:
    if not patterns:
        return []
    return [p.strip() for p in patterns.split(",") if p.strip()]


def _matches(relative: str, pattern: str) -> bool:
    # "**/" prefixes match at any depth, bare patterns match the file name
    if pattern.startswith("**/"):
        pattern = pattern[3:]
    return fnmatch(relative, pattern) or fnmatch(relative.rsplit("/", 1)[-1], pattern)
