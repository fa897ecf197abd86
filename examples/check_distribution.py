"""
Example: Verify the spec artifacts of a distribution directory.

Usage:
    python examples/check_distribution.py ./dist
"""

import sys
from pathlib import Path

from spec_verifier.core.distribution import DistributionChecker
from spec_verifier.models.config import JarType, SpecConfig
from spec_verifier.models.coordinate import VersionCoordinate
from spec_verifier.reporters import get_reporter


def main(directory: Path) -> int:
    # Declare the specs the distribution is expected to ship
    specs = {
        VersionCoordinate("jakarta.wombat", "jakarta.wombat-api", "1.1.2"): SpecConfig(
            api_package="jakarta.wombat",
            spec_version="1.1",
            spec_impl_version="1.1.2",
        ),
        VersionCoordinate("org.glassfish", "jakarta.wombat", "3.1.4"): SpecConfig(
            jar_type=JarType.STANDALONE,
            api_package="jakarta.wombat",
            impl_namespace="org.glassfish",
            spec_version="1.1",
            impl_version="3.1.4",
        ),
    }

    results = DistributionChecker(specs).check(directory, excludes="*-sources.jar,*-javadoc.jar")

    reporter = get_reporter("console")
    for result in results:
        reporter.report(result)
    reporter.finalize()

    return 0 if all(r.passed for r in results) else 1


if __name__ == "__main__":
    sys.exit(main(Path(sys.argv[1] if len(sys.argv) > 1 else "./dist")))
