"""
Spec Verifier CLI — checks the naming and versioning conventions of spec artifacts.

Usage:
    spec-verifier check target/wombat-api.jar --properties wombat.properties
    spec-verifier check-dist ./dist --spec wombat.properties --spec fish.properties
    spec-verifier verify --api-package javax.wombat --spec-version 1.1 --spec-impl-version 1.1.2
    spec-verifier properties --properties wombat.properties --output spec.properties
"""

import dataclasses
import functools
import logging
from pathlib import Path

import click

from spec_verifier.models.config import (
    API_SUFFIX,
    ConfigurationError,
    JarType,
    SpecConfig,
    SpecMode,
)
from spec_verifier.models.coordinate import VersionCoordinate

logger = logging.getLogger(__name__)

# CLI option name -> SpecConfig attribute
VALUE_OPTIONS = {
    "api_package": "api_package",
    "impl_namespace": "impl_namespace",
    "spec_version": "spec_version",
    "new_spec_version": "new_spec_version",
    "spec_impl_version": "spec_impl_version",
    "impl_version": "impl_version",
    "new_impl_version": "new_impl_version",
    "spec_build": "spec_build",
    "impl_build": "impl_build",
}
IMPL_ONLY_OPTIONS = ("impl_namespace", "impl_version", "new_impl_version", "impl_build", "impl_jar")
NON_FINAL_ONLY_OPTIONS = ("new_spec_version", "spec_build", "new_impl_version", "impl_build")


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def spec_options(func):
    """Options declaring the specification an artifact is checked against."""
    options = [
        click.option(
            "--properties",
            "-p",
            "properties_file",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=None,
            help="Read settings from a property file.",
        ),
        click.option(
            "--spec-mode",
            type=click.Choice(["jakarta", "javaee", "dual", "strict"], case_sensitive=False),
            default=None,
            help="Naming mode: 'jakarta' (dual prefix) or 'javaee' (strict prefix).",
        ),
        click.option(
            "--jar-type",
            type=click.Choice(["api", "impl", "standalone"], case_sensitive=False),
            default=None,
            help="API jar, or standalone implementation jar.",
        ),
        click.option("--non-final/--final", default=None, help="Specification still under development."),
        click.option("--api-package", default=None, help="API package (e.g., jakarta.wombat)."),
        click.option("--impl-namespace", default=None, help="Implementation package (e.g., com.sun.wombat)."),
        click.option("--spec-version", default=None, help="Version number of the specification."),
        click.option("--new-spec-version", default=None, help="Version number of the spec under development."),
        click.option("--spec-impl-version", default=None, help="Version number of the API classes."),
        click.option("--impl-version", default=None, help="Version number of the implementation."),
        click.option(
            "--new-impl-version", default=None, help="Version number of the implementation when final."
        ),
        click.option("--spec-build", default=None, help="Build number of the spec API jar file."),
        click.option("--impl-build", default=None, help="Build number of the implementation jar file."),
        click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging."),
    ]
    return functools.reduce(lambda f, option: option(f), reversed(options), func)


def coordinate_options(func):
    """Options overriding the artifact coordinate."""
    options = [
        click.option("--group-id", default=None, help="Artifact groupId."),
        click.option("--artifact-id", default=None, help="Artifact artifactId."),
        click.option("--artifact-version", default=None, help="Artifact version."),
    ]
    return functools.reduce(lambda f, option: option(f), reversed(options), func)


def report_options(func):
    options = [
        click.option(
            "--format",
            "-f",
            "fmt",
            type=click.Choice(["console", "json"]),
            default="console",
            help="Report format.",
        ),
        click.option("--output", "-o", type=click.Path(), default=None, help="Report file (json format)."),
        click.option("--ignore-errors", is_flag=True, help="Exit 0 even when diagnostics are reported."),
    ]
    return functools.reduce(lambda f, option: option(f), reversed(options), func)


def _read_properties(path: Path) -> dict[str, str]:
    from spec_verifier.parsers.properties import parse_properties

    try:
        return parse_properties(path.read_text(encoding="latin-1"))
    except OSError as e:
        raise click.ClickException(f"cannot read {path}: {e}") from e


def build_config(properties: dict[str, str] | None, options: dict) -> SpecConfig:
    """Property-file settings overridden by command-line options."""
    try:
        config = SpecConfig.from_properties(properties or {})
        if options.get("jar_type"):
            config.jar_type = JarType.from_name(options["jar_type"])
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    if options.get("spec_mode"):
        config.spec_mode = SpecMode.from_name(options["spec_mode"])
    if options.get("non_final") is not None:
        config.non_final = options["non_final"]
    for option, attr in VALUE_OPTIONS.items():
        if options.get(option) is not None:
            setattr(config, attr, options[option])
    return config


def _override_coordinate(
    coordinate: VersionCoordinate | None, group_id, artifact_id, version
) -> VersionCoordinate | None:
    if coordinate is None and not (group_id or artifact_id or version):
        return None
    base = coordinate or VersionCoordinate(None, None, None)
    return dataclasses.replace(
        base,
        group_id=group_id or base.group_id,
        artifact_id=artifact_id or base.artifact_id,
        version=version or base.version,
    )


def _coordinate_from_properties(props: dict[str, str]) -> VersionCoordinate | None:
    if not any(key in props for key in ("GROUP_ID", "ARTIFACT_ID", "VERSION")):
        return None
    return VersionCoordinate(props.get("GROUP_ID"), props.get("ARTIFACT_ID"), props.get("VERSION"))


def _read_archive_coordinate(path: str | Path) -> VersionCoordinate:
    import zipfile

    from spec_verifier.core.archive import ArchiveFormatError, SpecArchive

    try:
        with SpecArchive(path) as archive:
            return archive.read_coordinate()
    except (OSError, zipfile.BadZipFile, ArchiveFormatError) as e:
        raise click.ClickException(f"cannot read {path}: {e}") from e


def _check_option_combinations(config: SpecConfig, options: dict) -> None:
    if config.jar_type is JarType.API:
        for name in IMPL_ONLY_OPTIONS:
            if options.get(name) is not None:
                flag = "--" + name.replace("_", "-")
                raise click.UsageError(f"{flag} must not be specified if no standalone implementation")
    if not config.non_final:
        for name in NON_FINAL_ONLY_OPTIONS:
            if options.get(name) is not None:
                flag = "--" + name.replace("_", "-")
                raise click.UsageError(f"{flag} must not be specified for final specification")


def _prompt_for_spec() -> tuple[SpecConfig, VersionCoordinate]:
    """Ask for every value interactively."""
    from spec_verifier.models.metadata import PackageMetadata

    config = SpecConfig()
    config.non_final = click.confirm("Is this a non-final specification?", default=False)
    standalone = click.confirm("Is there a standalone implementation of this specification?", default=False)
    config.jar_type = JarType.STANDALONE if standalone else JarType.API
    config.spec_mode = SpecMode.from_name(
        click.prompt(
            "Enter the spec mode",
            type=click.Choice(["jakarta", "javaee"], case_sensitive=False),
            default="jakarta",
        )
    )
    config.api_package = click.prompt("Enter the main API package (e.g., jakarta.wombat)")
    config.spec_version = click.prompt("Enter the version number of the specification")

    if config.jar_type is JarType.API:
        if config.non_final:
            config.new_spec_version = click.prompt("Enter the version number of the spec under development")
            config.spec_build = click.prompt("Enter the build number of the API jar file")
        else:
            config.spec_impl_version = click.prompt("Enter the version number of the API jar file")
    else:
        config.impl_namespace = click.prompt("Enter the main implementation package (e.g., com.sun.wombat)")
        config.impl_version = click.prompt("Enter the version number of the implementation jar file")
        if config.non_final:
            config.new_spec_version = click.prompt("Enter the version number of the spec under development")
            config.new_impl_version = click.prompt(
                "Enter the version number of the implementation when it is final"
            )
            config.impl_build = click.prompt("Enter the build number of the implementation jar file")

    # The artifact is assumed to be built exactly as declared
    match config.jar_type:
        case JarType.API:
            group_id, artifact_id = config.api_package, config.api_package + API_SUFFIX
            version = (
                PackageMetadata.from_config(config).implementation_version
                if config.non_final
                else config.spec_impl_version
            )
        case JarType.STANDALONE:
            group_id, artifact_id = config.impl_namespace, config.api_package
            version = f"{config.new_impl_version}-b{config.impl_build}" if config.non_final else config.impl_version
    return config, VersionCoordinate(group_id, artifact_id, version)


def _report(results, fmt: str, output: str | None) -> None:
    from spec_verifier.reporters import get_reporter

    reporter = get_reporter(fmt, output)
    for result in results:
        reporter.report(result)
    reporter.finalize()


def _exit_status(ctx: click.Context, results, ignore_errors: bool) -> None:
    if not ignore_errors and any(not r.passed for r in results):
        ctx.exit(1)


@click.group()
@click.version_option(package_name="spec-verifier")
def cli():
    """Spec Verifier — checks spec artifacts against their naming and versioning rules."""
    pass


@cli.command()
@click.argument("jar", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@spec_options
@coordinate_options
@report_options
@click.pass_context
def check(ctx, jar, properties_file, verbose, group_id, artifact_id, artifact_version, fmt, output, ignore_errors, **options):
    """Verify a built JAR: its coordinate, manifest and class packages."""
    import zipfile

    from spec_verifier.core.archive import ArchiveFormatError
    from spec_verifier.core.distribution import verify_archive

    _configure_logging(verbose)
    props = _read_properties(properties_file) if properties_file else {}
    config = build_config(props, options)
    coordinate = _coordinate_from_properties(props)
    if coordinate is None and (group_id or artifact_id or artifact_version):
        coordinate = _read_archive_coordinate(jar)
    coordinate = _override_coordinate(coordinate, group_id, artifact_id, artifact_version)

    try:
        result = verify_archive(jar, config, coordinate)
    except (OSError, zipfile.BadZipFile, ArchiveFormatError) as e:
        raise click.ClickException(f"spec verification failed for {jar}: {e}") from e

    _report([result], fmt, output)
    _exit_status(ctx, [result], ignore_errors)


@cli.command("check-dist")
@click.argument("directory", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--spec",
    "-s",
    "spec_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Property file declaring a spec and the coordinate it applies to (repeatable).",
)
@click.option("--include", "includes", default="*.jar", help="Comma-separated include patterns.")
@click.option("--exclude", "excludes", default=None, help="Comma-separated exclude patterns.")
@report_options
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.pass_context
def check_dist(ctx, directory, spec_files, includes, excludes, fmt, output, ignore_errors, verbose):
    """Verify every spec artifact of a distribution directory."""
    from spec_verifier.core.distribution import DistributionChecker

    _configure_logging(verbose)
    specs: dict[VersionCoordinate, SpecConfig] = {}
    for spec_file in spec_files:
        props = _read_properties(spec_file)
        coordinate = _coordinate_from_properties(props)
        if coordinate is None:
            raise click.UsageError(f"{spec_file} must declare GROUP_ID, ARTIFACT_ID and VERSION")
        specs[coordinate] = build_config(props, {})

    try:
        results = DistributionChecker(specs).check(directory, includes, excludes)
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from e

    _report(results, fmt, output)
    _exit_status(ctx, results, ignore_errors)


@cli.command()
@spec_options
@coordinate_options
@click.option("--api-jar", default=None, type=click.Path(exists=True, dir_okay=False), help="API jar file.")
@click.option(
    "--impl-jar", default=None, type=click.Path(exists=True, dir_okay=False), help="Implementation jar file."
)
@report_options
@click.pass_context
def verify(
    ctx, properties_file, verbose, group_id, artifact_id, artifact_version, api_jar, impl_jar, fmt, output,
    ignore_errors, **options
):
    """Verify a specification declaration against its derived metadata."""
    from spec_verifier.core.engine import RuleEngine
    from spec_verifier.models.diagnostics import VerificationResult

    _configure_logging(verbose)
    given = {**options, "impl_jar": impl_jar}
    nothing_given = (
        properties_file is None
        and api_jar is None
        and all(value is None for value in given.values())
        and not (group_id or artifact_id or artifact_version)
    )

    if nothing_given:
        config, coordinate = _prompt_for_spec()
    else:
        props = _read_properties(properties_file) if properties_file else {}
        config = build_config(props, options)
        _check_option_combinations(config, given)

        jar = api_jar or impl_jar or props.get("IMPL_JAR" if config.jar_type is JarType.STANDALONE else "API_JAR")
        coordinate = _read_archive_coordinate(jar) if jar else _coordinate_from_properties(props)
        coordinate = _override_coordinate(coordinate, group_id, artifact_id, artifact_version)
        if coordinate is None:
            raise click.UsageError("no artifact: give --api-jar/--impl-jar or the coordinate options")

    try:
        diagnostics = RuleEngine(config, coordinate).verify()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    result = VerificationResult(coordinate=coordinate, description=config.describe(), diagnostics=diagnostics)
    _report([result], fmt, output)
    _exit_status(ctx, [result], ignore_errors)


@cli.command()
@spec_options
@coordinate_options
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write to a file.")
def properties(properties_file, verbose, group_id, artifact_id, artifact_version, output, **options):
    """Print the manifest properties derived from a specification declaration."""
    from spec_verifier.models.metadata import PackageMetadata
    from spec_verifier.parsers.properties import format_properties

    _configure_logging(verbose)
    props = _read_properties(properties_file) if properties_file else {}
    config = build_config(props, options)
    coordinate = _override_coordinate(
        _coordinate_from_properties(props), group_id, artifact_id, artifact_version
    )

    missing = config.missing_fields()
    if missing:
        raise click.UsageError("missing configuration ( " + " ".join(missing) + " )")
    try:
        metadata = PackageMetadata.from_config(config, coordinate)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    text = format_properties(metadata.to_properties())
    if output is None:
        click.echo(text, nl=False)
        return
    output.write_text(text, encoding="latin-1")
    logger.info(f"Wrote {len(metadata.to_properties())} properties to {output}")


if __name__ == "__main__":
    cli()
