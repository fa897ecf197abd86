"""Shared fixtures: spec artifacts built on the fly."""

import zipfile
from pathlib import Path

import pytest

from spec_verifier.models.config import JarType, SpecConfig, SpecMode


def write_jar(
    path: Path,
    group_id: str | None = "jakarta.wombat",
    artifact_id: str | None = "jakarta.wombat-api",
    version: str | None = "1.1.2",
    manifest: dict[str, str] | None = None,
    classes: list[str] | None = None,
    with_pom: bool = True,
    with_manifest: bool = True,
) -> Path:
    """Write a jar with a pom.properties, a manifest and empty class entries."""
    with zipfile.ZipFile(path, "w") as zf:
        if with_manifest:
            lines = ["Manifest-Version: 1.0"]
            lines += [f"{key}: {value}" for key, value in (manifest or {}).items()]
            zf.writestr("META-INF/MANIFEST.MF", "\r\n".join(lines) + "\r\n\r\n")
        if with_pom:
            props = [
                f"{key}={value}"
                for key, value in (("groupId", group_id), ("artifactId", artifact_id), ("version", version))
                if value is not None
            ]
            zf.writestr(
                f"META-INF/maven/{group_id}/{artifact_id}/pom.properties",
                "#Generated by Maven\n" + "\n".join(props) + "\n",
            )
        zf.writestr("META-INF/", "")
        for name in classes or []:
            zf.writestr(name.replace(".", "/") + ".class", b"\xca\xfe\xba\xbe")
    return path


FINAL_API_MANIFEST = {
    "Bundle-SymbolicName": "jakarta.wombat-api",
    "Bundle-Version": "1.1.2",
    "Extension-Name": "jakarta.wombat",
    "Specification-Version": "1.1",
    "Implementation-Version": "1.1.2",
}


@pytest.fixture
def final_api_config():
    return SpecConfig(
        spec_mode=SpecMode.DUAL,
        jar_type=JarType.API,
        api_package="jakarta.wombat",
        spec_version="1.1",
        spec_impl_version="1.1.2",
    )


@pytest.fixture
def final_api_jar(tmp_path):
    return write_jar(
        tmp_path / "jakarta.wombat-api.jar",
        manifest=FINAL_API_MANIFEST,
        classes=["jakarta.wombat.Wombat", "jakarta.wombat.spi.WombatProvider"],
    )


@pytest.fixture
def make_jar(tmp_path):
    """Build a jar under tmp_path: make_jar("name.jar", manifest=..., classes=...)."""

    def _make(name: str, **kwargs) -> Path:
        return write_jar(tmp_path / name, **kwargs)

    return _make


@pytest.fixture
def final_api_manifest():
    return dict(FINAL_API_MANIFEST)
