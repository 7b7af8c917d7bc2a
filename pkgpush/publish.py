"""Publish pipeline: classify → assemble → confirm → upsert → archive → upload.

This module orchestrates the pkgpush publish process:
1. Read [project] and the dependency declarations from pyproject.toml
2. Classify dependencies into published requirements and excluded ones
3. Assemble the release metadata and resolve the files to ship
4. Show the report and wait for the operator to confirm
5. Create or update the package on the registry
6. Build the release archive
7. Upload the release

The revert path skips steps 2-7 and deletes one published release instead.
Nothing is retried: the first rejection ends the run and is reported with
its status code and body.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .api import RegistryClient
from .archive import build_archive
from .deps import classify, collect_dependencies, requirements_map
from .metadata import assemble
from .models import (
    Auth,
    Declined,
    Failed,
    Metadata,
    Published,
    PublishOutcome,
    Reverted,
    Stage,
)
from .report import render
from .shell import confirm, error, info, report_error, step
from .toml import get_package_config, get_project_name, load_pyproject, read_project_config
from .versions import check_version

UPSERT_OK = frozenset({200, 201})
UPLOAD_OK = frozenset({200, 201})
REVERT_OK = frozenset({204})


def prepare_release(root: Path | None = None) -> tuple[Metadata, list[str]]:
    """Build the release metadata for the project at root.

    Returns:
        Tuple of (metadata, names of excluded dependencies).

    Raises:
        ConfigError: On missing project fields or an overridden dependency.
            Raised before any network call.
    """
    root = root or Path.cwd()
    doc = load_pyproject(root)
    project = read_project_config(doc)
    include, exclude = classify(collect_dependencies(doc))
    metadata = assemble(project, get_package_config(doc), requirements_map(include), root)
    return metadata, exclude


def publish_release(
    metadata: Metadata,
    excluded: Sequence[str],
    client: RegistryClient,
    auth: Auth,
    *,
    root: Path | None = None,
    assume_yes: bool = False,
) -> PublishOutcome:
    """Confirm, then upsert the package and upload the release.

    Args:
        metadata: Assembled release metadata.
        excluded: Names of dependencies left out of the package.
        client: Registry client.
        auth: Credentials attached to every call.
        root: Project root the metadata files are relative to.
        assume_yes: Skip the confirmation prompt.

    Returns:
        Declined if the operator said no, Failed if the registry rejected a
        call, Published otherwise.
    """
    if not confirm(render(metadata, excluded), assume_yes=assume_yes):
        return Declined()

    step(f"Updating package {metadata.name}")
    response = client.upsert_package(metadata.name, metadata, auth)
    if not response.succeeded(UPSERT_OK):
        error(f"Updating package {metadata.name} failed ({response.status_code})")
        report_error(response.status_code, response.body)
        return Failed(
            stage=Stage.PACKAGE_UPSERT,
            status_code=response.status_code,
            body=response.body,
        )

    step(f"Pushing {metadata.name} v{metadata.version}")
    archive = build_archive(metadata, metadata.files, root)
    info(f"  Archive: {len(archive)} bytes, {len(metadata.files)} files")

    response = client.upload_release(metadata.name, archive, auth)
    if not response.succeeded(UPLOAD_OK):
        error(
            f"Pushing {metadata.name} v{metadata.version} failed ({response.status_code})"
        )
        report_error(response.status_code, response.body)
        return Failed(
            stage=Stage.RELEASE_UPLOAD,
            status_code=response.status_code,
            body=response.body,
        )

    info(f"Published {metadata.name} v{metadata.version}")
    return Published(version=metadata.version)


def revert_release(
    name: str, version: str, client: RegistryClient, auth: Auth
) -> PublishOutcome:
    """Delete a published release.

    The registry only allows this shortly after publication; it decides, we
    just report the answer.
    """
    step(f"Reverting {name} v{version}")
    response = client.delete_release(name, version, auth)
    if not response.succeeded(REVERT_OK):
        error(f"Reverting {name} v{version} failed! ({response.status_code})")
        report_error(response.status_code, response.body)
        return Failed(
            stage=Stage.REVERT, status_code=response.status_code, body=response.body
        )

    info(f"Reverted {name} v{version}")
    return Reverted(version=version)


def run_publish(
    client: RegistryClient,
    auth: Auth,
    *,
    root: Path | None = None,
    assume_yes: bool = False,
) -> PublishOutcome:
    """Execute the full publish pipeline for the project at root."""
    root = root or Path.cwd()
    metadata, excluded = prepare_release(root)
    return publish_release(
        metadata, excluded, client, auth, root=root, assume_yes=assume_yes
    )


def run_revert(
    client: RegistryClient,
    auth: Auth,
    version: str,
    *,
    root: Path | None = None,
) -> PublishOutcome:
    """Revert one release of the project at root.

    Only [project].name is read; the project's own version and dependencies
    are irrelevant here.
    """
    doc = load_pyproject(root or Path.cwd())
    name = get_project_name(doc)
    check_version(version, what="revert version")
    return revert_release(name, version, client, auth)
