"""CLI entry point for pkgpush."""

from __future__ import annotations

from pathlib import Path

import click
import requests

from pkgpush.api import RegistryClient
from pkgpush.config import read_user_config, resolve_api_url, resolve_auth
from pkgpush.models import Failed
from pkgpush.publish import run_publish, run_revert


@click.group()
@click.version_option(package_name="pkgpush")
def cli() -> None:
    """Publish Python packages to a package registry."""


@cli.command()
@click.option("-u", "--user", default=None, help="Registry username (overrides config).")
@click.option(
    "-p",
    "--pass",
    "password",
    envvar="PKGPUSH_PASSWORD",
    default=None,
    help="Registry password (required with --user).",
)
@click.option(
    "--revert",
    metavar="VERSION",
    default=None,
    help="Revert the given version instead of publishing.",
)
@click.option("-y", "--yes", is_flag=True, help="Publish without asking to confirm.")
@click.option(
    "--api-url",
    envvar="PKGPUSH_API_URL",
    default=None,
    help="Registry API base URL (overrides config).",
)
@click.option(
    "--project-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Directory containing pyproject.toml.",
)
def publish(
    user: str | None,
    password: str | None,
    revert: str | None,
    yes: bool,
    api_url: str | None,
    project_dir: Path,
) -> None:
    """Publish a new version of the package, or revert one.

    A new package is created on first publish. A published version can be
    reverted with --revert shortly after publication; the registry decides
    how long that window is.
    """
    user_config = read_user_config()
    auth = resolve_auth(user, password, user_config)
    url = resolve_api_url(api_url, user_config)
    client = RegistryClient(url, timeout=user_config.timeout)

    try:
        if revert:
            outcome = run_revert(client, auth, revert, root=project_dir)
        else:
            outcome = run_publish(client, auth, root=project_dir, assume_yes=yes)
    except requests.RequestException as exc:
        raise click.ClickException(f"Request to {url} failed: {exc}") from exc
    finally:
        client.close()

    if isinstance(outcome, Failed):
        raise SystemExit(1)
