from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from relpub.cli.commands._helpers import exit_on_error, exit_with_code
from relpub.cli.context import CLIContext, build_context
from relpub.core.errors import ErrorCode
from relpub.output.console import Style
from relpub.services.release.model import ReleaseRequest
from relpub.services.release.service import ReleasePaths, run_release
from relpub.services.release.storage import DryRunUploader, S3CmdUploader, Uploader


def _make_uploader(ctx: CLIContext, *, dry_run: bool) -> Uploader:
    if dry_run:
        return DryRunUploader(console=ctx.console, command=ctx.config.upload.command)
    return S3CmdUploader(
        cwd=ctx.root,
        command=ctx.config.upload.command,
        timeout=float(ctx.config.upload.timeout_seconds),
    )


def _missing_options(ctx: typer.Context, **options: str | None) -> NoReturn:
    missing = [name for name, value in options.items() if value is None]
    typer.echo(f"Missing required options: {', '.join(missing)}")
    typer.echo(ctx.get_help())
    exit_with_code(int(ErrorCode.ERROR))


def release(
    ctx: typer.Context,
    project: str | None = typer.Option(None, "--project", "-p", help="The project to release"),
    version: str | None = typer.Option(
        None, "--version", "-v", help="The version of the installer to release"
    ),
    bucket: str | None = typer.Option(
        None,
        "--bucket",
        "-b",
        metavar="S3_BUCKET_NAME",
        help="The name of the s3 bucket to release to",
    ),
    ignore_missing_packages: bool = typer.Option(
        False,
        "--ignore-missing-packages",
        help="Continue the release if any build packages are missing",
    ),
    legacy_path: bool | None = typer.Option(
        None,
        "--legacy-path/--no-legacy-path",
        help="Also publish to platform-support/<version>.json "
        "(default: on for projects listed under legacy.projects in release.toml)",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print uploads without executing"),
    manifests_dir: Path | None = typer.Option(
        None, "--manifests-dir", help="Directory holding <project>.json manifests"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Where to write platform-support.json"
    ),
    config: Path | None = typer.Option(None, "--config", help="Path to release.toml"),
) -> None:
    """Upload built packages and publish the platform support manifest."""
    if project is None or version is None or bucket is None:
        _missing_options(ctx, project=project, version=version, bucket=bucket)

    cli = build_context(config)
    request = ReleaseRequest(
        project=project,
        version=version,
        bucket=bucket,
        ignore_missing_packages=ignore_missing_packages,
        legacy_path=(
            legacy_path if legacy_path is not None else cli.config.legacy.enabled_for(project)
        ),
    )
    paths = ReleasePaths.from_config(
        cli.root, cli.config, manifests_dir=manifests_dir, output=output
    )

    if dry_run:
        cli.console.print("dry run: nothing will be uploaded", Style.WARNING)

    summary = exit_on_error(
        run_release(
            request=request,
            paths=paths,
            uploader=_make_uploader(cli, dry_run=dry_run),
            console=cli.console,
        ),
        cli.console,
    )

    cli.console.success(
        f"{project} {version}: {len(summary.uploaded)} package(s) uploaded, "
        f"{len(summary.skipped)} skipped, manifest at {summary.manifest_path}"
    )
