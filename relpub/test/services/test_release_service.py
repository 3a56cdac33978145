"""End-to-end tests for relpub.services.release.service."""

from __future__ import annotations

import json
from pathlib import Path

from relpub.core.config import Config, PathsConfig
from relpub.core.result import Err, Ok, Result
from relpub.output.console import MockConsole
from relpub.services.release.errors import ReleaseError
from relpub.services.release.model import ReleaseRequest
from relpub.services.release.service import ReleasePaths, run_release
from relpub.services.release.storage import DryRunUploader


def _workspace(tmp_path: Path, builds: dict[str, list[list[str]]], packages: list[str]) -> Path:
    manifests = tmp_path / "jenkins"
    manifests.mkdir()
    (manifests / "foo.json").write_text(json.dumps(builds), encoding="utf-8")
    (manifests / "foo-platform-names.json").write_text('{"ubuntu": "Ubuntu"}', encoding="utf-8")
    for rel in packages:
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"pkg")
    return tmp_path


def _request(**overrides: object) -> ReleaseRequest:
    values: dict[str, object] = {"project": "foo", "version": "1.0", "bucket": "acme"}
    values.update(overrides)
    return ReleaseRequest(**values)  # type: ignore[arg-type]


class UnavailableUploader(DryRunUploader):
    def ensure_available(self) -> Result[None, ReleaseError]:
        return Err(ReleaseError(kind="uploader_missing", message="s3cmd: missing"))


class TestReleasePaths:
    def test_defaults_resolve_against_root(self, tmp_path: Path) -> None:
        paths = ReleasePaths.from_config(tmp_path, Config())

        assert paths.manifests_dir == tmp_path / "jenkins"
        assert paths.output == tmp_path / "platform-support.json"
        assert paths.package_glob == "**/pkg/*"

    def test_overrides(self, tmp_path: Path) -> None:
        config = Config(paths=PathsConfig(manifests="cfg"))

        paths = ReleasePaths.from_config(
            tmp_path, config, manifests_dir=Path("/abs/manifests"), output=Path("out/ps.json")
        )

        assert paths.manifests_dir == Path("/abs/manifests")
        assert paths.output == tmp_path / "out" / "ps.json"


class TestRunRelease:
    def test_example_release(self, tmp_path: Path) -> None:
        root = _workspace(tmp_path, {"foo": [["ubuntu", "12.04", "x86_64"]]}, ["pkg/foo-1.0.deb"])
        console = MockConsole()
        uploader = DryRunUploader(console=console)

        result = run_release(
            request=_request(),
            paths=ReleasePaths.from_config(root, Config()),
            uploader=uploader,
            console=console,
        )

        assert isinstance(result, Ok)
        written = json.loads((root / "platform-support.json").read_text(encoding="utf-8"))
        assert written == {
            "ubuntu": {"12.04": {"x86_64": {"1.0": "/ubuntu/12.04/x86_64/foo-1.0.deb"}}}
        }
        assert [r.destination for r in uploader.requests] == [
            "s3://acme/ubuntu/12.04/x86_64/foo-1.0.deb",
            "s3://acme/foo-platform-support/1.0.json",
            "s3://acme/foo-platform-support/foo-platform-names.json",
        ]
        assert [u.build for u in result.value.uploaded] == ["foo"]
        assert result.value.manifest_path == root / "platform-support.json"

    def test_missing_package_writes_nothing(self, tmp_path: Path) -> None:
        root = _workspace(tmp_path, {"foo": [["ubuntu", "12.04", "x86_64"]]}, ["pkg/bar-1.0.deb"])
        console = MockConsole()
        uploader = DryRunUploader(console=console)

        result = run_release(
            request=_request(),
            paths=ReleasePaths.from_config(root, Config()),
            uploader=uploader,
            console=console,
        )

        assert isinstance(result, Err)
        assert result.error.kind == "package_missing"
        assert not (root / "platform-support.json").exists()
        assert uploader.requests == []

    def test_ignore_missing_still_publishes(self, tmp_path: Path) -> None:
        root = _workspace(tmp_path, {"foo": [["ubuntu", "12.04", "x86_64"]]}, [])
        console = MockConsole()
        uploader = DryRunUploader(console=console)

        result = run_release(
            request=_request(ignore_missing_packages=True),
            paths=ReleasePaths.from_config(root, Config()),
            uploader=uploader,
            console=console,
        )

        assert isinstance(result, Ok)
        assert result.value.skipped == ("foo",)
        assert json.loads((root / "platform-support.json").read_text(encoding="utf-8")) == {}
        assert len(uploader.requests) == 2

    def test_legacy_path(self, tmp_path: Path) -> None:
        root = _workspace(tmp_path, {"foo": [["ubuntu", "12.04", "x86_64"]]}, ["pkg/foo-1.0.deb"])
        console = MockConsole()

        result = run_release(
            request=_request(legacy_path=True),
            paths=ReleasePaths.from_config(root, Config()),
            uploader=DryRunUploader(console=console),
            console=console,
        )

        assert isinstance(result, Ok)
        assert "s3://acme/platform-support/1.0.json" in result.value.published

    def test_missing_manifest(self, tmp_path: Path) -> None:
        console = MockConsole()

        result = run_release(
            request=_request(),
            paths=ReleasePaths.from_config(tmp_path, Config()),
            uploader=DryRunUploader(console=console),
            console=console,
        )

        assert isinstance(result, Err)
        assert result.error.kind == "manifest_missing"

    def test_uploader_checked_before_any_upload(self, tmp_path: Path) -> None:
        root = _workspace(tmp_path, {"foo": [["ubuntu", "12.04", "x86_64"]]}, ["pkg/foo-1.0.deb"])
        console = MockConsole()
        uploader = UnavailableUploader(console=console)

        result = run_release(
            request=_request(),
            paths=ReleasePaths.from_config(root, Config()),
            uploader=uploader,
            console=console,
        )

        assert isinstance(result, Err)
        assert result.error.kind == "uploader_missing"
        assert uploader.requests == []

    def test_rejects_blank_and_path_like_inputs(self, tmp_path: Path) -> None:
        console = MockConsole()
        paths = ReleasePaths.from_config(tmp_path, Config())

        for request in (_request(bucket=" "), _request(project="../foo"), _request(version="1 0")):
            result = run_release(
                request=request,
                paths=paths,
                uploader=DryRunUploader(console=console),
                console=console,
            )
            assert isinstance(result, Err)
            assert result.error.kind == "invalid_input"

    def test_rejects_absolute_package_pattern(self, tmp_path: Path) -> None:
        console = MockConsole()
        config = Config(paths=PathsConfig(packages="/srv/pkg/*"))

        result = run_release(
            request=_request(),
            paths=ReleasePaths.from_config(tmp_path, config),
            uploader=DryRunUploader(console=console),
            console=console,
        )

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"
