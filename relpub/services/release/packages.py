"""Discovery of locally built packages and matching them to builds."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from relpub.core.config import DEFAULT_PACKAGE_GLOB
from relpub.services.release.model import LocalPackage


def discover_packages(root: Path, pattern: str = DEFAULT_PACKAGE_GLOB) -> tuple[LocalPackage, ...]:
    """Find package files under ``root`` matching ``pattern``.

    Directories and hidden entries (any path component starting with a dot)
    are ignored. The result is sorted by relative path so that matching does
    not depend on filesystem enumeration order.
    """
    found: list[LocalPackage] = []
    for p in root.glob(pattern):
        rel = p.relative_to(root)
        if any(part.startswith(".") for part in rel.parts):
            continue
        if not p.is_file():
            continue
        found.append(LocalPackage(path=p, relpath=rel.as_posix()))
    return tuple(sorted(found, key=lambda pkg: pkg.relpath))


def find_package(build: str, packages: Sequence[LocalPackage]) -> LocalPackage | None:
    """Return the first package whose relative path contains ``build``.

    Matching is a plain substring test. A build name that is a substring of
    another build's package name (``chef`` vs ``chef-server``) can pick the
    wrong file; the sorted order only makes that choice repeatable.
    """
    for pkg in packages:
        if build in pkg.relpath:
            return pkg
    return None
