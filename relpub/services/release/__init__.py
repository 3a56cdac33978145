"""Publishing of installer packages and the platform-support manifest.

Steps, in order:
- manifests: load <project>.json and <project>-platform-names.json
- packages: discover local pkg/ files and match them to builds
- aggregate: upload each matched package, fold its platforms into the manifest
- publish: write platform-support.json and upload it with the names file
"""

from __future__ import annotations
