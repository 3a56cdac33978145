"""Exit codes for the release CLI.

Every failure of a release run is fatal and reported with the same status.
CI jobs only distinguish zero from non-zero, so the enum stays small.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Success
    - 1: Any failure (bad options, missing manifests or packages, upload failed)
    """

    OK = 0
    ERROR = 1

    def __str__(self) -> str:
        return self.name.lower()
