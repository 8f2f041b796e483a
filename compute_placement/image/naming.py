"""Version keys parsed from published fast image names.

Names are dash-delimited, e.g. ``wmlabs-ubuntu1804-prod-build-v5-20220101``.
Field 4 carries the major version (``v`` markers dropped) and field 5 the
minor; their concatenation read as an integer orders images by recency.
"""

from __future__ import annotations

from dataclasses import dataclass

MAJOR_FIELD = 4
MINOR_FIELD = 5


class ImageNameError(ValueError):
    """Image name does not follow the fast image naming convention."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"cannot parse image name {name!r}: {reason}")
        self.name = name
        self.reason = reason


@dataclass(frozen=True)
class ImageVersion:
    major: str
    minor: str

    @property
    def key(self) -> int:
        return int(self.major + self.minor)


def parse_image_version(name: str) -> ImageVersion:
    """Extract the version fields of a fast image name.

    Raises:
        ImageNameError: fewer than six fields, or non-digit version content
    """
    parts = name.split("-")
    if len(parts) <= MINOR_FIELD:
        raise ImageNameError(name, f"expected at least {MINOR_FIELD + 1} fields")

    major = parts[MAJOR_FIELD].replace("v", "")
    minor = parts[MINOR_FIELD]
    digits = major + minor
    if not (digits.isascii() and digits.isdigit()):
        raise ImageNameError(name, f"non-numeric version {digits!r}")
    return ImageVersion(major=major, minor=minor)
