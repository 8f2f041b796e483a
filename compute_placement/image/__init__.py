"""Fast image selection by published image name."""

from .naming import ImageNameError, ImageVersion, parse_image_version
from .selector import (
    ImageCandidate,
    ImageSelectionPolicy,
    ImageSelector,
    build_image_pattern,
    find_latest_fast_image,
    get_image,
    is_bare_metal,
)

__all__ = [
    "ImageCandidate",
    "ImageNameError",
    "ImageSelectionPolicy",
    "ImageSelector",
    "ImageVersion",
    "build_image_pattern",
    "find_latest_fast_image",
    "get_image",
    "is_bare_metal",
    "parse_image_version",
]
