"""Fast image selection for new compute instances.

When fast images are enabled, the newest published image whose name matches
the OS pattern is used instead of the operator-supplied default image.
Explicit image ids and bare-metal flavors always keep the default.

Example:
    selector = ImageSelector()
    policy = ImageSelectionPolicy(fast_image_enabled=True, os_type="ubuntu.18.04")
    image = selector.select_image(images, False, policy, default_image)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Protocol, TypeVar, Union

from .. import config as placement_config
from ..config import parse_flag
from .naming import ImageNameError, parse_image_version

logger = logging.getLogger(__name__)


class NamedImage(Protocol):
    """Anything exposing an image `name`, e.g. SDK image resources."""

    name: str


ImageT = TypeVar("ImageT", bound=NamedImage)


@dataclass(frozen=True)
class ImageCandidate:
    """Available machine image: `name` plus an opaque reference to the resource."""

    name: str
    ref: Any = None


@dataclass(frozen=True)
class ImageSelectionPolicy:
    """Flags deciding whether pattern-based fast image selection applies."""

    fast_image_enabled: bool = False
    testing_mode: bool = False
    has_explicit_image_id: bool = False
    os_type: str = ""
    flavor_is_bare_metal: bool = False

    @classmethod
    def from_flags(
        cls,
        fast_image: Any,
        testing_mode: Any,
        custom_id: Optional[str] = None,
        os_type: str = "",
        flavor: Union[NamedImage, str, None] = None,
    ) -> "ImageSelectionPolicy":
        """Build a policy from string-encoded workflow flags.

        Args:
            fast_image: Fast image flag ("true" enables)
            testing_mode: Testing mode flag ("true" enables)
            custom_id: Explicit image id requested by the user, if any
            os_type: OS type, e.g. "ubuntu.18.04"
            flavor: Flavor record or flavor name, used for bare-metal detection
        """
        return cls(
            fast_image_enabled=parse_flag(fast_image),
            testing_mode=parse_flag(testing_mode),
            has_explicit_image_id=bool(custom_id),
            os_type=os_type or "",
            flavor_is_bare_metal=flavor is not None and is_bare_metal(flavor),
        )


def is_bare_metal(flavor: Union[NamedImage, str]) -> bool:
    """Bare-metal flavors carry "baremetal" in their name (any case)."""
    name = flavor if isinstance(flavor, str) else getattr(flavor, "name", None)
    return "baremetal" in (name or "").lower()


def build_image_pattern(
    os_type: str, testing_mode: bool = False, prefix: str = "wmlabs"
) -> str:
    """Regex matching fast image names for an OS type.

    Dots are dropped from the OS type ("ubuntu.18.04" -> "ubuntu1804");
    testing mode only accepts snapshot builds.
    """
    os_token = re.escape(os_type.replace(".", ""))
    pattern = f"{re.escape(prefix)}-{os_token}" if prefix else os_token
    if testing_mode:
        pattern += ".*snapshot"
    return pattern


def find_latest_fast_image(
    images: Iterable[ImageT], pattern: str
) -> Optional[ImageT]:
    """Return the matching image with the greatest version key.

    Earlier images win ties. Names that match but cannot be parsed are
    skipped.
    """
    regex = re.compile(pattern, re.IGNORECASE)
    latest: Optional[ImageT] = None
    latest_key = -1

    for image in images:
        name = getattr(image, "name", None)
        if not isinstance(name, str) or not regex.search(name):
            continue
        try:
            key = parse_image_version(name).key
        except ImageNameError as exc:
            logger.debug("Skipping image: %s", exc)
            continue
        if latest is None or key > latest_key:
            latest, latest_key = image, key

    return latest


class ImageSelector:
    """Picks the boot image for one instance-creation attempt."""

    def __init__(self, name_prefix: Optional[str] = None) -> None:
        """Initialize ImageSelector.

        Args:
            name_prefix: Fast image name prefix (uses config if None)
        """
        self.name_prefix = (
            placement_config.image_name_prefix() if name_prefix is None else name_prefix
        )

    def select_image(
        self,
        images: Iterable[ImageT],
        flavor_is_bare_metal: bool,
        policy: ImageSelectionPolicy,
        default_image: ImageT,
    ) -> ImageT:
        """Return the newest matching fast image, or `default_image`.

        Never raises for malformed image names and never returns None.
        """
        if (
            policy.has_explicit_image_id
            or flavor_is_bare_metal
            or policy.flavor_is_bare_metal
            or not policy.fast_image_enabled
        ):
            return default_image

        pattern = build_image_pattern(
            policy.os_type, testing_mode=policy.testing_mode, prefix=self.name_prefix
        )
        logger.debug("Looking up fast image with pattern %s", pattern)

        image = find_latest_fast_image(images, pattern)
        if image is None:
            logger.debug("No fast image matches %s, using default image", pattern)
            return default_image

        logger.info("Using fast image %s", image.name)
        return image


def get_image(
    images: Iterable[ImageT],
    flavor: Union[NamedImage, str],
    fast_image_flag: Any,
    testing_mode_flag: Any,
    default_image: ImageT,
    custom_id: Optional[str],
    os_type: str,
    *,
    name_prefix: Optional[str] = None,
) -> ImageT:
    """Select an image from raw workflow inputs.

    Flags are string-encoded booleans; `custom_id` is the explicit image id
    requested by the user, if any.
    """
    policy = ImageSelectionPolicy.from_flags(
        fast_image_flag, testing_mode_flag, custom_id, os_type, flavor
    )
    return ImageSelector(name_prefix).select_image(
        images, policy.flavor_is_bare_metal, policy, default_image
    )
