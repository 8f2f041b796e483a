"""Work-order helpers used alongside placement decisions."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

logger = logging.getLogger(__name__)


def is_propagate_update(rfc_ci: Mapping[str, Any]) -> bool:
    """Check whether a change record is a propagated update.

    A propagated update has no base attributes of its own and carries a
    JSON hint with ``"propagation": "true"``.

    Args:
        rfc_ci: Change record of the work order (``rfcCi``)

    Returns:
        True only for propagated updates
    """
    if rfc_ci.get("ciBaseAttributes"):
        return False

    hint = rfc_ci.get("hint")
    if not hint:
        return False

    try:
        decoded = json.loads(hint) if isinstance(hint, str) else hint
    except json.JSONDecodeError as exc:
        logger.warning("Invalid JSON in rfc hint %r: %s", hint, exc)
        return False

    logger.debug("rfc hint: %s", decoded)
    if not isinstance(decoded, dict):
        return False
    return decoded.get("propagation") == "true"
