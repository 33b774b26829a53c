from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from ..models.pending_orphan import PendingOrphan

logger = logging.getLogger(__name__)

_ORPHAN_FIELDS = frozenset(f.name for f in fields(PendingOrphan))


def to_orphan(field_map: Mapping[str, Any]) -> PendingOrphan:
    """Build a PendingOrphan from one extracted FieldMap.

    Known keys become attributes; absent ones keep their None default.
    Business-rule validation is left to the caller.
    """
    known = {k: v for k, v in field_map.items() if k in _ORPHAN_FIELDS}
    unknown = sorted(set(field_map) - _ORPHAN_FIELDS)
    if unknown:
        logger.debug("ignoring fields without a PendingOrphan attribute: %s", unknown)
    return PendingOrphan(**known)
