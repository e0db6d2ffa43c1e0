"""
Observation data model.

One surveyed data point as returned by the survey API:

    {
        "_id": {"$oid": "5a1f..."},
        "location": {"_wgs84": [-0.12, 51.50]},      # [lng, lat]
        "timestamp": {"_epoch": 1508853600000},      # ms since epoch
        "status": "approved",
        "attributes": {"thames21Ph": 7.2}
    }

Records are immutable; a refetch of the same id replaces the whole record.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

APPROVED = "approved"


@dataclass(frozen=True)
class Observation:
    """One survey observation."""
    obs_id: str
    lat: float
    lng: float
    timestamp_ms: float        # capture time (ms since epoch)
    status: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def approved(self) -> bool:
        return self.status == APPROVED

    def raw(self, key: str) -> Any:
        """Raw measured value for *key*, or None when absent."""
        return self.attributes.get(key)

    def age_ms(self, now_ms: Optional[float] = None) -> float:
        if now_ms is None:
            now_ms = time.time() * 1000.0
        return now_ms - self.timestamp_ms

    @classmethod
    def from_record(cls, record: Any) -> Optional["Observation"]:
        """Parse one API record, returning None if it is unusable."""
        try:
            oid = record["_id"]
            if isinstance(oid, dict):
                oid = oid["$oid"]
            lng, lat = record["location"]["_wgs84"][:2]
            epoch = record["timestamp"]["_epoch"]
            return cls(
                obs_id=str(oid),
                lat=float(lat),
                lng=float(lng),
                timestamp_ms=float(epoch),
                status=record.get("status", "") or "",
                attributes=dict(record.get("attributes") or {}),
            )
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
            log.debug("Failed to parse observation record: %s", exc)
            return None
