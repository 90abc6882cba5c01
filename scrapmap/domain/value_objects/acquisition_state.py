"""AcquisitionState — lifecycle of one pickup-location editing session."""

from __future__ import annotations

from dataclasses import dataclass

from scrapmap.domain.value_objects.enums import (
    AcquisitionPhase,
    AcquisitionSource,
    FailureReason,
)
from scrapmap.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class AcquisitionState:
    """Tagged union over Idle / Acquiring / Resolved / Failed.

    Use the classmethod constructors; they guarantee that only the fields
    belonging to a phase are populated.
    """

    phase: AcquisitionPhase
    source: AcquisitionSource | None = None
    point: GeoPoint | None = None
    address: str | None = None
    reason: FailureReason | None = None
    previous: AcquisitionState | None = None

    @classmethod
    def idle(cls) -> AcquisitionState:
        return cls(phase=AcquisitionPhase.IDLE)

    @classmethod
    def acquiring(
        cls, source: AcquisitionSource, previous: AcquisitionState | None = None
    ) -> AcquisitionState:
        return cls(phase=AcquisitionPhase.ACQUIRING, source=source, previous=previous)

    @classmethod
    def resolved(
        cls, point: GeoPoint, source: AcquisitionSource, address: str | None = None
    ) -> AcquisitionState:
        return cls(
            phase=AcquisitionPhase.RESOLVED, source=source, point=point, address=address
        )

    @classmethod
    def failed(
        cls, reason: FailureReason, previous: AcquisitionState | None = None
    ) -> AcquisitionState:
        return cls(phase=AcquisitionPhase.FAILED, reason=reason, previous=previous)

    @property
    def is_idle(self) -> bool:
        return self.phase == AcquisitionPhase.IDLE

    @property
    def is_acquiring(self) -> bool:
        return self.phase == AcquisitionPhase.ACQUIRING

    @property
    def is_resolved(self) -> bool:
        return self.phase == AcquisitionPhase.RESOLVED

    @property
    def is_failed(self) -> bool:
        return self.phase == AcquisitionPhase.FAILED

    @property
    def last_resolved(self) -> AcquisitionState | None:
        """The most recent Resolved state reachable from this one."""
        if self.is_resolved:
            return self
        if self.previous is not None:
            return self.previous.last_resolved
        return None

    @property
    def current_point(self) -> GeoPoint | None:
        resolved = self.last_resolved
        return resolved.point if resolved else None

    @property
    def current_address(self) -> str | None:
        resolved = self.last_resolved
        return resolved.address if resolved else None
