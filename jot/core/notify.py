from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NotifyTimeouts:
    quick: float = 2.0
    normal: float = 3.0
    long: float = 6.0

    @classmethod
    def from_normal(cls, seconds: float) -> NotifyTimeouts:
        """Scale the preset around a configured default timeout."""
        normal = max(0.5, float(seconds))
        return cls(quick=normal * 2 / 3, normal=normal, long=normal * 2)

    def for_severity(self, severity: str) -> float:
        if severity == "information":
            return self.quick
        if severity == "warning":
            return self.normal
        return self.long
