from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_LATE_GRACE_MINUTES


@dataclass(frozen=True)
class ClassificationRules:
    """Tunables for the classifier, passed in explicitly by the caller.

    late_grace_minutes: a clock-in is only "late" once lateness exceeds this.
    """

    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
