from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from src.domain.algorithms.segment_time import MissingSegmentPolicy


@dataclass(frozen=True, slots=True)
class SearchSettings:
    """Tuning knobs for itinerary search.

    Env vars:
      - ITINERARY_MISSING_SEGMENT_POLICY: zero | fallback | strict (default zero)
      - ITINERARY_FALLBACK_SEGMENT_S: seconds per missing hop under ``fallback``
    """

    missing_segment_policy: MissingSegmentPolicy = MissingSegmentPolicy.ZERO
    fallback_segment_s: int = 0

    def __post_init__(self) -> None:
        if self.fallback_segment_s < 0:
            raise ValueError(
                f"Fallback segment time must not be negative: {self.fallback_segment_s}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SearchSettings:
        env = os.environ if environ is None else environ

        raw_policy = (env.get("ITINERARY_MISSING_SEGMENT_POLICY") or "").strip().lower()
        try:
            policy = (
                MissingSegmentPolicy(raw_policy)
                if raw_policy
                else MissingSegmentPolicy.ZERO
            )
        except ValueError:
            raise ValueError(
                f"Unknown ITINERARY_MISSING_SEGMENT_POLICY: {raw_policy!r}"
            ) from None

        fallback_s = int((env.get("ITINERARY_FALLBACK_SEGMENT_S") or "0").strip())

        return cls(
            missing_segment_policy=policy,
            fallback_segment_s=fallback_s,
        )
