"""Animation scheduling and cancellation core."""

from __future__ import annotations

from scoreline.core.clock import AsyncioClock, Clock
from scoreline.core.fade import FadeAnimator
from scoreline.core.models import (
    Durations,
    RotationConfig,
    RotationState,
    ScoreVisibility,
    Snapshot,
)
from scoreline.core.poller import DataPoller
from scoreline.core.presenter import Presenter
from scoreline.core.rotation import RotationLoop
from scoreline.core.scope import CancellationScope, Outcome, ScopeFactory
from scoreline.core.surface import RenderSurface

__all__ = [
    "AsyncioClock",
    "CancellationScope",
    "Clock",
    "DataPoller",
    "Durations",
    "FadeAnimator",
    "Outcome",
    "Presenter",
    "RenderSurface",
    "RotationConfig",
    "RotationLoop",
    "RotationState",
    "ScopeFactory",
    "ScoreVisibility",
    "Snapshot",
]
