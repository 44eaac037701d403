"""Pytest fixtures for scoreline tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
from hypothesis import Phase, Verbosity, settings

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="scoreline-tests-"))
os.environ["SCORELINE_DATA_DIR"] = str(_TEST_BASE_DIR / "data")
os.environ["SCORELINE_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")

from scoreline.core.fade import FadeAnimator  # noqa: E402
from scoreline.core.models import Durations, Snapshot  # noqa: E402
from scoreline.core.presenter import Presenter  # noqa: E402
from tests.helpers.clock import VirtualClock  # noqa: E402
from tests.helpers.surface import RecordingSurface  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


# Rotating name fields start transparent, like the overlay stylesheet.
HIDDEN_AT_START = {"player1-name": 0.0, "player2-name": 0.0}


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock()


@pytest.fixture
def surface(clock: VirtualClock) -> RecordingSurface:
    return RecordingSurface(clock, opacities=dict(HIDDEN_AT_START))


@pytest.fixture
def animator(surface: RecordingSurface, clock: VirtualClock) -> FadeAnimator:
    return FadeAnimator(surface, clock)


@pytest.fixture
def durations() -> Durations:
    return Durations(main_language=1000, sub_language=2000, fade=200)


@pytest.fixture
async def presenter(
    surface: RecordingSurface,
    clock: VirtualClock,
    durations: Durations,
) -> AsyncGenerator[Presenter, None]:
    presenter = Presenter(surface, durations, clock=clock)
    yield presenter
    await presenter.shutdown()


@pytest.fixture
def snapshot_factory() -> Callable[..., Snapshot]:
    """Build snapshots from StreamControl keys with sensible defaults."""

    def _factory(**overrides: Any) -> Snapshot:
        data: dict[str, Any] = {
            "timestamp": "1700000000",
            "matchEvent": "Grand Finals",
            "matchPlayer1NameMain": "ウメハラ",
            "matchPlayer1NameSub": "Daigo",
            "matchPlayer1Score": "2",
            "matchPlayer2NameMain": "ときど",
            "matchPlayer2NameSub": "Tokido",
            "matchPlayer2Score": "1",
        }
        data.update(overrides)
        return Snapshot.model_validate(data)

    return _factory
