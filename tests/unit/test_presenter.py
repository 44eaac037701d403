"""Unit tests for the Presenter's generation handling and layout toggle."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import pytest

from scoreline.core.models import Durations, ScoreVisibility
from scoreline.core.presenter import Presenter
from tests.helpers.surface import RecordingSurface

if TYPE_CHECKING:
    from collections.abc import Callable

    from scoreline.core.models import Snapshot
    from tests.helpers.clock import VirtualClock

pytestmark = pytest.mark.unit


class ExplodingSurface(RecordingSurface):
    """Raises whenever the event header is touched."""

    def set_opacity(self, element_id: str, opacity: float) -> None:
        if element_id == "event":
            raise RuntimeError("event widget gone")
        super().set_opacity(element_id, opacity)


class TestUpdateGenerations:
    async def test_update_cancels_previous_scope_first(
        self, presenter: Presenter, clock: VirtualClock, snapshot_factory: Callable[..., Snapshot]
    ):
        await presenter.update(snapshot_factory())
        first = presenter.scope
        await clock.advance(50)

        await presenter.update(snapshot_factory(matchEvent="Top 8"))

        assert first is not None and not first.is_active()
        assert presenter.scope is not None and presenter.scope.is_active()
        assert presenter.scope.generation == first.generation + 1

    async def test_one_active_rotation_per_field(
        self, presenter: Presenter, clock: VirtualClock, snapshot_factory: Callable[..., Snapshot]
    ):
        await presenter.update(snapshot_factory())
        old_loops = dict(presenter.rotations)
        await clock.advance(500)

        await presenter.update(snapshot_factory(matchPlayer1NameMain="Justin"))
        await clock.settle()

        assert set(presenter.rotations) == {"player1-name", "player2-name"}
        for field, loop in presenter.rotations.items():
            assert loop.scope is presenter.scope
            assert not old_loops[field].scope.is_active()

    async def test_static_fields_and_rotations_are_applied(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        await presenter.update(snapshot_factory())
        await clock.advance(200)

        assert surface.texts["event"] == "Grand Finals"
        assert surface.texts["player1-score"] == "2"
        assert surface.texts["player2-score"] == "1"
        assert surface.texts["player1-name"] == "ウメハラ"
        assert surface.texts["player2-name"] == "ときど"

        await clock.advance(1100)
        assert surface.texts["player1-name"] == "Daigo"


class TestIdempotence:
    async def test_identical_update_issues_no_opacity_transitions(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        await presenter.update(snapshot_factory())
        await clock.advance(500)
        before = len(surface.of("opacity"))
        texts_before = len(surface.of("text"))

        await presenter.update(snapshot_factory(timestamp="1700000001"))
        await clock.advance(150)

        assert len(surface.of("opacity")) == before
        assert len(surface.of("text")) == texts_before

    async def test_identical_update_keeps_rotation_phase(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        await presenter.update(snapshot_factory())
        await clock.advance(1500)
        assert surface.texts["player1-name"] == "Daigo"

        await presenter.update(snapshot_factory(timestamp="1700000001"))
        await clock.advance(100)

        assert surface.texts["player1-name"] == "Daigo"


class TestCancellationSafety:
    async def test_no_stale_text_after_cutover(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        await presenter.update(snapshot_factory(matchPlayer1NameMain="A", matchPlayer1NameSub="B"))
        # Mid fade-out from A towards B.
        await clock.advance_to(1150)
        cutover = clock.now()

        await presenter.update(
            snapshot_factory(
                timestamp="1700000001", matchPlayer1NameMain="C", matchPlayer1NameSub="D"
            )
        )
        await clock.advance(10_000)

        after = [text for time, text in surface.commits("player1-name") if time >= cutover]
        assert after
        assert set(after) <= {"C", "D"}
        assert after[0] == "C"

    async def test_static_field_cut_during_fade_in_recovers_on_same_text(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        await presenter.update(snapshot_factory(matchEvent="Top 8"))
        # Fade-out took 100 ms; the fade-in is one step in.
        await clock.advance(130)
        assert 0.0 < surface.opacities["event"] < 1.0

        await presenter.update(snapshot_factory(timestamp="3", matchEvent="Top 8"))
        await clock.advance(500)

        assert surface.texts["event"] == "Top 8"
        assert surface.opacities["event"] == 1.0

    async def test_static_field_cut_at_text_commit_fades_new_text_in(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        await presenter.update(snapshot_factory(matchEvent="Top 8"))
        await clock.advance(100)
        assert surface.texts["event"] == "Top 8"
        assert surface.opacities["event"] == 0.0

        await presenter.update(snapshot_factory(timestamp="3", matchEvent="Grand Finals"))
        await clock.advance(500)

        assert surface.texts["event"] == "Grand Finals"
        assert surface.opacities["event"] == 1.0
        reveal = [event.value for event in surface.of("opacity", "event") if event.time > 100]
        assert reveal == sorted(reveal)


class TestDurationOverrides:
    async def test_valid_override_applies_and_persists(
        self, presenter: Presenter, snapshot_factory: Callable[..., Snapshot]
    ):
        await presenter.update(snapshot_factory(optionsDurationFade="400"))
        await presenter.update(snapshot_factory(timestamp="2"))

        assert presenter.durations.fade == 400
        assert presenter.rotations["player1-name"].config.fade_duration == 400

    async def test_malformed_override_is_ignored(
        self, presenter: Presenter, snapshot_factory: Callable[..., Snapshot]
    ):
        await presenter.update(
            snapshot_factory(
                optionsDurationMainLanguage="fast",
                optionsDurationSubLanguage="",
                optionsDurationFade="-5",
            )
        )

        assert presenter.durations == Durations(main_language=1000, sub_language=2000, fade=200)

    async def test_zero_overrides_are_ignored(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        await presenter.update(
            snapshot_factory(
                optionsDurationMainLanguage="0",
                optionsDurationSubLanguage="0",
                optionsDurationFade="0",
            )
        )
        await asyncio.sleep(0)

        assert presenter.durations == Durations(main_language=1000, sub_language=2000, fade=200)
        await clock.advance(1300)
        assert surface.texts["player1-name"] == "Daigo"

    def test_presenter_owns_a_copy_of_its_durations(
        self, surface: RecordingSurface, clock: VirtualClock, durations: Durations
    ):
        presenter = Presenter(surface, durations, clock=clock)
        presenter.durations.fade = 999

        assert durations.fade == 200


class TestScoreVisibilityToggle:
    async def test_toggle_fires_once_per_change(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        first = asyncio.create_task(presenter.update(snapshot_factory(optionsModeScoreVisibility="0")))
        await clock.advance(300)
        await first
        second = asyncio.create_task(
            presenter.update(snapshot_factory(timestamp="2", optionsModeScoreVisibility="0"))
        )
        await clock.advance(300)
        await second

        assert presenter.layout_toggles == 1
        assert len(surface.of("class")) == 2
        assert surface.classes["player1-name"] == {"name-text-wide"}
        assert surface.displayed["#player1-score-outer"] is False
        assert surface.displayed[".player-background-wide"] is True

    async def test_initial_visible_mode_is_a_no_op(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        snapshot_factory: Callable[..., Snapshot],
    ):
        await presenter.update(snapshot_factory(optionsModeScoreVisibility="1"))
        await presenter.update(snapshot_factory(timestamp="2"))

        assert presenter.layout_toggles == 0
        assert presenter.score_visibility is ScoreVisibility.VISIBLE
        assert surface.of("class") == []

    async def test_layers_fade_out_swap_and_fade_back_in(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        task = asyncio.create_task(presenter.update(snapshot_factory(optionsModeScoreVisibility="0")))
        await clock.advance(300)
        await task

        swap_time = surface.of("class")[0].time
        assert swap_time == 100
        for layer in ("player-background", "player-text"):
            fades = surface.of("opacity", layer)
            assert [e.value for e in fades if e.time == swap_time] == [0.0]
            assert fades[-1].value == 1.0
            assert fades[-1].time == 200

    async def test_update_mid_toggle_does_not_cancel_it(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        toggling = asyncio.create_task(
            presenter.update(snapshot_factory(optionsModeScoreVisibility="0"))
        )
        await clock.advance(50)

        await presenter.update(
            snapshot_factory(timestamp="2", matchEvent="Top 8", optionsModeScoreVisibility="0")
        )
        await clock.advance(500)

        assert toggling.done()
        assert presenter.layout_toggles == 1
        assert surface.classes["player2-name"] == {"name-text-wide"}
        assert surface.opacities["player-background"] == 1.0
        assert surface.texts["event"] == "Top 8"

    async def test_second_mode_change_queues_behind_running_toggle(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        hide = asyncio.create_task(presenter.update(snapshot_factory(optionsModeScoreVisibility="0")))
        await clock.advance(50)
        show = asyncio.create_task(
            presenter.update(snapshot_factory(timestamp="2", optionsModeScoreVisibility="1"))
        )
        await clock.advance(1000)

        assert hide.done() and show.done()
        assert presenter.layout_toggles == 2
        swaps = surface.of("class", "player1-name")
        assert [event.value for event in swaps] == [
            ("name-text", "name-text-wide"),
            ("name-text-wide", "name-text"),
        ]
        assert swaps[1].time - swaps[0].time == 200
        assert surface.opacities["player-text"] == 1.0


class TestLifecycle:
    async def test_initialize_plays_entrance_then_updates(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        task = asyncio.create_task(presenter.initialize(snapshot_factory()))
        await clock.advance(100)
        assert surface.entrances == [200]
        assert not presenter.initialized
        assert presenter.scope is None

        await clock.advance(100)
        await task

        assert presenter.initialized
        assert presenter.scope is not None

    async def test_failure_in_one_field_is_isolated(
        self,
        clock: VirtualClock,
        durations: Durations,
        snapshot_factory: Callable[..., Snapshot],
        caplog: pytest.LogCaptureFixture,
    ):
        surface = ExplodingSurface(clock, opacities={"player1-name": 0.0, "player2-name": 0.0})
        presenter = Presenter(surface, durations, clock=clock)

        with caplog.at_level(logging.ERROR):
            await presenter.update(snapshot_factory())
            await clock.advance(300)

        assert surface.texts["player1-score"] == "2"
        assert surface.texts["player1-name"] == "ウメハラ"
        assert any("Background task failed" in message for message in caplog.messages)
        await presenter.shutdown()

    async def test_shutdown_stops_all_animation(
        self,
        presenter: Presenter,
        surface: RecordingSurface,
        clock: VirtualClock,
        snapshot_factory: Callable[..., Snapshot],
    ):
        await presenter.update(snapshot_factory())
        await clock.advance(300)

        await presenter.shutdown()
        events = len(surface.events)
        await clock.advance(10_000)

        assert len(surface.events) == events
        assert clock.pending == 0
