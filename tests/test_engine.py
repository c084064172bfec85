"""Tests for the Qt timer engine.

Covers: command transitions, tick subscription lifecycle, stale-tick
safety, single completion + notification, snapshot saving after every
mutation, restore at startup, and signal emission.
"""

import json

import pytest

from pomodoro.persistence import STATE_KEY
from pomodoro.timer.engine import TimerEngine
from pomodoro.timer.state import InvalidDurationError, TimerState

from helpers import SignalCollector, T0, run_until_done


# ═══════════════════════════════════════════════════════════════════════════
#  STATE TRANSITIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestStateTransitions:

    def test_initial_state(self, engine):
        assert engine.state == TimerState(1500, False, None, 25)
        assert engine.is_running is False
        assert engine.ticking is False
        assert engine.time_text == "25:00"

    def test_start_runs_and_ticks(self, engine):
        engine.start()
        assert engine.is_running is True
        assert engine.ticking is True
        assert engine.state.anchor_ms == T0

    def test_start_is_noop_when_running(self, engine, clock):
        engine.start()
        anchor = engine.state.anchor_ms
        clock.advance(5)
        engine.start()
        assert engine.state.anchor_ms == anchor

    def test_pause_stops_ticking(self, engine, clock):
        engine.start()
        clock.advance(10)
        engine.pause()
        assert engine.is_running is False
        assert engine.ticking is False
        assert engine.remaining == 1490

    def test_pause_is_noop_when_stopped(self, engine):
        c = SignalCollector()
        engine.state_changed.connect(c)
        engine.pause()
        assert len(c) == 0

    def test_toggle(self, engine):
        engine.toggle()
        assert engine.is_running is True
        engine.toggle()
        assert engine.is_running is False

    def test_reset(self, engine, clock):
        engine.start()
        clock.advance(42)
        engine._on_tick()
        engine.reset()
        assert engine.state == TimerState(1500, False, None, 25)
        assert engine.ticking is False

    def test_select_duration_while_running(self, engine, clock):
        engine.start()
        clock.advance(500)
        engine._on_tick()
        assert engine.remaining == 1000

        engine.select_duration(15)
        assert engine.state == TimerState(900, False, None, 15)
        assert engine.ticking is False

    def test_invalid_duration_leaves_state_untouched(self, engine, clock):
        engine.start()
        clock.advance(3)
        engine._on_tick()
        before = engine.state

        with pytest.raises(InvalidDurationError):
            engine.select_duration(20)

        assert engine.state == before
        assert engine.ticking is True

    def test_state_changed_fires_on_commands(self, engine):
        c = SignalCollector()
        engine.state_changed.connect(c)

        engine.start()
        assert c.last.running is True
        engine.pause()
        assert c.last.running is False
        engine.select_duration(35)
        assert c.last.selected_minutes == 35
        engine.reset()
        assert len(c) == 4


# ═══════════════════════════════════════════════════════════════════════════
#  TICKS
# ═══════════════════════════════════════════════════════════════════════════


class TestTicks:

    def test_tick_emits_remaining(self, engine, clock):
        c = SignalCollector()
        engine.tick.connect(c)

        engine.start()
        clock.advance(1)
        engine._on_tick()

        assert c.last == 1499
        assert engine.remaining == 1499

    def test_resume_keeps_elapsed_time(self, engine, clock):
        engine.start()
        clock.advance(100)
        engine.pause()
        clock.advance(3600)  # long break while paused
        engine.start()
        clock.advance(1)
        engine._on_tick()
        assert engine.remaining == 1500 - 101

    def test_throttled_ticks_self_correct(self, engine, clock):
        engine.start()
        clock.advance(1)
        engine._on_tick()
        clock.advance(300)  # 299 ticks never fired
        engine._on_tick()
        assert engine.remaining == 1500 - 301

    def test_pause_catches_up_before_freezing(self, engine, clock):
        engine.start()
        clock.advance(1)
        engine._on_tick()
        clock.advance(59)  # ticks throttled since
        engine.pause()
        assert engine.remaining == 1440

    def test_stale_tick_after_pause_is_ignored(self, engine, clock):
        engine.start()
        clock.advance(10)
        engine.pause()
        frozen = engine.state

        clock.advance(100)
        engine._on_tick()  # a tick that slipped through
        assert engine.state == frozen

    def test_cancelled_subscription_never_fires(self, engine, clock):
        engine.start()
        old = engine._ticks
        engine.select_duration(15)
        assert old.cancelled is True

        clock.advance(30)
        old._fire()
        assert engine.state == TimerState(900, False, None, 15)

    def test_percent_complete(self, engine, clock):
        engine.select_duration(15)
        engine.start()
        clock.advance(450)
        engine._on_tick()
        assert engine.percent_complete == pytest.approx(0.5)


# ═══════════════════════════════════════════════════════════════════════════
#  COMPLETION
# ═══════════════════════════════════════════════════════════════════════════


class TestCompletion:

    def test_completes_once(self, engine, clock, channel):
        done = SignalCollector()
        engine.completed.connect(done)

        engine.select_duration(15)
        engine.start()
        run_until_done(engine, clock)

        assert engine.remaining == 0
        assert engine.is_running is False
        assert engine.ticking is False
        assert len(done) == 1
        assert len(channel.messages) == 1

        # Further tick evaluations after zero change nothing
        for _ in range(5):
            clock.advance(1)
            engine._on_tick()
        assert len(done) == 1
        assert len(channel.messages) == 1

    def test_notification_content(self, engine, clock, channel):
        engine.start()
        clock.advance(1500)
        engine._on_tick()
        title, body = channel.messages[0]
        assert title == "Pomodoro Timer"
        assert body

    def test_no_notification_on_pause_reset_or_select(self, engine, clock, channel):
        engine.start()
        clock.advance(5)
        engine.pause()
        engine.start()
        engine.reset()
        engine.start()
        engine.select_duration(45)
        assert channel.messages == []

    def test_pause_after_deadline_completes_instead(self, engine, clock, channel):
        done = SignalCollector()
        engine.completed.connect(done)

        engine.start()
        clock.advance(2000)  # all ticks throttled past the end
        engine.pause()

        assert len(done) == 1
        assert engine.remaining == 0
        assert len(channel.messages) == 1

    def test_completion_without_notifier(self, bare_engine, clock):
        done = SignalCollector()
        bare_engine.completed.connect(done)
        bare_engine.start()
        clock.advance(1500)
        bare_engine._on_tick()
        assert len(done) == 1

    def test_start_after_completion_runs_full_duration(self, engine, clock):
        engine.start()
        clock.advance(1500)
        engine._on_tick()
        engine.start()
        assert engine.remaining == 1500
        clock.advance(1)
        engine._on_tick()
        assert engine.remaining == 1499

    def test_pause_resume_then_complete_scenario(self, engine, clock, channel):
        """25 min; pause at 10 s; resume; 1510 s later the run is done."""
        engine.start()
        clock.advance(10)
        engine.pause()
        assert engine.remaining == 1490

        engine.start()
        clock.advance(1510)
        engine._on_tick()
        assert engine.remaining == 0
        assert len(channel.messages) == 1


# ═══════════════════════════════════════════════════════════════════════════
#  PERSISTENCE
# ═══════════════════════════════════════════════════════════════════════════


class TestPersistence:

    def _saved(self, storage):
        return json.loads(storage.get_item(STATE_KEY))

    def test_every_command_saves(self, engine, storage, clock):
        engine.start()
        assert self._saved(storage)["running"] is True

        clock.advance(7)
        engine._on_tick()
        assert self._saved(storage)["remainingSeconds"] == 1493

        engine.pause()
        saved = self._saved(storage)
        assert saved["running"] is False
        assert saved["anchorStartInstant"] is None

        engine.select_duration(35)
        assert self._saved(storage)["selectedDurationMinutes"] == 35

    def test_restore_round_trip(self, qapp, config, clock, store, engine):
        engine.select_duration(45)
        engine.start()
        clock.advance(61)
        engine._on_tick()
        engine.pause()
        saved = engine.state

        restarted = TimerEngine(config=config, clock=clock, store=store)
        assert restarted.restore() == saved
        assert restarted.ticking is False
        restarted.shutdown()

    def test_restore_running_continues_from_wall_clock(
        self, qapp, config, clock, store, engine,
    ):
        engine.start()
        engine.shutdown()

        clock.advance(120)  # app closed for two minutes
        restarted = TimerEngine(config=config, clock=clock, store=store)
        restarted.restore()
        assert restarted.is_running is True
        assert restarted.ticking is True
        assert restarted.remaining == 1380
        restarted.shutdown()

    def test_restore_finished_while_closed_completes_once(
        self, qapp, config, clock, store, notifier, channel, engine,
    ):
        engine.start()
        engine.shutdown()

        clock.advance(4000)
        restarted = TimerEngine(
            config=config, clock=clock, store=store, notifier=notifier,
        )
        done = SignalCollector()
        restarted.completed.connect(done)
        restarted.restore()

        assert restarted.remaining == 0
        assert restarted.is_running is False
        assert len(done) == 1
        assert len(channel.messages) == 1
        restarted.shutdown()

    def test_restore_without_snapshot_uses_defaults(self, qapp, config, clock, store):
        e = TimerEngine(config=config, clock=clock, store=store)
        assert e.restore() == TimerState(1500, False, None, 25)
        e.shutdown()

    def test_restore_malformed_snapshot_uses_defaults(
        self, qapp, config, clock, store, storage,
    ):
        storage.set_item(STATE_KEY, "{not json")
        e = TimerEngine(config=config, clock=clock, store=store)
        assert e.restore() == TimerState(1500, False, None, 25)
        e.shutdown()

    def test_shutdown_cancels_ticks(self, engine):
        engine.start()
        sub = engine._ticks
        engine.shutdown()
        assert sub.cancelled is True
        assert engine.ticking is False
