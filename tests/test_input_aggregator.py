"""
Tests for input aggregation.
"""

import threading

import pytest

from wavetunnel.tunnel_core.input_aggregator import InputAggregator


@pytest.fixture
def aggregator(config):
    return InputAggregator(config)


class TestAccumulate:
    """Scroll and touch accumulation."""

    def test_consume_scales_and_resets(self, aggregator):
        """Accumulated delta is scaled by sensitivity and cleared."""
        aggregator.accumulate(2.0)
        aggregator.accumulate(1.0)

        assert aggregator.consume(5.0) == pytest.approx(15.0)
        assert aggregator.pending == 0.0
        assert aggregator.consume(5.0) == 0.0

    def test_scroll_scale(self, aggregator):
        """Wheel deltas are scaled by 0.1 before sensitivity."""
        aggregator.on_scroll(100)
        assert aggregator.pending == pytest.approx(10.0)

        aggregator.on_scroll(-50)
        assert aggregator.pending == pytest.approx(5.0)

    def test_touch_drag(self, aggregator):
        """Drag deltas are measured from the previous touch point."""
        aggregator.on_touch_start(100)
        aggregator.on_touch_move(150)
        assert aggregator.pending == pytest.approx(10.0)

        aggregator.on_touch_move(140)
        assert aggregator.pending == pytest.approx(8.0)

    def test_touch_sensitivity_matches_reference(self, aggregator):
        """A drag moves the ball by delta * sensitivity / 5."""
        aggregator.on_touch_start(0)
        aggregator.on_touch_move(30)
        assert aggregator.consume(5.0) == pytest.approx(30.0)

    def test_touch_move_without_start(self, aggregator):
        """First move only sets the anchor."""
        aggregator.on_touch_move(200)
        assert aggregator.pending == 0.0
        aggregator.on_touch_move(210)
        assert aggregator.pending == pytest.approx(2.0)

    def test_touch_end_clears_anchor(self, aggregator):
        aggregator.on_touch_start(100)
        aggregator.on_touch_end()
        aggregator.on_touch_move(300)
        assert aggregator.pending == 0.0

    def test_reset(self, aggregator):
        aggregator.accumulate(4.0)
        aggregator.reset()
        assert aggregator.pending == 0.0

    def test_concurrent_producers(self, aggregator):
        """Deltas from several threads are all counted."""
        def produce():
            for _ in range(1000):
                aggregator.accumulate(1.0)

        threads = [threading.Thread(target=produce) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert aggregator.pending == 4000.0


class TestGamepad:
    """Gamepad polling."""

    def test_no_gamepad_is_zero(self, aggregator):
        assert aggregator.sample_gamepad_axis() == 0.0

    def test_axis_combined_with_scroll(self, config):
        """delta = accumulated * s + axis * s."""
        aggregator = InputAggregator(config, gamepad_provider=lambda: 0.5)
        aggregator.accumulate(2.0)

        assert aggregator.consume(5.0) == pytest.approx(12.5)

    def test_axis_polled_every_tick(self, config):
        """Gamepad contributes on each consume, not just once."""
        aggregator = InputAggregator(config, gamepad_provider=lambda: -1.0)
        assert aggregator.consume(2.0) == pytest.approx(-2.0)
        assert aggregator.consume(2.0) == pytest.approx(-2.0)

    def test_disconnected_gamepad(self, config):
        """Provider reporting no device contributes nothing."""
        aggregator = InputAggregator(config, gamepad_provider=lambda: None)
        assert aggregator.sample_gamepad_axis() == 0.0

    def test_failing_gamepad(self, config):
        """Device errors degrade to zero input."""
        def unplugged():
            raise OSError("device removed")

        aggregator = InputAggregator(config, gamepad_provider=unplugged)
        assert aggregator.consume(5.0) == 0.0

    def test_axis_clamped(self, config):
        aggregator = InputAggregator(config, gamepad_provider=lambda: 3.0)
        assert aggregator.sample_gamepad_axis() == 1.0

        aggregator.set_gamepad_provider(lambda: -7.0)
        assert aggregator.sample_gamepad_axis() == -1.0


class TestTouchThreads:
    """Touch producers on other threads."""

    def test_concurrent_touch_moves(self, aggregator):
        """Drags from several threads telescope to the net anchor movement."""
        aggregator.on_touch_start(0.0)

        def drag():
            for _ in range(1000):
                aggregator.on_touch_move(10.0)
                aggregator.on_touch_move(0.0)

        threads = [threading.Thread(target=drag) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # Every thread ends at 0, the starting anchor
        assert aggregator.pending == 0.0
