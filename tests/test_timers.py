import asyncio
import unittest
from concurrent.futures import InvalidStateError

from falling_blocks.game import AsyncioTimer, FallingBlocksError, ManualTimer, ScoreSnapshot, SessionHandle, TimerError


class TestManualTimer(unittest.TestCase):
    def setUp(self):
        self.timer = ManualTimer()
        self.calls = []
        self.timer.on_tick(lambda: self.calls.append(len(self.calls)))

    def test_given_stopped_timer_when_ticking_then_handler_not_called(self):
        self.assertFalse(self.timer.tick())
        self.assertEqual(self.calls, [])

    def test_given_running_timer_when_ticking_then_handler_called_each_time(self):
        self.timer.start()
        self.assertTrue(self.timer.tick())
        self.assertTrue(self.timer.tick())
        self.assertEqual(self.calls, [0, 1])
        self.assertEqual(self.timer.ticks, 2)
        self.timer.stop()
        self.assertFalse(self.timer.tick())

    def test_given_interval_when_set_then_recorded(self):
        self.timer.set_interval(680)
        self.assertEqual(self.timer.interval_ms, 680)

    def test_given_handler_ticking_again_when_ticking_then_timer_error(self):
        timer = ManualTimer()
        timer.on_tick(timer.tick)
        timer.start()
        with self.assertRaises(RuntimeError) as caught:
            timer.tick()
        self.assertIsInstance(caught.exception, TimerError)
        self.assertIsInstance(caught.exception, FallingBlocksError)
        # The guard is released afterwards
        timer.on_tick(lambda: None)
        self.assertTrue(timer.tick())


class TestAsyncioTimer(unittest.TestCase):
    def test_given_bad_interval_when_building_or_setting_then_value_error(self):
        with self.assertRaises(ValueError):
            AsyncioTimer(0)
        timer = AsyncioTimer(10)
        with self.assertRaises(ValueError):
            timer.set_interval(-5)

    def test_given_no_running_loop_when_starting_then_runtime_error(self):
        with self.assertRaises(RuntimeError):
            AsyncioTimer(10).start()

    def test_given_handler_stopping_timer_when_running_then_no_more_ticks(self):
        async def scenario():
            timer = AsyncioTimer(1)
            fired = []
            done = asyncio.get_running_loop().create_future()

            def handler():
                fired.append(timer.interval_ms)
                timer.set_interval(2)
                if len(fired) == 3:
                    timer.stop()
                    done.set_result(None)

            timer.on_tick(handler)
            timer.start()
            await asyncio.wait_for(done, 2.0)
            await asyncio.sleep(0.02)
            return fired, timer.running

        fired, running = asyncio.run(scenario())
        self.assertEqual(fired, [1, 2, 2])
        self.assertFalse(running)


class TestSessionHandle(unittest.TestCase):
    def test_given_pending_handle_when_inspected_then_not_done(self):
        handle = SessionHandle()
        self.assertFalse(handle.done())
        self.assertEqual(repr(handle), "SessionHandle(pending)")

    def test_given_resolved_handle_when_resolving_again_then_invalid_state(self):
        handle = SessionHandle()
        handle.resolve(ScoreSnapshot(40, 1, 2))
        with self.assertRaises(InvalidStateError):
            handle.resolve(ScoreSnapshot(0, 0, 0))
        self.assertEqual(handle.result(), ScoreSnapshot(40, 1, 2))

    def test_given_callbacks_before_and_after_resolution_then_both_receive_snapshot(self):
        handle = SessionHandle()
        seen = []
        handle.add_done_callback(seen.append)
        snapshot = ScoreSnapshot(10, 0, 1)
        handle.resolve(snapshot)
        handle.add_done_callback(seen.append)
        self.assertEqual(seen, [snapshot, snapshot])

    def test_given_resolved_handle_when_awaited_then_returns_at_once(self):
        handle = SessionHandle()
        handle.resolve(ScoreSnapshot(5, 0, 0))

        async def scenario():
            return await handle

        self.assertEqual(asyncio.run(scenario()), ScoreSnapshot(5, 0, 0))


if __name__ == "__main__":
    unittest.main()
