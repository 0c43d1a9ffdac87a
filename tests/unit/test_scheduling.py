import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from chaosgame_core.scheduling import ManualScheduler


class ManualSchedulerTests(unittest.TestCase):
    def test_advance_fires_per_whole_interval(self):
        sched = ManualScheduler()
        calls = []
        sched.call_every(30, lambda: calls.append("tick"))
        self.assertEqual(sched.advance(29), 0)
        self.assertEqual(sched.advance(1), 1)
        self.assertEqual(sched.advance(95), 3)
        self.assertEqual(len(calls), 4)

    def test_cancel_stops_firing(self):
        sched = ManualScheduler()
        calls = []
        handle = sched.call_every(10, lambda: calls.append(1))
        sched.fire(2)
        handle.cancel()
        self.assertFalse(handle.active)
        self.assertEqual(sched.fire(5), 0)
        self.assertEqual(sched.advance(100), 0)
        self.assertEqual(calls, [1, 1])

    def test_cancel_from_inside_callback(self):
        sched = ManualScheduler()
        calls = []

        def once():
            calls.append(1)
            handle.cancel()

        handle = sched.call_every(10, once)
        sched.advance(50)
        self.assertEqual(calls, [1])

    def test_resize_notifies_callbacks(self):
        sched = ManualScheduler()
        seen = []
        sched.on_resize(lambda w, h: seen.append((w, h)))
        sched.resize(640, 480)
        self.assertEqual(seen, [(640, 480)])

    def test_interval_must_be_positive(self):
        with self.assertRaises(ValueError):
            ManualScheduler().call_every(0, lambda: None)


if __name__ == "__main__":
    unittest.main()
