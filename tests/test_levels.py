import unittest

from falling_blocks.game import DifficultyCurve, ManualTimer


class TestDifficultyCurve(unittest.TestCase):
    def setUp(self):
        self.timer = ManualTimer()
        self.curve = DifficultyCurve([(0, 770), (15, 730), (30, 680)], self.timer)

    def test_given_new_curve_when_built_then_level_zero_interval_applied(self):
        self.assertEqual(self.curve.current_level, 0)
        self.assertEqual(self.timer.interval_ms, 770)
        self.assertEqual(self.curve.next_threshold, 15)

    def test_given_lines_below_threshold_when_advancing_then_level_kept(self):
        self.assertFalse(self.curve.advance(14))
        self.assertEqual(self.curve.current_level, 0)
        self.assertEqual(self.timer.interval_ms, 770)

    def test_given_threshold_reached_when_advancing_then_next_level_and_interval(self):
        self.assertTrue(self.curve.advance(15))
        self.assertEqual(self.curve.current_level, 1)
        self.assertEqual(self.timer.interval_ms, 730)

    def test_given_exhausted_table_when_advancing_then_holds_last_level(self):
        self.curve.advance(15)
        self.curve.advance(30)
        self.assertIsNone(self.curve.next_threshold)
        self.assertFalse(self.curve.advance(1000))
        self.assertEqual(self.curve.current_level, 2)
        self.assertEqual(self.timer.interval_ms, 680)

    def test_given_level_when_looking_up_then_table_interval(self):
        self.assertEqual(self.curve.interval_for_level(1), 730)
        with self.assertRaises(IndexError):
            self.curve.interval_for_level(3)

    def test_given_bad_tables_when_building_then_value_error(self):
        for table in ([], [(0, 500), (0, 400)], [(10, 500), (5, 400)], [(0, 0)]):
            with self.assertRaises(ValueError):
                DifficultyCurve(table)

    def test_given_no_timer_when_advancing_then_still_tracks_level(self):
        curve = DifficultyCurve([(0, 100), (2, 50)])
        self.assertTrue(curve.advance(3))
        self.assertEqual(curve.current_interval, 50)


if __name__ == "__main__":
    unittest.main()
