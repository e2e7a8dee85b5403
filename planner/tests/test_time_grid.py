import unittest
from planner.domain.TimeGrid import TimeGrid


class TestTimeGrid(unittest.TestCase):

    def setUp(self):
        self.grid = TimeGrid.create()

    def test_create_is_full_and_free(self):
        self.assertEqual(len(self.grid.columns), 7)
        self.assertTrue(all(len(col) == 288 for col in self.grid.columns))
        self.assertTrue(all(cell is None for col in self.grid.columns for cell in col))

    def test_write_range_sets_only_the_range(self):
        changed = self.grid.write_range(2, 10, 5, "a_work")
        self.assertEqual(changed, 5)
        for slot in range(288):
            expected = "a_work" if 10 <= slot < 15 else None
            self.assertEqual(self.grid.get(2, slot), expected)
        # other days untouched
        self.assertEqual(self.grid.column(1), [None] * 288)
        self.assertEqual(self.grid.column(3), [None] * 288)

    def test_write_range_clamps_at_end_of_day(self):
        changed = self.grid.write_range(0, 284, 12, "x")
        self.assertEqual(changed, 4)
        self.assertEqual(self.grid.slice(0, 280, 8), [None] * 4 + ["x"] * 4)

    def test_write_range_counts_only_changes(self):
        self.grid.write_range(0, 0, 12, "x")
        self.assertEqual(self.grid.write_range(0, 6, 12, "x"), 6)
        self.assertEqual(self.grid.write_range(0, 0, 18, "x"), 0)

    def test_write_free(self):
        self.grid.write_range(4, 0, 24, "x")
        self.grid.write_range(4, 3, 3, None)
        self.assertEqual(self.grid.slice(4, 0, 7), ["x", "x", "x", None, None, None, "x"])

    def test_out_of_range_is_programming_error(self):
        with self.assertRaises(IndexError):
            self.grid.write_range(7, 0, 1, "x")
        with self.assertRaises(IndexError):
            self.grid.write_range(0, 288, 1, "x")
        with self.assertRaises(IndexError):
            self.grid.write_range(-1, 0, 1, "x")

    def test_clear_activity(self):
        self.grid.write_range(0, 0, 3, "x")
        self.grid.write_range(0, 3, 3, "y")
        self.grid.write_range(6, 100, 10, "y")
        cleared = self.grid.clear_activity("y")
        self.assertEqual(cleared, 13)
        self.assertNotIn("y", self.grid.counts())
        self.assertEqual(self.grid.slice(0, 0, 3), ["x"] * 3)

    def test_bad_shape_rejected(self):
        with self.assertRaises(ValueError):
            TimeGrid([[None] * 288 for _ in range(6)])
        with self.assertRaises(ValueError):
            TimeGrid([[None] * 287] + [[None] * 288 for _ in range(6)])

    def test_counts_cover_whole_week(self):
        self.grid.write_range(1, 0, 12, "x")
        counts = self.grid.counts()
        self.assertEqual(counts["x"], 12)
        self.assertEqual(counts[None], 7 * 288 - 12)


if __name__ == '__main__':
    unittest.main()
