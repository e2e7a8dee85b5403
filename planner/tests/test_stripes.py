import unittest
from planner.domain.Plan import Plan
from planner.events.Event_Bus import EventBus
from planner.logic.aggregation.stripes import classify_row, compute_view, FREE, SINGLE, MIXED


class TestStripes(unittest.TestCase):

    def setUp(self):
        self.plan = Plan.make_default().set_event_bus(EventBus())

    def test_all_free_hour(self):
        stripe = classify_row(self.plan, 0, 0, 12)
        self.assertEqual(stripe.kind, FREE)
        self.assertEqual(stripe.segments, [])

    def test_uniform_hour_is_single(self):
        self.plan.write_range(1, 24, 12, "a_work")
        stripe = classify_row(self.plan, 1, 2, 12)
        self.assertEqual(stripe.kind, SINGLE)
        self.assertEqual(stripe.activity.name, "Work")
        self.assertEqual(stripe.time_label, "02:00-03:00")

    def test_half_and_half_is_mixed_with_equal_bands(self):
        self.plan.write_range(2, 0, 6, "a_sleep")
        self.plan.write_range(2, 6, 6, "a_work")
        stripe = classify_row(self.plan, 2, 0, 12)
        self.assertEqual(stripe.kind, MIXED)
        self.assertEqual([s.key for s in stripe.segments], ["a_sleep", "a_work"])
        self.assertEqual([(s.start, s.end) for s in stripe.segments], [(0.0, 0.5), (0.5, 1.0)])
        self.assertEqual(stripe.tooltip, "Sleep: 0h 30m\nWork: 0h 30m")

    def test_tie_break_follows_first_occurrence_not_id(self):
        self.plan.write_range(0, 0, 6, "a_work")
        self.plan.write_range(0, 6, 6, "a_admin")
        stripe = classify_row(self.plan, 0, 0, 12)
        self.assertEqual([s.key for s in stripe.segments], ["a_work", "a_admin"])

        self.plan.write_range(0, 0, 6, "a_admin")
        self.plan.write_range(0, 6, 6, "a_work")
        stripe = classify_row(self.plan, 0, 0, 12)
        self.assertEqual([s.key for s in stripe.segments], ["a_admin", "a_work"])

    def test_higher_count_wins_over_scan_order(self):
        self.plan.write_range(0, 0, 1, "a_work")
        self.plan.write_range(0, 1, 2, "a_admin")
        stripe = classify_row(self.plan, 0, 0, 3)
        self.assertEqual([(s.key, s.count) for s in stripe.segments], [("a_admin", 2), ("a_work", 1)])

    def test_equal_counts_keep_scan_order(self):
        self.plan.write_range(3, 0, 4, "a_family")
        self.plan.write_range(3, 4, 4, "a_admin")
        self.plan.write_range(3, 8, 4, "a_work")
        stripe = classify_row(self.plan, 3, 0, 12)
        self.assertEqual([s.key for s in stripe.segments], ["a_family", "a_admin", "a_work"])
        bounds = [(round(s.start, 4), round(s.end, 4)) for s in stripe.segments]
        self.assertEqual(bounds, [(0.0, 0.3333), (0.3333, 0.6667), (0.6667, 1.0)])

    def test_free_segment_loses_ties(self):
        self.plan.write_range(4, 1, 1, "a_work")
        stripe = classify_row(self.plan, 4, 0, 3)
        self.assertEqual([(s.key, s.count) for s in stripe.segments], [("__free__", 2), ("a_work", 1)])
        # free slots come first in scan order but the free segment still sorts last on a tie
        self.plan.write_range(4, 18, 6, "a_work")
        stripe = classify_row(self.plan, 4, 1, 12)
        self.assertEqual([s.key for s in stripe.segments], ["a_work", "__free__"])

    def test_gradient_and_tooltip_omit_nothing_visible(self):
        self.plan.write_range(5, 0, 2, "a_work")
        stripe = classify_row(self.plan, 5, 0, 3)
        self.assertEqual(
            stripe.gradient,
            "linear-gradient(to right, #E11D48 0.00% 66.67%, rgba(255,255,255,0.06) 66.67% 100.00%)",
        )
        self.assertEqual(stripe.tooltip, "Work: 0h 10m\nFree: 0h 05m")

    def test_unknown_id_is_rendered_as_unknown(self):
        self.plan.grid.columns[6][0] = "ghost"
        self.plan.grid.columns[6][1] = "ghost"
        stripe = classify_row(self.plan, 6, 0, 3)
        self.assertEqual(stripe.kind, MIXED)
        self.assertEqual(stripe.segments[0].label, "Unknown")
        self.assertEqual(stripe.segments[0].colour, "#A3A3A3")
        stripe = classify_row(self.plan, 6, 0, 1)
        self.assertEqual(stripe.kind, SINGLE)
        self.assertIsNone(stripe.activity)

    def test_view_shape_and_purity(self):
        self.plan.write_range(0, 0, 5, "a_work")
        before = self.plan.grid.to_list()
        for g, rows in ((1, 288), (3, 96), (12, 24)):
            view = compute_view(self.plan, g)
            self.assertEqual(len(view), 7)
            self.assertTrue(all(len(col) == rows for col in view))
        self.assertEqual(self.plan.grid.to_list(), before)

    def test_recomputed_after_rename(self):
        self.plan.write_range(0, 0, 1, "a_work")
        self.plan.update_activity("a_work", name="Job", colour="#000000")
        stripe = classify_row(self.plan, 0, 0, 3)
        self.assertEqual(stripe.segments[1].label, "Job")
        self.assertEqual(stripe.segments[1].colour, "#000000")

    def test_bad_granularity(self):
        with self.assertRaises(ValueError):
            classify_row(self.plan, 0, 0, 4)
        with self.assertRaises(IndexError):
            classify_row(self.plan, 0, 24, 12)


if __name__ == '__main__':
    unittest.main()
