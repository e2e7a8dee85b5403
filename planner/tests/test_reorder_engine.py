import unittest
from planner.domain.Activity import Activity
from planner.domain.ActivityRegistry import ActivityRegistry
from planner.domain.Plan import Plan
from planner.events.Event_Bus import EventBus
from planner.logic.reorder.drag import ReorderEngine, RowRect, compute_insertion, resolve_target_index

ROW_HEIGHT = 40


def _layout(ids):
    """Rows stacked from y=100, 40px each: A 100-140, B 140-180, C 180-220, D 220-260."""
    return {activity_id: RowRect(100 + i * ROW_HEIGHT, ROW_HEIGHT, 300) for i, activity_id in enumerate(ids)}


class TestReorderEngine(unittest.TestCase):

    def setUp(self):
        activities = ActivityRegistry([Activity(i, i) for i in ("A", "B", "C", "D")])
        self.plan = Plan("p_test", "Test", activities=activities).set_event_bus(EventBus())
        self.engine = ReorderEngine(lambda: self.plan)
        self.layout = _layout(self.plan.activities.ids())

    def _drag(self, activity_id, to_y, pointer_id=1):
        rect = self.layout[activity_id]
        self.engine.press(activity_id, pointer_id, 50, rect.top + 10, self.layout)
        self.engine.move(pointer_id, 50, to_y)
        return self.engine.release(pointer_id)

    def test_drop_before_third_row_takes_its_index(self):
        # pointer between B and C midpoints: insert before C, C sits at index 2
        result = self._drag("A", 170)
        self.assertEqual((result["from_index"], result["to_index"]), (0, 2))
        self.assertEqual(self.plan.activities.ids(), ["B", "C", "A", "D"])

    def test_drop_before_last_row(self):
        # pointer between C and D midpoints: insert before D, D sits at index 3
        self._drag("A", 210)
        self.assertEqual(self.plan.activities.ids(), ["B", "C", "D", "A"])

    def test_drag_third_above_first(self):
        result = self._drag("C", 105)
        self.assertEqual((result["from_index"], result["to_index"]), (2, 0))
        self.assertEqual(self.plan.activities.ids(), ["C", "A", "B", "D"])

    def test_drag_below_everything_goes_last(self):
        self._drag("B", 900)
        self.assertEqual(self.plan.activities.ids(), ["A", "C", "D", "B"])

    def test_drop_over_own_row_resolves_to_next_sibling(self):
        # B removed: the pointer sits above C, which is at index 2 in the full order
        result = self._drag("B", 150)
        self.assertEqual(result["to_index"], 2)
        self.assertEqual(self.plan.activities.ids(), ["A", "C", "B", "D"])

    def test_drop_back_above_start_is_noop(self):
        # D removed: the pointer sits below C, so the drop is after the last row
        result = self._drag("D", 250)
        self.assertFalse(result["moved"])
        self.assertEqual(self.plan.activities.ids(), ["A", "B", "C", "D"])

    def test_release_without_move_is_noop(self):
        self.engine.press("C", 1, 0, 190, self.layout)
        result = self.engine.release(1)
        self.assertEqual(result, {"moved": False, "from_index": 2, "to_index": 2})
        self.assertEqual(self.plan.activities.ids(), ["A", "B", "C", "D"])

    def test_insertion_hint(self):
        self.engine.press("A", 1, 0, 110, self.layout)
        insertion = self.engine.move(1, 0, 230)
        self.assertEqual(insertion.to_dict(), {"insert_index": 2, "indicator_id": "D", "indicator_pos": "above"})
        insertion = self.engine.move(1, 0, 255)
        self.assertEqual(insertion.to_dict(), {"insert_index": 3, "indicator_id": "D", "indicator_pos": "below"})
        self.engine.cancel()

    def test_cancel_never_mutates(self):
        self.engine.press("A", 1, 0, 110, self.layout)
        self.engine.move(1, 0, 900)
        self.assertTrue(self.engine.cancel())
        self.assertEqual(self.engine.state, "idle")
        self.assertEqual(self.plan.activities.ids(), ["A", "B", "C", "D"])
        self.assertIsNone(self.engine.release(1))

    def test_second_press_ignored_while_dragging(self):
        self.assertIsNotNone(self.engine.press("A", 1, 0, 110, self.layout))
        self.assertIsNone(self.engine.press("D", 2, 0, 230, self.layout))
        self.assertEqual(self.engine.drag.activity_id, "A")
        # other pointer's events are ignored too
        self.assertIsNone(self.engine.move(2, 0, 900))
        self.assertIsNone(self.engine.release(2))
        self.assertEqual(self.engine.state, "dragging")

    def test_non_primary_button_ignored(self):
        self.assertIsNone(self.engine.press("A", 1, 0, 110, self.layout, button=2))
        self.assertEqual(self.engine.state, "idle")

    def test_press_captures_offset_and_preview(self):
        drag = self.engine.press("B", 1, 200, 155, self.layout)
        self.assertEqual(drag.start_index, 1)
        self.assertEqual(drag.offset_y, 15)
        self.assertEqual(drag.preview_position(1000), {"top": 140, "left": 50, "width": 300})
        self.engine.move(1, 10, 300)
        self.assertEqual(drag.preview_position(1000)["left"], 16)
        self.engine.cancel()

    def test_activity_deleted_mid_drag(self):
        self.engine.press("A", 1, 0, 110, self.layout)
        self.plan.delete_activity("A")
        result = self.engine.release(1)
        self.assertFalse(result["moved"])
        self.assertEqual(self.plan.activities.ids(), ["B", "C", "D"])

    def test_pure_helpers(self):
        order = ["A", "B", "C", "D"]
        insertion = compute_insertion(order, "A", self.layout, 190)
        self.assertEqual((insertion.index, insertion.indicator_id), (1, "C"))
        self.assertEqual(resolve_target_index(order, "A", 1), 2)
        self.assertEqual(resolve_target_index(order, "B", 1), 2)
        self.assertEqual(resolve_target_index(order, "D", 3), 3)
        self.assertEqual(resolve_target_index(order, "A", 3), 3)
        self.assertEqual(resolve_target_index(order, "C", 0), 0)


if __name__ == '__main__':
    unittest.main()
