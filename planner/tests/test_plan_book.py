import unittest
from planner.domain.PlanBook import PlanBook


class TestPlanBook(unittest.TestCase):

    def setUp(self):
        self.book = PlanBook()

    def test_new_book_has_default_plan(self):
        self.assertEqual(len(self.book), 1)
        self.assertEqual(self.book.active_plan.name, "Default")
        self.assertEqual(self.book.active_plan_id, self.book.plans[0].id)

    def test_create_plan_trims_and_activates(self):
        plan = self.book.create_plan("  Summer  ")
        self.assertEqual(plan.name, "Summer")
        self.assertEqual(self.book.active_plan_id, plan.id)
        self.assertEqual(plan.selected_activity_id, "a_work")

    def test_plan_name_rules(self):
        with self.assertRaises(ValueError):
            self.book.create_plan("   ")
        with self.assertRaises(ValueError):
            self.book.create_plan("x" * 61)
        self.book.create_plan("x" * 60)
        self.assertEqual(len(self.book), 2)

    def test_rename(self):
        plan_id = self.book.active_plan_id
        self.book.rename_plan(plan_id, " Work week ")
        self.assertEqual(self.book.active_plan.name, "Work week")

    def test_duplicate_copies_grid(self):
        original = self.book.active_plan
        original.write_range(0, 0, 12, "a_work")
        copy = self.book.duplicate_plan(original.id, "Default (Copy)")
        self.assertEqual(self.book.active_plan_id, copy.id)
        self.assertEqual(copy.grid.slice(0, 0, 12), ["a_work"] * 12)

    def test_last_plan_is_never_deleted(self):
        only = self.book.active_plan_id
        self.assertFalse(self.book.delete_plan(only))
        self.assertEqual(len(self.book), 1)

    def test_delete_active_falls_back_to_first(self):
        first = self.book.active_plan_id
        second = self.book.create_plan("Second")
        self.assertTrue(self.book.delete_plan(second.id))
        self.assertEqual(self.book.active_plan_id, first)

    def test_unknown_active_id_falls_back(self):
        data = self.book.to_dict()
        data["activePlanId"] = "missing"
        restored = PlanBook.from_dict(data)
        self.assertEqual(restored.active_plan_id, restored.plans[0].id)

    def test_document_shape(self):
        data = self.book.to_dict()
        self.assertEqual(data["version"], 3)
        self.assertEqual(data["activePlanId"], self.book.active_plan_id)
        plan = data["plans"][0]
        self.assertEqual(set(plan), {"id", "name", "activities", "grid", "selectedActivityId", "tool"})
        self.assertEqual(len(plan["grid"]), 7)
        self.assertTrue(all(len(col) == 288 for col in plan["grid"]))


if __name__ == '__main__':
    unittest.main()
