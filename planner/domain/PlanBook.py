"""PlanBook aggregate: the ordered set of saved plans plus the active plan id (one persisted document)."""
from typing import List, Optional

from planner.domain.Plan import Plan
from planner.utilities.constants import DOCUMENT_VERSION, PLAN_NAME_MAX_LENGTH


def clean_plan_name(name: str) -> str:
    '''Trims a plan name and enforces 1..60 characters.'''
    trimmed = (name or "").strip()
    if not trimmed:
        raise ValueError("Please enter a name.")
    if len(trimmed) > PLAN_NAME_MAX_LENGTH:
        raise ValueError("Name is too long.")
    return trimmed


class PlanBook:
    def __init__(self, plans: Optional[List[Plan]] = None, active_plan_id: Optional[str] = None):
        self.plans: List[Plan] = list(plans) if plans else [Plan.make_default()]
        self.active_plan_id = active_plan_id
        self._fix_active()

    def _fix_active(self):
        if not any(p.id == self.active_plan_id for p in self.plans):
            self.active_plan_id = self.plans[0].id

    @property
    def active_plan(self) -> Plan:
        return self.get(self.active_plan_id) or self.plans[0]

    def get(self, plan_id: Optional[str]) -> Optional[Plan]:
        for plan in self.plans:
            if plan.id == plan_id:
                return plan
        return None

    def require(self, plan_id: str) -> Plan:
        plan = self.get(plan_id)
        if plan is None:
            raise KeyError(plan_id)
        return plan

    def activate(self, plan_id: str) -> Plan:
        plan = self.require(plan_id)
        self.active_plan_id = plan.id
        return plan

    def create_plan(self, name: str) -> Plan:
        '''New plan with default activities; becomes the active plan.'''
        plan = Plan.make_default(clean_plan_name(name))
        self.plans.append(plan)
        self.active_plan_id = plan.id
        return plan

    def rename_plan(self, plan_id: str, name: str) -> Plan:
        plan = self.require(plan_id)
        plan.name = clean_plan_name(name)
        return plan

    def duplicate_plan(self, plan_id: str, name: str) -> Plan:
        copy = self.require(plan_id).duplicate(clean_plan_name(name))
        self.plans.append(copy)
        self.active_plan_id = copy.id
        return copy

    def delete_plan(self, plan_id: str) -> bool:
        '''
        Removes a plan. The last remaining plan is never deleted (returns False).
        '''
        plan = self.require(plan_id)
        if len(self.plans) <= 1:
            return False
        self.plans.remove(plan)
        self._fix_active()
        return True

    def __len__(self) -> int:
        return len(self.plans)

    def __str__(self) -> str:
        return f"PlanBook({len(self.plans)} plans, active={self.active_plan_id})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Builds a PlanBook from an already validated document dictionary.'''
        plans = [Plan.from_dict(p) for p in data["plans"]]
        active = data.get("activePlanId")
        return PlanBook(plans, active if isinstance(active, str) else None)

    def to_dict(self):
        return {
            "version": DOCUMENT_VERSION,
            "activePlanId": self.active_plan.id,
            "plans": [p.to_dict() for p in self.plans],
        }
