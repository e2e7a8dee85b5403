"""In-process application state: the loaded plan book, the view scale and the gesture engines.

All routes are `async def`, so they run one at a time on the event loop:
a read never observes a half-applied mutation and a stroke or drag can never
interleave with another mutation.
"""
import logging
from typing import Optional

from planner.domain.Plan import Plan
from planner.domain.PlanBook import PlanBook
from planner.events.event_helpers import publish_document_imported
from planner.infra.Plan_Repository import PlanRepository
from planner.logic.painting.stroke import PaintEngine
from planner.logic.reorder.drag import ReorderEngine
from planner.utilities.constants import TIME_SCALES, DEFAULT_TIME_SCALE

logger = logging.getLogger(__name__)


class Workspace:
    def __init__(self, repository: Optional[PlanRepository] = None):
        self.repository = repository or PlanRepository()
        self.book: PlanBook = self.repository.load()
        self.scale = DEFAULT_TIME_SCALE
        self.paint = PaintEngine(lambda: self.book.active_plan, lambda: self.granularity)
        self.reorder = ReorderEngine(lambda: self.book.active_plan)

    @property
    def granularity(self) -> int:
        return TIME_SCALES[self.scale]

    @property
    def active_plan(self) -> Plan:
        return self.book.active_plan

    def set_scale(self, scale: str):
        if scale not in TIME_SCALES:
            raise ValueError(f"Unknown scale: {scale}")
        self.scale = scale

    def reset_gestures(self):
        '''Ends any running stroke and cancels any drag (plan switch, import).'''
        self.paint.end_stroke()
        self.reorder.cancel()

    def activate(self, plan_id: str) -> Plan:
        if plan_id != self.book.active_plan_id:
            self.reset_gestures()
        return self.book.activate(plan_id)

    def replace_book(self, book: PlanBook):
        '''Adopts an imported, already validated book in one step.'''
        self.reset_gestures()
        self.book = book
        self.persist()
        publish_document_imported(len(book), book.active_plan_id)
        logger.info("Imported %s plans, active=%s", len(book), book.active_plan_id)

    def persist(self):
        self.repository.save(self.book)


_workspace: Optional[Workspace] = None


def get_workspace() -> Workspace:
    global _workspace
    if _workspace is None:
        _workspace = Workspace()
    return _workspace


def set_workspace(workspace: Optional[Workspace]):
    """Swap the process-wide workspace (tests point it at a temporary store)."""
    global _workspace
    _workspace = workspace
