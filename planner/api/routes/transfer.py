from fastapi import APIRouter, HTTPException, Request, Response

from planner.api.routes.plans import plan_or_404
from planner.api.workspace import get_workspace
from planner.utilities.export_import import DataExporter, DataImporter
from planner.utilities.validators import DocumentValidationError

router = APIRouter()


@router.get('/api/document')
async def export_document():
    """The whole document (version 3), as it is persisted."""
    return get_workspace().book.to_dict()


@router.post('/api/document/import')
async def import_document(request: Request):
    """Replace every plan with the posted document, or change nothing at all."""
    body = await request.body()
    try:
        book = DataImporter().parse_text(body.decode('utf-8'))
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail='Document must be UTF-8 JSON')
    except DocumentValidationError as e:
        raise HTTPException(status_code=400, detail=e.reason)
    ws = get_workspace()
    ws.replace_book(book)
    return {"success": True, "message": "Imported successfully.", "plans": len(book), "active_plan_id": book.active_plan_id}


@router.get('/api/document/summary.csv')
async def export_summary_csv(plan_id: str = None):
    ws = get_workspace()
    plan = plan_or_404(plan_id) if plan_id else ws.active_plan
    csv_text = DataExporter(ws.book).allocation_csv(plan)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="allocation_{plan.id}.csv"'},
    )
