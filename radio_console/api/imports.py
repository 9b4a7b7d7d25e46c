"""Routes Import CSV / CSV import API routes."""

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from radio_console.api.deps import get_radio_service
from radio_console.config import settings
from radio_console.rate_limit import limiter
from radio_console.services.import_service import ImportService
from radio_console.services.radio_service import RadioService

router = APIRouter()


@router.post("/radios")
@limiter.limit(settings.RATE_LIMIT_IMPORT)
async def import_radios(
    request: Request,
    file: UploadFile = File(...),
    service: RadioService = Depends(get_radio_service),
):
    """
    Importer des radios depuis le CSV d'export.
    Import radios from the export CSV layout.
    Une ligne en erreur arrete l'import ; les lignes precedentes restent enregistrees.
    A failing row stops the import; earlier rows stay committed.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")
    if not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only CSV files are supported")

    content = await file.read()
    try:
        text = ImportService.decode(content)
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=400, detail=f"Error reading file: {e}")

    rows = ImportService.parse_radios(text)
    if not rows:
        raise HTTPException(status_code=400, detail="No data found in file")

    imported = await service.import_radios(rows)
    return {"imported": imported, "message": f"{imported} radio(s) geimporteerd"}
