"""Routes Export CSV/Excel / Export API routes."""

import io
from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from radio_console.api.deps import get_radio_service
from radio_console.services.export_service import ExportService
from radio_console.services.import_service import ImportService
from radio_console.services.radio_service import RadioService

router = APIRouter()

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _attachment(content: bytes, media_type: str, filename: str) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/radios")
async def export_radios(
    format: str = Query("csv", pattern="^(csv|xlsx)$"),
    service: RadioService = Depends(get_radio_service),
):
    """Exporter toutes les radios / Export all radios to CSV or XLSX."""
    radios = await service.list_radios()
    stem = f"radios_export_{date.today().isoformat()}"
    if format == "csv":
        return _attachment(ExportService.radios_to_csv(radios).encode("utf-8"), CSV_MEDIA_TYPE, f"{stem}.csv")
    return _attachment(ExportService.radios_to_xlsx(radios), XLSX_MEDIA_TYPE, f"{stem}.xlsx")


@router.get("/radios/template")
async def radio_import_template():
    """Modele d'import (en-tete seule) / Import template (header only)."""
    return _attachment(ImportService.template().encode("utf-8"), CSV_MEDIA_TYPE, "radio_import_template.csv")
