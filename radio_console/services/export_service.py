"""
Service d'export CSV/Excel / CSV/Excel export service.
Génère le CSV radio (virgules, sans echappement) et un classeur XLSX.
Generates the radio CSV (commas, no escaping) and an XLSX workbook.
"""

import io
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font

from radio_console.schemas.radio import RadioRead
from radio_console.services.import_service import RADIO_CSV_HEADERS

# Champs dans l'ordre des colonnes / Fields in column order
RADIO_FIELDS = [
    "id",
    "merk",
    "model",
    "type",
    "serienummer",
    "alias",
    "afdeling",
    "registratiedatum",
    "opmerking",
]


class ExportService:
    """Export de données vers CSV/XLSX / Data export to CSV/XLSX."""

    @staticmethod
    def radio_to_row(radio: RadioRead) -> list[str]:
        data: dict[str, Any] = radio.model_dump(mode="json")
        return [str(data.get(field) or "") for field in RADIO_FIELDS]

    @staticmethod
    def radios_to_csv(radios: list[RadioRead]) -> str:
        """Générer le CSV radio / Generate the radio CSV.

        Aucune mise entre guillemets : une virgule dans un champ casse la ligne.
        No quoting: a comma inside a field corrupts the row.
        """
        lines = [",".join(RADIO_CSV_HEADERS)]
        lines.extend(",".join(ExportService.radio_to_row(radio)) for radio in radios)
        return "\n".join(lines)

    @staticmethod
    def radios_to_xlsx(radios: list[RadioRead], sheet_name: str = "Radios") -> bytes:
        """Générer un fichier Excel / Generate an Excel file."""
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name

        # En-têtes / Headers
        for col_idx, header in enumerate(RADIO_CSV_HEADERS, 1):
            ws.cell(row=1, column=col_idx, value=header).font = Font(bold=True)

        # Données / Data rows
        for row_idx, radio in enumerate(radios, 2):
            for col_idx, value in enumerate(ExportService.radio_to_row(radio), 1):
                ws.cell(row=row_idx, column=col_idx, value=value)

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
