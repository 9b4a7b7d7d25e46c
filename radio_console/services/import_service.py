"""
Service d'import CSV / CSV import service.
Lit le format a 9 colonnes de l'export radio, sans guillemets ni echappement.
Reads the 9-column radio export layout, no quoting or escaping.
"""

from datetime import date

from pydantic import ValidationError

from radio_console.schemas.radio import RadioCreate

# Colonnes attendues, dans l'ordre / Expected columns, in order
RADIO_CSV_HEADERS = [
    "ID",
    "Merk",
    "Model",
    "Type",
    "Serienummer",
    "Alias",
    "Afdeling",
    "Registratiedatum",
    "Opmerking",
]

# Colonnes minimales par ligne / Minimum columns per row
MIN_COLUMNS = 8


class CsvImportError(Exception):
    """Import interrompu / Import interrupted.

    imported = lignes deja enregistrees (non annulees) / rows already committed (not rolled back).
    """

    def __init__(self, message: str, imported: int = 0, row_number: int | None = None):
        super().__init__(message)
        self.message = message
        self.imported = imported
        self.row_number = row_number


class ImportService:
    """Import de radios depuis CSV / Radio import from CSV."""

    @staticmethod
    def decode(content: bytes) -> str:
        return content.decode("utf-8-sig")  # BOM-safe

    @staticmethod
    def split_rows(text: str) -> list[list[str]]:
        """Decoupage naif : lignes sur \\n, champs sur la virgule / Naive split: rows on \\n, fields on comma."""
        lines = text.split("\n")
        return [[value.strip() for value in line.split(",")] for line in lines[1:]]

    @staticmethod
    def parse_radios(text: str, today: date | None = None) -> list[RadioCreate]:
        """Parser le CSV radio / Parse the radio CSV.

        L'en-tete est ignoree ; une ligne doit avoir au moins 8 colonnes et un ID.
        Header is skipped; a row needs at least 8 columns and an ID.
        """
        default_date = (today or date.today()).isoformat()
        radios = []
        for row_number, values in enumerate(ImportService.split_rows(text), start=1):
            if len(values) < MIN_COLUMNS or not values[0]:
                continue
            try:
                radios.append(RadioCreate(
                    id=values[0],
                    merk=values[1],
                    model=values[2],
                    type=values[3],
                    serienummer=values[4],
                    alias=values[5],
                    afdeling=values[6],
                    registratiedatum=values[7] or default_date,
                    opmerking=values[8] if len(values) > 8 else "",
                ))
            except ValidationError as exc:
                raise CsvImportError(
                    f"Invalid row {row_number}: {exc.errors()[0]['msg']}", imported=0, row_number=row_number,
                ) from exc
        return radios

    @staticmethod
    def template() -> str:
        """Modele vide (en-tete seule) / Empty template (header only)."""
        return ",".join(RADIO_CSV_HEADERS) + "\n"
