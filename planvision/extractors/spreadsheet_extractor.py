import csv
import io
from pathlib import Path

from planvision.documents.exceptions import ExtractionFailureError
from planvision.extractors.base import BaseTextExtractor


def sheet_header(sheet_name: str) -> str:
    return f"--- Sheet: {sheet_name} ---"


class SpreadsheetTextExtractor(BaseTextExtractor):
    """Serializes every worksheet to CSV text, in workbook order.

    Uses ``openpyxl`` in read-only mode; each sheet is prefixed with a
    ``--- Sheet: <name> ---`` header. Rows with no values are skipped. Chart
    sheets hold no cells and contribute only their header.
    """

    def _read(self, path: Path) -> str:
        from openpyxl import load_workbook
        from openpyxl.chartsheet import Chartsheet

        try:
            workbook = load_workbook(path, read_only=True, data_only=True)
        except Exception as exc:
            raise ExtractionFailureError(
                f"Failed to extract text from spreadsheet '{path.name}': {exc}"
            ) from exc

        sections: list[str] = []
        try:
            for sheet_name in workbook.sheetnames:
                sheet = workbook[sheet_name]
                if isinstance(sheet, Chartsheet):
                    sections.append(f"{sheet_header(sheet_name)}\n")
                    continue
                buffer = io.StringIO()
                writer = csv.writer(buffer, lineterminator="\n")
                for row in sheet.iter_rows(values_only=True):
                    if all(cell is None or str(cell).strip() == "" for cell in row):
                        continue
                    writer.writerow(["" if cell is None else cell for cell in row])
                sections.append(f"{sheet_header(sheet_name)}\n{buffer.getvalue()}")
        finally:
            workbook.close()
        return "\n".join(sections).strip()
