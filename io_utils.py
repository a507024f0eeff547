import io
from typing import Mapping
import pandas as pd
import structlog
logger = structlog.get_logger(__name__)
EXCEL_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MIME = "text/csv"
class FileIO:
   """In-memory export helpers for download buttons."""
   @staticmethod
   def try_export_excel(df: pd.DataFrame, sheet_name: str = "Routes") -> bytes:
       """Return XLSX bytes; prefer xlsxwriter; fallback to openpyxl."""
       return FileIO.try_export_sheets({sheet_name: df})
   @staticmethod
   def try_export_sheets(sheets: Mapping[str, pd.DataFrame]) -> bytes:
       """One workbook, one sheet per entry. Sheet names are cut to Excel's 31 characters."""
       try:
           return FileIO._write_sheets(sheets, "xlsxwriter")
       except ImportError:
           logger.info("excel_engine_fallback", engine="openpyxl")
           return FileIO._write_sheets(sheets, "openpyxl")
   @staticmethod
   def _write_sheets(sheets: Mapping[str, pd.DataFrame], engine: str) -> bytes:
       bio = io.BytesIO()
       with pd.ExcelWriter(bio, engine=engine) as w:
           for name, df in sheets.items():
               df.to_excel(w, index=False, sheet_name=name[:31])
       bio.seek(0)
       return bio.read()
