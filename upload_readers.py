import csv
import io
import mimetypes
from dataclasses import dataclass
from typing import Optional
import pandas as pd
EXCEL_SUFFIXES = (".xls", ".xlsx", ".xlsm")
@dataclass(frozen=True)
class UploadedFile:
   """Bytes of one uploaded spreadsheet, read once from the Streamlit widget."""
   name: str
   content: bytes
   content_type: Optional[str] = None
   @property
   def size(self) -> int:
       return len(self.content)
   @property
   def is_excel(self) -> bool:
       return self.name.lower().endswith(EXCEL_SUFFIXES)
class UploadReader:
   """Reads uploaded route files for sending and previewing."""
   def read(self, file) -> UploadedFile:
       """Snapshot an uploaded file; the widget is rewound so it can be read again."""
       content = file.read()
       file.seek(0)
       name = file.name or "upload"
       content_type = getattr(file, "type", None) or mimetypes.guess_type(name)[0]
       return UploadedFile(name=name, content=content, content_type=content_type)
   def preview(self, upload: UploadedFile, rows: int = 5) -> pd.DataFrame:
       """First ``rows`` rows as text, for a glance before uploading."""
       if upload.is_excel:
           return pd.read_excel(io.BytesIO(upload.content), dtype=str, nrows=rows)
       return self._read_text_to_df(upload.content, rows)
   @staticmethod
   def _read_text_to_df(data: bytes, rows: Optional[int] = None) -> pd.DataFrame:
       """Convert uploaded .csv/.txt bytes into a DataFrame. Auto-detect delimiter."""
       sample = data[:4096]
       try:
           sniff = csv.Sniffer().sniff(sample.decode("utf-8", errors="ignore"))
           sep = sniff.delimiter
       except csv.Error:
           sep = "\t" if b"\t" in sample else ","
       return pd.read_csv(
           io.BytesIO(data), sep=sep, dtype=str, engine="python",
           encoding="latin1", keep_default_na=False, nrows=rows
       )
