from datetime import datetime
from typing import Iterable, Optional
import pandas as pd
from io_utils import FileIO
from route_models import RouteIssue, RouteRecord
ISSUE_COLUMNS = ["Origin", "Destination", "Reason"]
ROUTE_COLUMNS = [
   "Origin_3DZ", "Destination_3DZ", "Origin_5DZ", "Destination_5DZ",
   "Origin_Country", "Destination_Country", "Distance", "Status",
   "Source", "Error_Reason", "calculated_at",
]
def issues_frame(issues: Iterable[RouteIssue]) -> pd.DataFrame:
   """Known-bad or missing routes as a table."""
   rows = [[i.origin, i.destination, i.reason] for i in issues]
   return pd.DataFrame(rows, columns=ISSUE_COLUMNS)
def routes_frame(routes: Iterable[RouteRecord]) -> pd.DataFrame:
   """Database rows as a table, in a fixed column order."""
   rows = [r.model_dump(include=set(ROUTE_COLUMNS)) for r in routes]
   return pd.DataFrame(rows, columns=ROUTE_COLUMNS)
def export_filename(base: str, ext: str, when: Optional[datetime] = None) -> str:
   stamp = (when or datetime.now()).strftime("%Y%m%d-%H%M")
   return f"{base} {stamp}.{ext}"
class Exporter:
   """Wrapper for creating downloadable binaries."""
   def export_full_excel(self, df: pd.DataFrame, sheet_name: str = "Routes") -> bytes:
       return FileIO.try_export_excel(df, sheet_name=sheet_name)
   def export_csv(self, df: pd.DataFrame) -> bytes:
       return df.to_csv(index=False).encode("utf-8")
   def export_issues_workbook(
       self, known_bad: Iterable[RouteIssue], missing: Iterable[RouteIssue]
   ) -> bytes:
       """Both issue lists in one workbook, one sheet each."""
       return FileIO.try_export_sheets({
           "Known Bad Routes": issues_frame(known_bad),
           "Missing Routes": issues_frame(missing),
       })
