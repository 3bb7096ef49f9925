import csv
import os
import uuid
from datetime import datetime
from typing import Optional


class RequestLogTracker:
    """
    Appends one row per backend call to a CSV file.
    Columns: timestamp, session_id, call_id, method, path, status, latency_ms, outcome, notes.
    """

    def __init__(self, session_id: Optional[str] = None, log_file: str = "requests.csv"):
        self.session_id = session_id or str(uuid.uuid4())
        self.log_file = log_file

        self._init_csv()

    def _init_csv(self):
        if not os.path.isfile(self.log_file):
            with open(self.log_file, mode="w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                writer.writerow(
                    [
                        "timestamp",
                        "session_id",
                        "call_id",
                        "method",
                        "path",
                        "status",
                        "latency_ms",
                        "outcome",
                        "notes",
                    ]
                )

    def _write(self, method, path, status, latency_ms, outcome, notes=""):
        with open(self.log_file, mode="a", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(
                [
                    datetime.now().isoformat(),
                    self.session_id,
                    str(uuid.uuid4()),
                    method,
                    path,
                    "" if status is None else status,
                    f"{latency_ms:.2f}",
                    outcome,
                    notes,
                ]
            )

    def on_request_end(self, method: str, path: str, status: int, latency_ms: float):
        self._write(method, path, status, latency_ms, "SUCCESS")

    def on_request_error(
        self,
        method: str,
        path: str,
        status: Optional[int],
        latency_ms: float,
        error: BaseException,
    ):
        self._write(method, path, status, latency_ms, "ERROR", str(error))
