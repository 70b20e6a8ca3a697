from __future__ import annotations

import os
import tempfile
from pathlib import Path

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import Response

from .converter import PDF_SUFFIX, transactions_to_csv
from .errors import StatementLoadError
from .logging_setup import get_logger
from .parser import extract_transactions

logger = get_logger(__name__)

MAX_UPLOAD_BYTES = 5_000_000  # 5MB

app = FastAPI(title="Advanzia statement to CSV", version="0.1.0")


@app.get("/health")
def health() -> dict:
    return {"ok": True}


@app.post("/convert")
async def convert_statement(file: UploadFile = File(...), swap_sign: bool = False) -> Response:
    """Convert one uploaded statement PDF and return the transactions as CSV."""
    if not (file.filename or "").lower().endswith(PDF_SUFFIX):
        raise HTTPException(status_code=400, detail="Only .pdf files are supported")

    data = await file.read()
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large (max 5MB)")

    with tempfile.TemporaryDirectory() as tmpdir:
        tmp_path = Path(tmpdir) / f"upload{PDF_SUFFIX}"
        tmp_path.write_bytes(data)
        try:
            txns = extract_transactions(tmp_path)
        except StatementLoadError as e:
            raise HTTPException(status_code=422, detail=f"Failed to parse PDF: {e.reason}") from e

    if not txns:
        raise HTTPException(status_code=422, detail=f"No transactions found in {file.filename}")

    if swap_sign:
        txns = [t.swapped() for t in txns]

    logger.info("Converted %d transactions from upload %s", len(txns), file.filename)
    stem = Path(file.filename).stem
    return Response(
        content=transactions_to_csv(txns),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{stem}.csv"'},
    )


def main() -> None:
    """
    Local dev runner. Prefer: `uvicorn advanzia2csv.api:app --reload --port 8000`
    """
    os.execvp("uvicorn", ["uvicorn", "advanzia2csv.api:app", "--port", "8000"])
