from datetime import date as dt_date, datetime, timezone
import csv
import logging
from io import StringIO
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Body, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.templating import Jinja2Templates

from .db import init_db
from .errors import NotFoundError, StoreError, TrackerError, ValidationError
from .logic import (
    format_rupiah,
    parse_new_transaction,
    parse_restore_payload,
    summarize,
)
from .repo import delete, insert, list_all, replace_all
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.filters["rupiah"] = format_rupiah


def _db_path(request: Request) -> Path:
    return request.app.state.settings.db_path


def _parse_id(raw: str | None) -> int:
    if not raw:
        raise ValidationError("transaction id required")
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError("transaction id must be an integer") from exc


@router.get("/", response_class=HTMLResponse)
def dashboard(request: Request):
    transactions = list_all(_db_path(request))
    return templates.TemplateResponse(
        request,
        "index.html",
        {"transactions": transactions, "summary": summarize(transactions)},
    )


@router.get("/transactions")
def list_transactions(request: Request):
    return [txn.to_dict() for txn in list_all(_db_path(request))]


@router.post("/transactions", status_code=201)
def create_transaction(request: Request, payload: Any = Body(default=None)):
    new_txn = parse_new_transaction(payload)
    txn_id = insert(_db_path(request), new_txn)
    logger.info("created %s transaction %d", new_txn.kind, txn_id)
    return {"id": txn_id, "message": "Transaction added."}


@router.delete("/transactions")
def delete_transaction(
    request: Request, txn_id: str | None = Query(default=None, alias="id")
):
    resolved_id = _parse_id(txn_id)
    if not delete(_db_path(request), resolved_id):
        raise NotFoundError()
    logger.info("deleted transaction %d", resolved_id)
    return {"message": "Transaction deleted."}


@router.put("/transactions")
def restore_transactions(request: Request, payload: Any = Body(default=None)):
    rows = parse_restore_payload(payload)
    imported = replace_all(_db_path(request), rows)
    return {
        "message": f"{imported} transactions imported and restored.",
        "imported": imported,
    }


@router.get("/transactions/summary")
def transactions_summary(request: Request):
    return summarize(list_all(_db_path(request))).to_dict()


@router.get("/transactions/export")
def export_json(request: Request):
    transactions = list_all(_db_path(request))
    body = {
        "exported_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "transactions": [txn.to_dict() for txn in transactions],
    }
    filename = f"transactions-backup-{dt_date.today().isoformat()}.json"
    return JSONResponse(
        body,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/transactions/export.csv")
def export_csv(request: Request):
    transactions = list_all(_db_path(request))

    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(["id", "date", "kind", "amount", "description"])
    for txn in transactions:
        writer.writerow([txn.id, txn.date, txn.kind, txn.amount, txn.description])

    body = "\ufeff" + output.getvalue()
    filename = f"transactions-{dt_date.today().isoformat()}.csv"
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


async def _tracker_error_handler(request: Request, exc: TrackerError):
    if isinstance(exc, StoreError):
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
    else:
        logger.warning(
            "%s %s rejected: %s", request.method, request.url.path, exc.message
        )
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning("%s %s bad body: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": "invalid request body"}, status_code=400)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    init_db(settings)

    app = FastAPI(title="Finance Tracker")
    app.state.settings = settings
    app.add_exception_handler(TrackerError, _tracker_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.include_router(router)
    return app


app = create_app()
