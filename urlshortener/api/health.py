from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from urlshortener.db.Connection import database

router = APIRouter(tags=["health"])


@router.get("/api/v1/ping", response_class=PlainTextResponse)
def ping():
    return "pong"


# simple liveness
@router.get("/health")
def health():
    return {"status": "ok", "service": "url-shortener"}


# readiness: check DB connectivity
@router.get("/ready")
def readiness():
    db_ok = database.verify_database_connection()
    return {"ready": db_ok, "details": {"db": "ok" if db_ok else "error"}}
