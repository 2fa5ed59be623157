"""Timebill backend entrypoint: FastAPI app, routers and domain error handling."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.api import agreements
from backend.app.api import analytics
from backend.app.api import customers
from backend.app.api import expenses
from backend.app.api import invoices
from backend.app.api import login
from backend.app.api import profile
from backend.app.api import register
from backend.app.api import time_entries
from backend.app.core.dev_seed import ensure_default_dev_owner
from backend.app.core.errors import TimebillError
from backend.app.core.logging import configure_logging
from backend.app.core.settings import get_settings
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.app_name)

origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TimebillError)
async def handle_timebill_error(request: Request, exc: TimebillError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(register.router)
app.include_router(login.router)
app.include_router(profile.router)
app.include_router(customers.router)
app.include_router(agreements.router)
app.include_router(time_entries.router)
app.include_router(expenses.router)
app.include_router(invoices.router)
app.include_router(analytics.router)


@app.get("/")
def read_root():
    return {"app": "Timebill backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def seed_default_dev_owner():
    db = SessionLocal()
    try:
        ensure_default_dev_owner(db)
    finally:
        db.close()
