"""FastAPI entry point for the payroll application."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response

from app import __version__
from app.config import LOG_FORMAT, LOG_LEVEL
from app.database import init_db
from app.routers import payroll

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    yield


app = FastAPI(title="Vacation Payroll", version=__version__, lifespan=lifespan)

app.include_router(payroll.router)


@app.get("/health")
def health() -> Response:
    """Simple health endpoint for load balancers and platform checks."""
    return Response(content='{"status":"ok"}', media_type="application/json")

