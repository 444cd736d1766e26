"""
FastAPI main application for portfolio analytics.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from portfolio_tracker.core.exceptions.portfolio import (
    ConvergenceError,
    DocumentFormatError,
    ValidationError,
)

from .routers import analytics, reports
from .schemas import ErrorResponse

app = FastAPI(
    title="Portfolio Tracker API",
    version="1.0.0",
    description="Periodic reports and return analytics over portfolio documents",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:8080",
    ],
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Accept", "Origin"],
)

app.include_router(reports.router, prefix="/api/reports", tags=["reports"])
app.include_router(analytics.router, prefix="/api/analytics", tags=["analytics"])


@app.exception_handler(DocumentFormatError)
async def document_format_error_handler(request: Request, exc: DocumentFormatError) -> JSONResponse:
    logger.warning(f"Rejected document on {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content=ErrorResponse(detail=str(exc)).model_dump())


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content=ErrorResponse(detail=str(exc)).model_dump())


@app.exception_handler(ConvergenceError)
async def convergence_error_handler(request: Request, exc: ConvergenceError) -> JSONResponse:
    logger.warning(f"XIRR did not converge on {request.url.path}: {exc}")
    return JSONResponse(status_code=409, content=ErrorResponse(detail=str(exc)).model_dump())


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint returning API information."""
    return {"message": "Portfolio Tracker API", "version": "1.0.0", "status": "running"}


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
