"""FastAPI application for triggering the scheduled units over HTTP."""

from fastapi import FastAPI

from .api import router as api_router

app = FastAPI(title="Weather Automation")


@app.get("/health")
def health():
    """Liveness check."""
    return {"status": "ok"}


# API routes
app.include_router(api_router, prefix="/v1")
