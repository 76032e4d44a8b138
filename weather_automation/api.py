"""HTTP trigger API so an external cron can start runs over HTTP."""

import hmac
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel

from . import config
from .domain import Condition
from .errors import DispatchError, FetchError
from .handlers import Runtime, get_runtime
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="weather_automation/api")


def require_api_key(x_api_key: str | None = Header(default=None)):
    """Validate the X-API-Key header against the configured trigger key."""
    expected = config.settings.trigger_api_key
    if not expected:
        logger.debug("No trigger API key configured; allowing all requests")
        return

    if not x_api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if not hmac.compare_digest(str(x_api_key), str(expected)):
        logger.debug("Invalid API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])


class AutomationRequest(BaseModel):
    """Optional override for the simulated condition."""
    condition: Optional[Condition] = None


class SummaryResponse(BaseModel):
    """Result of one daily summary run."""
    ok: bool
    message: Optional[str] = None
    count: Optional[int] = None
    condition: Optional[Condition] = None
    action: Optional[str] = None
    detail: Optional[str] = None


class AutomationResponse(BaseModel):
    """Result of one automation run."""
    statusCode: int
    condition: Condition
    action: str
    detail: str
    message: str


def _bad_gateway(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


@router.post("/runs/daily-summary", response_model=SummaryResponse, response_model_exclude_none=True)
def run_daily_summary(runtime: Runtime = Depends(get_runtime)) -> SummaryResponse:
    """Run the daily forecast summary once."""
    try:
        result = runtime.daily_summary_job().run(config.settings.run_config())
    except (FetchError, DispatchError) as exc:
        logger.error("Daily summary failed: %s", exc)
        raise _bad_gateway(exc) from exc
    return SummaryResponse(**result)


@router.post("/runs/automation", response_model=AutomationResponse)
def run_automation(
    req: AutomationRequest | None = None,
    runtime: Runtime = Depends(get_runtime),
) -> AutomationResponse:
    """Run the automation simulation once, optionally forcing the condition."""
    event = {"condition": req.condition.value} if req and req.condition else {}
    try:
        result = runtime.automation_job().run(config.settings.run_config(), event)
    except DispatchError as exc:
        logger.error("Automation dispatch failed: %s", exc)
        raise _bad_gateway(exc) from exc
    return AutomationResponse(**result)
