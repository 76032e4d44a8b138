import os

import uvicorn

from weather_automation.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="trigger_api")
    if not settings.trigger_api_key:
        logger.warning("WEATHER_TRIGGER_API_KEY is not set; the trigger API accepts unauthenticated requests.")

    uvicorn.run(
        "weather_automation.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
