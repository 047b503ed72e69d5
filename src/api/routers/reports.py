import asyncio
import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.backend import BackendAPI
from api.dependencies import get_backend
from api.metrics import REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS
from spark_ai.errors import MissingFieldsError
from spark_ai.models import MonthlyReportIn

router = APIRouter()
logger = logging.getLogger(__name__)

ENDPOINT = "/api/monthly-report"


@router.post(ENDPOINT)
async def monthly_report(
    payload: MonthlyReportIn,
    backend: BackendAPI = Depends(get_backend),
):
    """
    Role statistics and keywords for a month of tasks, plus the model's summary.
    Unlike /api/analyze-task there is no fallback: any failure returns only an error.
    """
    start = time.time()
    try:
        report = await asyncio.to_thread(backend.monthly_report, payload)
        body = report.to_payload()
    except MissingFieldsError as e:
        REQUESTS_TOTAL.labels(endpoint=ENDPOINT, status="invalid").inc()
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.exception(f"Error generating monthly report: {e}")
        REQUESTS_TOTAL.labels(endpoint=ENDPOINT, status="error").inc()
        return JSONResponse(status_code=500, content={"error": "Failed to generate report"})
    finally:
        REQUEST_LATENCY_SECONDS.labels(endpoint=ENDPOINT).observe(time.time() - start)

    REQUESTS_TOTAL.labels(endpoint=ENDPOINT, status="ok").inc()
    return body
