"""Job statistics endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from careerbot.api.deps import Services, get_services
from careerbot.api.limiter import limiter, per_window
from careerbot.api.schemas import ApiResponse, JobStatisticsData, JobStatisticsRequest
from careerbot.utils.sanitize import sanitize_input

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/job-statistics", response_model=ApiResponse, response_model_exclude_none=True)
@limiter.limit(per_window(10))
async def collect_job_statistics(
    request: Request,
    data: JobStatisticsRequest,
    services: Services = Depends(get_services),
):
    """Scrape fresh jobs into the index, then return index statistics."""
    if not sanitize_input(data.keywords):
        raise HTTPException(status_code=400, detail="Job keywords are required")

    services.require("APIFY_API_TOKEN", "APIFY_ACTOR_ID", "ELASTICSEARCH_URL", "ELASTICSEARCH_API_KEY")

    logger.info("Starting job scraping and statistics collection...")
    result = await services.ingestion.collect(data.keywords, data.location, data.count)

    return ApiResponse(
        success=True,
        data=JobStatisticsData(statistics=result.statistics, message=result.message),
    )


@router.get("/job-statistics", response_model=ApiResponse, response_model_exclude_none=True)
@limiter.limit(per_window(50))
async def get_job_statistics(request: Request, services: Services = Depends(get_services)):
    """Current statistics over the whole index."""
    services.require("ELASTICSEARCH_URL", "ELASTICSEARCH_API_KEY")
    statistics = await services.ingestion.statistics()
    return ApiResponse(success=True, data=JobStatisticsData(statistics=statistics))
