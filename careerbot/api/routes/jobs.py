"""Job scraping endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Request

from careerbot.api.deps import Services, get_services
from careerbot.api.limiter import limiter, per_window
from careerbot.api.schemas import ApiResponse, JobScrapeData, JobScrapeRequest
from careerbot.utils.sanitize import sanitize_input

router = APIRouter()


@router.post("/scrape-jobs", response_model=ApiResponse, response_model_exclude_none=True)
@limiter.limit(per_window(5))
async def scrape_jobs(
    request: Request,
    data: JobScrapeRequest,
    services: Services = Depends(get_services),
):
    """Scrape LinkedIn jobs and index them."""
    if not sanitize_input(data.keywords):
        raise HTTPException(status_code=400, detail="Job keywords are required")

    services.require("APIFY_API_TOKEN", "APIFY_ACTOR_ID")

    result = await services.ingestion.scrape_and_index(data.keywords, data.location, data.count)
    return ApiResponse(
        success=True,
        data=JobScrapeData(
            jobs=result.jobs,
            total_jobs=result.scraped,
            placeholder=result.placeholder,
            indexed=result.indexed,
        ),
    )
