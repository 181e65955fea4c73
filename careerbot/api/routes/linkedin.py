"""LinkedIn profile endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from careerbot.api.deps import Services, get_services
from careerbot.api.limiter import limiter, per_window
from careerbot.api.schemas import (
    ApiResponse,
    LinkedInScrapeData,
    LinkedInScrapeRequest,
    ProfileInsightsRequest,
)
from careerbot.utils.profile_insights import analyze_profile, career_insights, format_profile_for_chat
from careerbot.utils.sanitize import sanitize_url

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/scrape-linkedin", response_model=ApiResponse, response_model_exclude_none=True)
@limiter.limit(per_window(3))
async def scrape_linkedin(
    request: Request,
    data: LinkedInScrapeRequest,
    services: Services = Depends(get_services),
):
    """Scrape a LinkedIn profile and derive career insights."""
    url = sanitize_url(data.linkedin_url)
    if not url:
        raise HTTPException(status_code=400, detail="LinkedIn URL is required")

    services.require("APIFY_API_TOKEN", "LINKEDIN_SCRAPER_ACTOR_ID")
    profile = await services.scraper.scrape_profile(url)
    logger.info(f"Successfully scraped LinkedIn profile for: {profile.full_name}")

    return ApiResponse(
        success=True,
        data=LinkedInScrapeData(
            profile=profile,
            insights=analyze_profile(profile),
            summary=format_profile_for_chat(profile) + "\n" + career_insights(profile),
        ),
    )


@router.post("/profile-insights", response_model=ApiResponse, response_model_exclude_none=True)
@limiter.limit(per_window(30))
async def profile_insights(request: Request, data: ProfileInsightsRequest):
    """Career insights for an already-scraped profile."""
    return ApiResponse(
        success=True,
        data=LinkedInScrapeData(
            profile=data.profile,
            insights=analyze_profile(data.profile),
            summary=format_profile_for_chat(data.profile) + "\n" + career_insights(data.profile),
        ),
    )
