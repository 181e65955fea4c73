"""Question answering and simple job search endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from careerbot.api.deps import Services, get_services
from careerbot.api.limiter import limiter, per_window
from careerbot.api.schemas import ApiResponse, SearchJobsData, SearchJobsRequest, SimpleSearchData
from careerbot.utils.sanitize import sanitize_input

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/search-jobs", response_model=ApiResponse, response_model_exclude_none=True)
@limiter.limit(per_window(30))
async def ask_career_coach(
    request: Request,
    data: SearchJobsRequest,
    services: Services = Depends(get_services),
):
    """Answer a career question, grounding it in indexed jobs when useful."""
    if not sanitize_input(data.query):
        raise HTTPException(status_code=400, detail="Search query is required")

    services.require("GEMINI_API_KEY", "GEMINI_API_URL")

    logger.info(f"Processing user question ({len(data.chat_history)} history turns)")
    result = await services.coach.answer(
        data.query,
        profile=data.user_profile,
        history=data.chat_history,
        use_vector_search=data.use_vector_search,
    )

    return ApiResponse(
        success=True,
        data=SearchJobsData(
            jobs=result.jobs,
            ai_response=result.answer,
            total_hits=len(result.jobs),
            used_job_data=result.used_job_data,
            search_query=result.search_query,
        ),
    )


@router.get("/search-jobs", response_model=ApiResponse, response_model_exclude_none=True)
@limiter.limit(per_window(50))
async def simple_search(
    request: Request,
    q: str = Query(default="", max_length=500),
    limit: int = Query(default=20, ge=1, le=50),
    services: Services = Depends(get_services),
):
    """Plain text search; search failures surface to the caller."""
    jobs = await services.index.text_search(sanitize_input(q))
    logger.info(f"Found {len(jobs)} jobs, returning {min(len(jobs), limit)}")
    return ApiResponse(success=True, data=SimpleSearchData(jobs=jobs[:limit], total_hits=len(jobs)))
