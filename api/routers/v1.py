"""V1 API router - aggregates all versioned endpoints."""

from fastapi import APIRouter

from api.routers import evaluations, scores

router = APIRouter()

# Scoring endpoints
router.include_router(scores.router)

# Evaluation workflow endpoints
router.include_router(evaluations.router)


@router.get("/")
async def v1_root() -> dict[str, str]:
    """V1 API root endpoint."""
    return {
        "version": "1",
        "status": "active",
    }
