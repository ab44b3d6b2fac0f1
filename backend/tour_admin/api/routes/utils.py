from fastapi import APIRouter

from tour_admin.api.deps import FactoryDep

router = APIRouter(tags=["utils"])


@router.get("/health")
async def health_check(factory: FactoryDep) -> dict:
    return {"status": "ok", "backend_configured": factory.configured}
