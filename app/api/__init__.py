# API module - one router per resource, mounted together
from fastapi import APIRouter

from .endpoints import router as claims_router, fund_router, dao_router, get_ledger, get_call_context

router = APIRouter()
router.include_router(claims_router)
router.include_router(fund_router)
router.include_router(dao_router)

__all__ = ["router", "get_ledger", "get_call_context"]
