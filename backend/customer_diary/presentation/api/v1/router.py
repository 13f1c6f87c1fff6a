"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from customer_diary.presentation.api.v1.endpoints.health import router as health_router
from customer_diary.presentation.api.v1.endpoints.diaries import router as diaries_router
from customer_diary.presentation.api.v1.endpoints.products import router as products_router
from customer_diary.presentation.api.v1.endpoints.followups import router as followups_router
from customer_diary.presentation.api.v1.endpoints.customers import router as customers_router
from customer_diary.presentation.api.v1.endpoints.staff_users import router as staff_users_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(diaries_router)
router.include_router(products_router)
router.include_router(followups_router)
router.include_router(customers_router)
router.include_router(staff_users_router)
