from fastapi import APIRouter

from paybridge.api.v1.routers import paymongo as paymongo_router
from paybridge.api.v1.routers import payment_status as payment_status_router

router = APIRouter()

# webhook routes
router.include_router(paymongo_router.router)

# POS-facing routes
router.include_router(payment_status_router.router)
