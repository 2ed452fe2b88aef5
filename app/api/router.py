from fastapi import APIRouter

from app.domains.clinic_booking.api.routes import router as clinic_booking_router

api_router = APIRouter()

# API routes (all have the API_V1_STR prefix from the app factory)
api_router.include_router(clinic_booking_router)
