from fastapi import APIRouter

from shiftcal.api.holidays import holidays_router
from shiftcal.api.profile import profile_router
from shiftcal.api.reports import reports_router
from shiftcal.api.schedules import schedules_router

api_router = APIRouter()
api_router.include_router(holidays_router)
api_router.include_router(profile_router)
api_router.include_router(schedules_router)
api_router.include_router(reports_router)
