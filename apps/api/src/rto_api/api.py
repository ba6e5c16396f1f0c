from fastapi import APIRouter

from rto_api.modules.twilio_settings import router as twilio_settings_router
from rto_api.modules.usi import router as usi_router
from rto_api.modules.whatsapp import router as whatsapp_router

api_router = APIRouter()

api_router.include_router(usi_router, prefix="/usi", tags=["USI"])

api_router.include_router(
    twilio_settings_router,
    prefix="/rtos/{rto_id}/twilio",
    tags=["Settings - Twilio"],
)

api_router.include_router(
    whatsapp_router,
    prefix="/rtos/{rto_id}/whatsapp",
    tags=["Communications - WhatsApp"],
)
