import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from signal_bot import SERVICE_NAME, __version__
from signal_bot.api.models import GenerateSignalRequest
from signal_bot.config import DEFAULT_ASSET
from signal_bot.controllers.signal_controller import SignalController
from signal_bot.exceptions import SignalBotError

logger = logging.getLogger("api")

router = APIRouter()


def get_signal_controller(request: Request) -> SignalController:
    return request.app.state.signal_controller


@router.get("/")
async def health():
    return {"status": "Online", "service": SERVICE_NAME, "version": __version__}


@router.post("/api/generate-signal")
async def generate_signal(
    payload: Optional[GenerateSignalRequest] = None,
    controller: SignalController = Depends(get_signal_controller),
):
    asset = payload.asset if payload and payload.asset is not None else DEFAULT_ASSET
    try:
        logger.info(f"📥 Solicitud de señal: {asset}")
        result = await controller.generate_signal(asset)
    except SignalBotError as e:
        logger.error(f"❌ Error generando señal {asset}: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
    except Exception as e:
        logger.exception(f"❌ Error inesperado generando señal {asset}")
        return JSONResponse(status_code=500, content={"error": str(e)})

    return {
        "success": True,
        "signal": result.signal.to_dict(),
        "broadcast": result.report.to_dict(),
    }
