"""OTP API router — HTTP surface for the generate / validate operations.

Endpoints
---------
POST /generate   → issue an OTP for a user
POST /validate   → check and consume an OTP
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from otp_service.exceptions import (
    InvalidInputError,
    OTPGenerationError,
    StoreError,
)
from otp_service.services.otp_service import OTPService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["otp"])

GENERATE_BAD_REQUEST = "userId is required (provide JSON body)"
VALIDATE_BAD_REQUEST = "userId and otp are required (provide JSON body)"

_BAD_REQUEST_DETAIL = {
    "/generate": GENERATE_BAD_REQUEST,
    "/validate": VALIDATE_BAD_REQUEST,
}


# ── Request / response models ────────────────────────────

class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class GenerateRequest(_Model):
    user_id: str = Field(..., alias="userId", min_length=1)


class GenerateResponse(_Model):
    user_id: str = Field(..., alias="userId")
    otp: str
    expires_in_seconds: int = Field(..., alias="expiresInSeconds")


class ValidateRequest(_Model):
    user_id: str = Field(..., alias="userId", min_length=1)
    otp: str = Field(..., min_length=1)


class ValidateResponse(_Model):
    valid: bool
    message: str


# ── Dependencies ─────────────────────────────────────────

def get_otp_service(request: Request) -> OTPService:
    """Return the service instance wired onto the application at startup."""
    return request.app.state.otp_service


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed or incomplete bodies as 400 rather than 422."""
    detail = _BAD_REQUEST_DETAIL.get(request.url.path, "invalid request body")
    logger.debug("Rejected %s body: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": detail})


# ── Endpoints ────────────────────────────────────────────

@router.post(
    "/generate",
    response_model=GenerateResponse,
    response_model_by_alias=True,
)
async def generate_otp(
    body: GenerateRequest, service: OTPService = Depends(get_otp_service)
):
    """Generate a new OTP for the given userId, replacing any previous one."""
    try:
        result = await service.generate(body.user_id)
    except InvalidInputError:
        raise HTTPException(status_code=400, detail=GENERATE_BAD_REQUEST)
    except OTPGenerationError:
        logger.exception("OTP generation failed for %s", body.user_id)
        raise HTTPException(status_code=500, detail="failed to generate otp")
    except StoreError:
        logger.exception("Failed to store OTP for %s", body.user_id)
        raise HTTPException(status_code=500, detail="failed to store otp")

    return GenerateResponse(
        user_id=result.user_id,
        otp=result.otp,
        expires_in_seconds=result.expires_in_seconds,
    )


@router.post(
    "/validate",
    response_model=ValidateResponse,
    response_model_by_alias=True,
)
async def validate_otp(
    body: ValidateRequest, service: OTPService = Depends(get_otp_service)
):
    """Validate an OTP for the given userId; a correct OTP is consumed."""
    try:
        result = await service.validate(body.user_id, body.otp)
    except InvalidInputError:
        raise HTTPException(status_code=400, detail=VALIDATE_BAD_REQUEST)
    except StoreError:
        logger.exception("Failed to read OTP for %s", body.user_id)
        raise HTTPException(status_code=500, detail="failed to read otp")

    return ValidateResponse(valid=result.valid, message=result.message)
