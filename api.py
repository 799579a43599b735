import logging
from typing import Optional

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from errors import MethodNotAllowed, TherapistLookupError
from schemas import ErrorResponse
from service import get_npi_client, lookup_therapists, validate_zip

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Therapist Lookup API")

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@app.exception_handler(TherapistLookupError)
async def lookup_error_handler(request: Request, exc: TherapistLookupError):
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(exclude_none=True),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Methods outside ALL_METHODS are rejected by the router before reaching the route
    if exc.status_code == 405:
        return await lookup_error_handler(request, MethodNotAllowed())
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.api_route("/api/therapists", methods=ALL_METHODS)
async def therapists(
    request: Request,
    zip: Optional[str] = None,
    focus: Optional[str] = None,
    client: httpx.AsyncClient = Depends(get_npi_client),
):
    """Mental-health providers near a ZIP, ranked against an optional focus."""
    if request.method != "GET":
        raise MethodNotAllowed()

    zip_code = validate_zip(zip)

    try:
        result = await lookup_therapists(zip_code, focus, client=client)
    except Exception as e:
        logger.exception("[ERROR] Therapist lookup failed for zip=%s", zip_code)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal error", detail=str(e)).model_dump(),
        )

    return JSONResponse(
        status_code=200,
        content=result.model_dump(),
        headers={"Access-Control-Allow-Origin": "*"},
    )


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "npi_base_url": settings.NPI_BASE_URL,
        "npi_api_version": settings.NPI_API_VERSION,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
