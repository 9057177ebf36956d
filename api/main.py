import logging
import os
from typing import Any, Dict, List, Union

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from api.schemas import ErrorResponse, GeometryResponse
from engine.errors import GeometryLookupError
from engine.geometry_lookup import GeometryLookup
from reports.comparison_map import ComparisonMapSession
from reports.pages import build_error_page, build_home_page


logging.basicConfig(
    level=os.getenv("GEOCOMPARE_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _cors_origins() -> List[str]:
    raw = os.getenv("GEOCOMPARE_CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


app = FastAPI(
    title="GeoJSON Compare API",
    description="Looks up old/new GeoJSON geometries by UUID and renders them on a comparison map.",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Single lookup instance for all requests; the data file is re-read per lookup
lookup_service = GeometryLookup()


@app.get("/health", tags=["system"])
def health_check() -> Dict[str, Any]:
    """
    Simple health check endpoint.
    """
    return {"status": "ok", "message": "GeoJSON Compare API is running."}


@app.get(
    "/api/get-geometries/{uuid}",
    response_model=GeometryResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    tags=["geometries"],
)
def get_geometries(uuid: str) -> Union[GeometryResponse, JSONResponse]:
    """
    Return the old/new GeoJSON pair stored for `uuid`.

    Lookup failures are answered as {"error": ...} with their status code;
    anything unexpected becomes a 500.
    """
    try:
        record = lookup_service.lookup(uuid)
    except GeometryLookupError as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except Exception:
        logger.exception("Error reading geometries for UUID %s", uuid)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

    return GeometryResponse(
        uuid=record["uuid"],
        oldGeojson=record["old_geojson"],
        newGeojson=record["new_geojson"],
    )


@app.get("/", response_class=HTMLResponse, tags=["viewer"])
def home_page() -> HTMLResponse:
    return HTMLResponse(build_home_page())


@app.get("/compare/{uuid}", response_class=HTMLResponse, tags=["viewer"])
def compare_page(uuid: str) -> HTMLResponse:
    """
    Comparison viewer: old geometry in red, new geometry in blue.
    """
    try:
        record = lookup_service.lookup(uuid)

        with ComparisonMapSession() as session:
            session.show(record["old_geojson"], record["new_geojson"])
            page = session.render(title="GeoJSON Comparison", subtitle=f"UUID: {uuid}")

    except GeometryLookupError as e:
        return HTMLResponse(build_error_page(e.message, uuid), status_code=e.status_code)
    except Exception:
        logger.exception("Error rendering comparison for UUID %s", uuid)
        return HTMLResponse(build_error_page(INTERNAL_ERROR_MESSAGE, uuid), status_code=500)

    return HTMLResponse(page)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("GEOCOMPARE_HOST", "127.0.0.1"),
        port=int(os.getenv("GEOCOMPARE_PORT", "8000")),
    )
