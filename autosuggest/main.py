"""
FastAPI service proxying autocomplete and mapping-check queries to OpenSearch.
"""

import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from pathlib import Path

from .client import SearchClient, SearchClientError
from .config import ConfigError, load_settings
from .service import MappingCheckResult, SearchResult, autocomplete, check_mapping

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(title="Autosuggest API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Initialized lazily on first request
settings = None
search_client = None


def get_settings():
    global settings
    if settings is None:
        settings = load_settings()
    return settings


def get_search_client():
    global search_client
    if search_client is None:
        search_client = SearchClient.from_settings(get_settings())
    return search_client


@app.get("/health")
def health():
    return {"status": "healthy"}


@app.get("/")
def index():
    return FileResponse(STATIC_DIR / "index.html")


@app.get("/api/autocomplete", response_model=SearchResult, response_model_exclude_none=True)
def autocomplete_endpoint(q: str = "", debug: bool = False):
    if not q:
        raise HTTPException(status_code=400, detail="Missing 'q' parameter")

    try:
        cfg = get_settings()
        return autocomplete(
            get_search_client(),
            q,
            field=cfg.field,
            size=cfg.autocomplete_size,
            escape=cfg.escape_regex,
            debug=debug,
        )
    except ConfigError:
        logger.exception("Service configuration error")
        raise HTTPException(status_code=500, detail="Service is not configured")
    except SearchClientError:
        logger.exception(f"Autocomplete error for {q!r}")
        raise HTTPException(status_code=500, detail="Failed to fetch suggestions")


@app.get("/api/mapping-check", response_model=MappingCheckResult, response_model_exclude_none=True)
def mapping_check_endpoint(debug: bool = False):
    try:
        cfg = get_settings()
        return check_mapping(
            get_search_client(),
            field=cfg.field,
            size=cfg.mapping_check_size,
            debug=debug,
        )
    except ConfigError:
        logger.exception("Service configuration error")
        raise HTTPException(status_code=500, detail="Service is not configured")
    except SearchClientError:
        logger.exception("Mapping check error")
        raise HTTPException(status_code=500, detail="Failed to check mapping")


if __name__ == "__main__":
    import uvicorn
    cfg = get_settings()
    logger.info(f"Server starting on port {cfg.listen_port}")
    uvicorn.run(app, host="0.0.0.0", port=cfg.listen_port)
