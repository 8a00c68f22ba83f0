from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel
from typing import List, Optional
import logging
import asyncio
import re

from api.config import settings
from property_scrapers import (
    ScraperManager,
    UnsupportedSiteError,
    RenderFetchError,
    RenderTimeoutError,
    ExtractionError,
)

# Setup logging directory
settings.log_dir.mkdir(parents=True, exist_ok=True)


# Custom formatter to strip ANSI color codes from file logs
class ColorStripFormatter(logging.Formatter):
    """Formatter that strips ANSI color codes from log messages."""
    ansi_escape = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')

    def format(self, record):
        message = super().format(record)
        return self.ansi_escape.sub('', message)


# Setup logging with color support for console, stripped for file
file_handler = logging.FileHandler(settings.log_file, encoding='utf-8')
file_handler.setFormatter(ColorStripFormatter(settings.log_format))

console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter(settings.log_format))

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    handlers=[file_handler, console_handler],
    force=True  # Override any existing configuration
)

# Request-level chatter from the HTTP client and the browser driver
for noisy in ('httpx', 'httpcore', 'playwright', 'asyncio'):
    logging.getLogger(noisy).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Builds the scraper manager on startup and releases its browser on shutdown.
    """
    # Startup
    logger.info("=" * 60)
    logger.info("Property Scraper API Starting Up")
    logger.info("=" * 60)
    logger.info(f"Log file: {settings.log_file}")
    logger.info(f"CORS origins: {settings.cors_origins}")
    logger.info(
        f"Timeouts: static {settings.scraper_static_timeout}s, "
        f"headless {settings.scraper_headless_timeout}s, "
        f"browser sessions: {settings.scraper_max_browser_sessions}"
    )
    app.state.manager = ScraperManager.from_settings(settings)
    logger.info("Backend ready to accept requests")

    yield  # Application runs here

    # Shutdown
    logger.info("=" * 60)
    logger.info("Property Scraper API Shutting Down")
    logger.info("=" * 60)

    try:
        await asyncio.wait_for(app.state.manager.close(), timeout=5.0)
    except asyncio.TimeoutError:
        logger.warning("Shutdown cleanup timed out, forcing exit")
    except Exception as e:
        logger.error(f"Error during shutdown cleanup: {e}")

    logger.info("Shutdown complete")


app = FastAPI(
    title="Property Scraper API",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
# Note: allow_credentials must be False when allow_origins is ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Return empty response for favicon requests"""
    return Response(status_code=204)


# Pydantic models for API requests/responses
class ScrapeRequest(BaseModel):
    url: str


class SiteResponse(BaseModel):
    key: str
    name: str
    hosts: List[str]
    mode: str
    enabled: bool
    implemented: bool
    url: Optional[str] = None


class PropertyResponse(BaseModel):
    """Scraped listing in the shape the CRM import expects."""
    title: str
    address: str
    price: float
    type: str
    listingType: str
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    area: float
    description: str
    features: List[str]
    images: List[str]
    location: str
    yearBuilt: Optional[int] = None
    source: str
    sourceUrl: str


def get_manager(request: Request) -> ScraperManager:
    """Return the scraper manager created at startup."""
    return request.app.state.manager


# API Endpoints

@app.get("/")
async def root():
    return {"message": "Property Scraper API", "version": "1.0.0"}


@app.get("/api/sites", response_model=List[SiteResponse])
async def list_sites(manager: ScraperManager = Depends(get_manager)):
    """List supported listing sites and their render mode"""
    return manager.list_sites()


@app.post("/api/properties/scrape", response_model=PropertyResponse)
async def scrape_property(body: ScrapeRequest, manager: ScraperManager = Depends(get_manager)):
    """Scrape a single listing URL into a property record"""
    url = body.url.strip()
    if not url:
        raise HTTPException(status_code=400, detail="URL is required")

    try:
        prop = await manager.scrape_property(url)
    except UnsupportedSiteError as e:
        logger.info(f"Rejected unsupported URL: {url}")
        raise HTTPException(status_code=400, detail=str(e))
    except RenderTimeoutError as e:
        logger.warning(f"Render timed out for {url}: {e}")
        raise HTTPException(status_code=504, detail=str(e))
    except RenderFetchError as e:
        logger.warning(f"Fetch failed for {url}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except ExtractionError as e:
        logger.error(f"Extraction failed for {url}: missing {', '.join(e.missing_fields)}")
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "missing_fields": e.missing_fields}
        )

    return prop.to_dict()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        access_log=True,
        log_config=None,  # Keep the logging configured above
        timeout_keep_alive=5,
    )
