"""FastAPI relief portal: landing page plus the /api/gfm totals proxy.

The landing page renders static campaign content and the embedded GoFundMe
widget. /api/gfm fetches a widget page and guesses goal and raised amounts
from its text. Totals failures are always soft: HTTP 200 with ok=false.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from campaign import CampaignConfig, load_campaign
from config import settings
from poller import TotalsPoller, TotalsState
from presentation import CURRENCY_SYMBOLS, Theme, WidgetEmbed, build_theme, format_money
from proxy import fetch_totals
from upstream_client import UpstreamClient

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent
MISSING_URL_MESSAGE = "Missing ?url"
NO_STORE = {"Cache-Control": "no-store"}
BROWSER_POLL_INTERVAL_MS = 60000

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
templates.env.filters["money"] = format_money

_campaign: CampaignConfig | None = None
_theme: Theme | None = None
_upstream: UpstreamClient | None = None
_state: TotalsState | None = None
_poller: TotalsPoller | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load campaign content, apply the theme, start the totals poller."""
    global _campaign, _theme, _upstream, _state, _poller

    _campaign = load_campaign(settings.CAMPAIGN_CONFIG_PATH)
    _theme = build_theme(_campaign.brand)
    _upstream = UpstreamClient()
    _state = TotalsState(
        goal=_campaign.cause.goal,
        raised=_campaign.cause.raised,
        currency_symbol=CURRENCY_SYMBOLS.get(_campaign.totals.currency.upper(), "$"),
    )

    if settings.POLL_INTERVAL_SECONDS > 0:
        embed_url = _campaign.gofundme.embed_url
        upstream = _upstream
        _poller = TotalsPoller(
            fetch=lambda: fetch_totals(embed_url, upstream),
            state=_state,
            interval_seconds=settings.POLL_INTERVAL_SECONDS,
        )
        _poller.start()
    else:
        logger.info("Server-side totals polling disabled (POLL_INTERVAL_SECONDS=0)")

    yield

    if _poller is not None:
        _poller.stop()
        _poller = None
    if _upstream is not None:
        _upstream.close()
        _upstream = None


app = FastAPI(title="Indie Relief Portal", version="1.0.0", lifespan=lifespan)
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")


@app.get("/api/gfm")
def gfm_totals(request: Request):
    """Scrape goal and raised totals from the widget page given as ?url=."""
    urls = request.query_params.getlist("url")
    if len(urls) != 1 or not urls[0]:
        return JSONResponse(
            status_code=400,
            content={"ok": False, "error": MISSING_URL_MESSAGE},
            headers=NO_STORE,
        )

    url = urls[0]
    logger.info("Totals requested for %s", url)

    try:
        result = fetch_totals(url, _upstream)
    except Exception as e:
        logger.exception("Totals proxy failed for %s", url)
        return JSONResponse(
            content={"ok": False, "error": str(e) or "Unknown error"},
            headers=NO_STORE,
        )

    return JSONResponse(
        content=result.to_response().model_dump(exclude_none=True),
        headers=NO_STORE,
    )


@app.get("/")
def index(request: Request):
    """Render the landing page."""
    totals = _state.snapshot()
    widget = WidgetEmbed(
        data_url=_campaign.gofundme.embed_url,
        watchdog_ms=settings.WIDGET_WATCHDOG_MS,
    )
    page_config = {
        "apiPath": "/api/gfm",
        "embedUrl": _campaign.gofundme.embed_url,
        "currency": _campaign.totals.currency,
        "pollIntervalMs": BROWSER_POLL_INTERVAL_MS,
        "goal": totals.goal,
        "raised": totals.raised,
        "live": totals.live,
        "widget": {
            "scriptUrl": widget.script_url,
            "watchdogMs": widget.watchdog_ms,
            "minHeight": widget.min_height_px,
        },
    }
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "campaign": _campaign,
            "theme": _theme,
            "totals": totals,
            "widget": widget,
            "page_config": page_config,
            "year": datetime.now().year,
        },
    )


@app.get("/health")
async def health():
    """Return service status and the last known totals."""
    base = {
        "status": "healthy",
        "campaign": _campaign.cause.name if _campaign else None,
        "poller_running": _poller is not None and _poller.running,
    }

    if _state is not None:
        base["totals"] = _state.snapshot().model_dump(mode="json", exclude={"percent"})

    return base


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
