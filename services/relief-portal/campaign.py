"""Static campaign content: cause, prizes, past campaigns, links and brand.

Loaded once at startup and read-only afterwards. The built-in defaults can
be replaced by a JSON file named by CAMPAIGN_CONFIG_PATH.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Totals(_Frozen):
    amount: float = 0
    currency: str = "USD"


class Brand(_Frozen):
    name: str
    primary: str = "#355e3b"
    accent: str = "#d4af37"


class GoFundMe(_Frozen):
    url: str
    embed_url: str


class Form(_Frozen):
    url: str


class Cause(_Frozen):
    name: str
    title: str
    summary: str
    image: str = ""
    hero_image: str = ""
    impact: tuple[str, ...] = ()
    goal: float = 0
    raised: float = 0
    draw_iso: str = ""


class Prize(_Frozen):
    name: str
    by: str
    details: str
    value: str = ""


class PastCampaign(_Frozen):
    name: str
    total: float
    date: str
    image: str = ""


class PageMeta(_Frozen):
    title: str
    description: str
    og_title: str
    og_description: str
    og_image: str = ""
    og_image_alt: str = ""


class CampaignConfig(_Frozen):
    totals: Totals = Field(default_factory=Totals)
    brand: Brand
    gofundme: GoFundMe
    form: Form
    cause: Cause
    prizes: tuple[Prize, ...] = ()
    past: tuple[PastCampaign, ...] = ()
    page: PageMeta


DEFAULT_CAMPAIGN = CampaignConfig(
    totals=Totals(amount=0, currency="USD"),
    brand=Brand(name="Inkbound × Ash B", primary="#355e3b", accent="#d4af37"),
    gofundme=GoFundMe(
        url="https://gofund.me/b0a31fc33",
        embed_url="https://www.gofundme.com/f/donate-to-restore-terrahs-independence/widget/large",
    ),
    form=Form(url="https://forms.gle/fja1KcQQ2mJc38Mx8"),
    cause=Cause(
        name="Current Creative — Community Relief",
        title="Support Our Featured Indie Creator",
        summary=(
            "We’re rallying the community to cover urgent costs so this member of the "
            "Indie Community can stay safe, stable, and keep creating."
        ),
        image="https://images.unsplash.com/photo-1516979187457-637abb4f9353?q=80&w=1974&auto=format&fit=crop",
        hero_image="https://images.unsplash.com/photo-1512820790803-83ca734da794?q=80&w=1974&auto=format&fit=crop",
        impact=(
            "Covers immediate essentials (rent, groceries, utilities)",
            "Provides recovery time to get back on their feet",
            "Keeps indie work moving forward",
        ),
        goal=7000,
        raised=0,
        draw_iso="2025-10-20T20:00:00Z",
    ),
    prizes=(
        Prize(
            name="Custom Character Art Voucher",
            by="Ash B",
            details="One fully rendered character portrait (digital)",
            value="$TBC value",
        ),
        Prize(
            name="Website Audit or Mini Build",
            by="Inkbound (Amanda)",
            details="Audit + action plan, or a 1–3 page mini-build",
            value="€TBC value",
        ),
        Prize(
            name="Editing Consultation",
            by="Partner Editor",
            details="1-hour developmental consultation via Zoom",
            value="$TBC value",
        ),
    ),
    past=(
        PastCampaign(
            name="A", total=4200, date="2025-08-12",
            image="https://images.unsplash.com/photo-1519681393784-d120267933ba?q=80&w=1974&auto=format&fit=crop",
        ),
        PastCampaign(
            name="B", total=3100, date="2025-06-03",
            image="https://images.unsplash.com/photo-1455884981818-54cb785db6fc?q=80&w=1974&auto=format&fit=crop",
        ),
        PastCampaign(
            name="C", total=5200, date="2025-03-21",
            image="https://images.unsplash.com/photo-1495446815901-a7297e633e8d?q=80&w=1974&auto=format&fit=crop",
        ),
    ),
    page=PageMeta(
        title="Inkbound × Ash B — Indie Relief Portal",
        description=(
            "A transparent, digital fundraiser hub for indie creators. Donate via GoFundMe, "
            "confirm your entry, and see the impact grow."
        ),
        og_title="Indie Relief Portal — Inkbound × Ash B",
        og_description=(
            "Support indie creators fast and transparently. Donate on GoFundMe, "
            "confirm your entry, see live totals."
        ),
        og_image="https://inkboundsociety.com/og/indie-relief-portal.png",
        og_image_alt="Indie Relief Portal banner",
    ),
)


def load_campaign(path: str = "") -> CampaignConfig:
    """Return the campaign config from a JSON file, or the built-in defaults.

    A missing or invalid file raises; the service should not start with
    half-loaded content.
    """
    if not path:
        logger.info("Using built-in campaign config")
        return DEFAULT_CAMPAIGN

    raw = Path(path).read_text(encoding="utf-8")
    campaign = CampaignConfig.model_validate_json(raw)
    logger.info("Loaded campaign config from %s (%s)", path, campaign.cause.name)
    return campaign
