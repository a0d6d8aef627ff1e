"""Page-level helpers: theme setup, widget embed description, money formatting."""

from pydantic import BaseModel

from campaign import Brand

EMBED_SCRIPT_URL = "https://www.gofundme.com/static/js/embed.js"
WIDGET_MIN_HEIGHT_PX = 60

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "GBP": "£",
    "EUR": "€",
}


class Theme(BaseModel):
    """CSS custom properties applied to the document root."""

    primary: str
    accent: str

    def css_variables(self) -> dict[str, str]:
        return {"--hunter": self.primary, "--gold": self.accent}

    def style_block(self) -> str:
        body = "; ".join(f"{name}: {value}" for name, value in self.css_variables().items())
        return f":root {{ {body}; }}"


class WidgetEmbed(BaseModel):
    """Where the third-party widget loads from and how long it gets to render."""

    data_url: str
    script_url: str = EMBED_SCRIPT_URL
    watchdog_ms: int = 2500
    min_height_px: int = WIDGET_MIN_HEIGHT_PX


def build_theme(brand: Brand) -> Theme:
    """Build the theme once at startup from the campaign brand colors."""
    return Theme(primary=brand.primary, accent=brand.accent)


def format_money(amount, currency: str = "USD") -> str:
    """Format a number as en-US currency, e.g. 7000 -> "$7,000.00".

    Non-numeric values pass through unchanged.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return amount
    code = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
