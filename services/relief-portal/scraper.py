"""Currency-total extraction from rendered GoFundMe widget markup.

This is a regex sweep over page text, not an HTML parser. Every
currency-prefixed number is collected and the two largest are labeled
goal and raised.

Known limitation: the labeling assumes the page's two largest
currency-like numbers are the goal and the amount raised. A larger
unrelated figure (share counts, a date that happens to follow a currency
sign) is picked up as the goal and cannot be detected here.
"""

import logging
import math
import re

from models import ExtractedToken, TotalsResult

logger = logging.getLogger(__name__)

NO_TOTALS_MESSAGE = "No totals found"

# Rendered widgets may use these as thousands separators
_SPACE_VARIANTS = ("\u202f", "\u00a0")

TOKEN_PATTERN = re.compile(r"([$£€])\s?([0-9.,]+)")


def normalize_spaces(text: str) -> str:
    for variant in _SPACE_VARIANTS:
        text = text.replace(variant, " ")
    return text


def parse_amount(raw: str) -> float | None:
    """Parse a digit/comma/period run, or return None if it is not a finite number.

    A run with no digits or periods left (e.g. a bare comma) reads as 0.
    """
    cleaned = re.sub(r"[^0-9.]", "", raw.replace(",", ""))
    if not cleaned:
        return 0.0
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def extract_tokens(html: str) -> list[ExtractedToken]:
    """Return every currency-prefixed numeric token in the text, in document order."""
    if not html:
        return []

    tokens = []
    for match in TOKEN_PATTERN.finditer(normalize_spaces(html)):
        symbol, raw = match.group(1), match.group(2)
        value = parse_amount(raw)
        if value is None:
            continue
        tokens.append(ExtractedToken(currency_symbol=symbol, raw_text=raw, numeric_value=value))
    return tokens


def label_totals(tokens: list[ExtractedToken]) -> TotalsResult:
    """Pick goal and raised from a non-empty token list.

    goal is the largest value. raised is the first value strictly below it,
    falling back to the second-largest token and then to the goal itself.
    """
    if not tokens:
        raise ValueError("label_totals requires at least one token")

    ordered = sorted(tokens, key=lambda t: t.numeric_value, reverse=True)
    top = ordered[0]
    goal = top.numeric_value

    smaller = next((t for t in ordered if t.numeric_value < goal), None)
    if smaller is None:
        smaller = ordered[1] if len(ordered) > 1 else top
    raised = smaller.numeric_value

    if raised > goal:
        raised, goal = goal, raised

    return TotalsResult(
        success=True,
        goal=goal,
        raised=raised,
        currency_symbol=top.currency_symbol,
    )


def extract_totals(html: str) -> TotalsResult:
    """Run extraction and labeling on page text. Pure function of its input."""
    tokens = extract_tokens(html)
    if not tokens:
        return TotalsResult(success=False, error_message=NO_TOTALS_MESSAGE)

    logger.debug("Found %d currency token(s)", len(tokens))
    return label_totals(tokens)
