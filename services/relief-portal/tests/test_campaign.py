"""Tests for campaign config loading, theming and money formatting."""

import json
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).parent.parent))

from campaign import DEFAULT_CAMPAIGN, load_campaign
from presentation import build_theme, format_money


class TestLoadCampaign:
    def test_defaults_without_path(self):
        assert load_campaign("") is DEFAULT_CAMPAIGN

    def test_loads_json_file(self, tmp_path: Path):
        data = DEFAULT_CAMPAIGN.model_dump()
        data["cause"]["goal"] = 12000
        data["brand"]["primary"] = "#112233"
        path = tmp_path / "campaign.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        campaign = load_campaign(str(path))
        assert campaign.cause.goal == 12000
        assert campaign.brand.primary == "#112233"
        assert len(campaign.prizes) == len(DEFAULT_CAMPAIGN.prizes)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_campaign(str(tmp_path / "nope.json"))

    def test_invalid_content_raises(self, tmp_path: Path):
        path = tmp_path / "campaign.json"
        path.write_text('{"brand": {"name": "x"}}', encoding="utf-8")
        with pytest.raises(ValidationError):
            load_campaign(str(path))

    def test_read_only_after_load(self):
        with pytest.raises(ValidationError):
            DEFAULT_CAMPAIGN.cause.goal = 1


class TestTheme:
    def test_css_variables_from_brand(self):
        theme = build_theme(DEFAULT_CAMPAIGN.brand)
        assert theme.css_variables() == {"--hunter": "#355e3b", "--gold": "#d4af37"}
        assert theme.style_block() == ":root { --hunter: #355e3b; --gold: #d4af37; }"


class TestFormatMoney:
    def test_usd(self):
        assert format_money(7000) == "$7,000.00"

    def test_other_currencies(self):
        assert format_money(1234.5, "GBP") == "£1,234.50"
        assert format_money(99, "eur") == "€99.00"

    def test_unknown_code(self):
        assert format_money(10, "CAD") == "CAD 10.00"

    def test_negative(self):
        assert format_money(-5) == "-$5.00"

    def test_non_numeric_passthrough(self):
        assert format_money("$TBC") == "$TBC"
        assert format_money(None) is None
