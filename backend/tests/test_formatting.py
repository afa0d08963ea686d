"""
Tests for tr-TR report formatting helpers.
"""

from datetime import date, datetime

import pytest

from kitchen_api.services.exports.formatting import (
    filename_date,
    format_currency,
    format_date,
    format_datetime,
    format_number,
    format_percentage,
    format_quantity,
    generate_report_id,
    get_active_allergens,
    sanitize_filename,
)


class TestNumbers:
    def test_currency_uses_turkish_separators(self):
        assert format_currency(1234.5) == "1.234,50 TL"

    def test_currency_of_none_is_dash(self):
        assert format_currency(None) == "-"

    def test_large_number(self):
        assert format_number(1234567.891) == "1.234.567,89"

    def test_percentage(self):
        assert format_percentage(30) == "%30,0"
        assert format_percentage(-12.34) == "%-12,3"

    def test_quantity_drops_trailing_zeros(self):
        assert format_quantity(2.0) == "2"
        assert format_quantity(0.25) == "0,25"
        assert format_quantity(None) == "-"

    def test_half_rounds_up(self):
        assert format_number(2.675) == "2,68"

    def test_half_rounds_up_without_decimals(self):
        assert format_number(0.5, 0) == "1"
        assert format_number(2500.5, 0) == "2.501"

    def test_quantity_has_no_grouping(self):
        assert format_quantity(1234.5) == "1234,5"
        assert format_quantity(0.125) == "0,125"


class TestDates:
    def test_format_date(self):
        assert format_date(date(2026, 10, 19)) == "19 Ekim 2026"

    def test_format_date_accepts_iso_strings(self):
        assert format_date("2026-02-03T10:00:00Z") == "3 Şubat 2026"

    def test_format_datetime(self):
        assert format_datetime(datetime(2026, 8, 1, 9, 5)) == "1 Ağustos 2026 09:05"

    def test_format_datetime_keeps_wall_time(self):
        assert format_datetime(datetime(2026, 12, 31, 23, 59)) == "31 Aralık 2026 23:59"

    def test_none_is_dash(self):
        assert format_date(None) == "-"

    def test_filename_date(self):
        assert filename_date(date(2026, 12, 31)) == "31_Aralık_2026"

    def test_report_id(self):
        assert generate_report_id(datetime(2026, 10, 19, 14, 5)) == "RPT-20261019-1405"


class TestSanitizeFilename:
    @pytest.mark.parametrize(
        "name",
        [
            'Kadıköy <Şube>: "Menü"',
            "a/b\\c|d?e*f",
            "  çok   boşluklu \t isim  ",
            "x" * 250,
            "__a__b__",
        ],
    )
    def test_idempotent_and_bounded(self, name):
        once = sanitize_filename(name)

        assert sanitize_filename(once) == once
        assert len(once) <= 100
        assert not any(ch in once for ch in '<>:"/\\|?*')

    def test_whitespace_runs_become_one_underscore(self):
        assert sanitize_filename("Ana   Yemek Menüsü") == "Ana_Yemek_Menüsü"

    def test_strips_illegal_characters(self):
        assert sanitize_filename('Rapor: "2026"') == "Rapor_2026"


class TestActiveAllergens:
    def test_labels_in_fixed_order(self):
        allergens = {"sesame": True, "gluten": True, "milk": False, "egg": True}

        assert get_active_allergens(allergens) == ["Gluten", "Yumurta", "Susam"]

    def test_all_false_is_empty(self):
        assert get_active_allergens({"gluten": False, "milk": False}) == []

    def test_none_is_empty(self):
        assert get_active_allergens(None) == []
