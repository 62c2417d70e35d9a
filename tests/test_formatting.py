import unittest
from datetime import datetime, timedelta, timezone

from rmcatalog.core.formatting import (
    INVALID_DATE,
    format_currency,
    format_date,
    format_price,
    format_quantity,
    parse_timestamp,
    resolve_timezone,
)


class FormattingTest(unittest.TestCase):
    def test_currency_has_two_decimals(self):
        self.assertEqual(format_currency(123.5), "₹123.50")
        self.assertEqual(format_currency(0), "₹0.00")

    def test_price_appends_normalized_unit(self):
        self.assertEqual(format_price(45, "Kilogram"), "₹45.00 / kg")
        self.assertEqual(format_price(45, None), "₹45.00")
        self.assertEqual(format_price(45, "box"), "₹45.00 / box")

    def test_quantity_drops_trailing_zero(self):
        self.assertEqual(format_quantity(5.0), "5")
        self.assertEqual(format_quantity(2.5), "2.5")
        self.assertEqual(format_quantity(3), "3")

    def test_parse_timestamp_accepts_zulu_suffix(self):
        parsed = parse_timestamp("2024-03-05T09:00:00.000Z")
        self.assertEqual(parsed, datetime(2024, 3, 5, 9, 0, tzinfo=timezone.utc))

    def test_format_date_in_display_timezone(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        self.assertEqual(format_date("2024-03-05T09:00:00Z", ist), "05/03/2024, 02:30 pm")

    def test_format_date_morning_in_utc(self):
        self.assertEqual(format_date("2024-12-31T08:05:00+00:00"), "31/12/2024, 08:05 am")

    def test_midnight_and_noon_use_twelve_hour_clock(self):
        self.assertEqual(format_date("2024-06-01T00:07:00Z"), "01/06/2024, 12:07 am")
        self.assertEqual(format_date("2024-06-01T12:45:00Z"), "01/06/2024, 12:45 pm")

    def test_invalid_date(self):
        self.assertEqual(format_date("not a date"), INVALID_DATE)
        self.assertEqual(format_date(None), INVALID_DATE)

    def test_unknown_timezone_falls_back_to_utc(self):
        self.assertEqual(resolve_timezone("Nowhere/Special"), timezone.utc)
        self.assertEqual(resolve_timezone(None), timezone.utc)


if __name__ == "__main__":
    unittest.main()
