import unittest
from datetime import timedelta, timezone

from fastapi.templating import Jinja2Templates

from rmcatalog.core.constants import TEMPLATES_DIR
from rmcatalog.schemas.raw_material import PriceLog, RawMaterial, VendorPrice
from rmcatalog.services.detail_view import (
    detail_context,
    page_title,
    render_detail,
    show_price_logs_from_query,
)
from rmcatalog.services.raw_material_service import NOT_FOUND, DetailState

VENDOR_PANEL_VISIBLE = '<section id="vendor-prices-panel" class="tab-panel">'
VENDOR_PANEL_HIDDEN = '<section id="vendor-prices-panel" class="tab-panel" hidden>'
LOGS_PANEL_VISIBLE = '<section id="price-logs-panel" class="tab-panel">'
LOGS_PANEL_HIDDEN = '<section id="price-logs-panel" class="tab-panel" hidden>'

IST = timezone(timedelta(hours=5, minutes=30))


def make_raw_material(**overrides):
    values = {
        "_id": "rm-1",
        "code": "RM-001",
        "name": "Wheat Flour",
        "categoryId": "cat-1",
        "categoryName": "Grains",
        "subCategoryId": "sub-1",
        "subCategoryName": "Flour",
        "unitName": "Kilogram",
        "createdAt": "2024-01-02T10:00:00Z",
    }
    values.update(overrides)
    return RawMaterial.model_validate(values)


def make_vendor_price(**overrides):
    values = {
        "_id": "vp-1",
        "rawMaterialId": "rm-1",
        "vendorId": "v-1",
        "vendorName": "Sharma Traders",
        "quantity": 10,
        "unitName": "kg",
        "price": 123.5,
        "addedDate": "2024-03-05T09:00:00Z",
    }
    values.update(overrides)
    return VendorPrice.model_validate(values)


def make_price_log(**overrides):
    values = {
        "_id": "pl-1",
        "rawMaterialId": "rm-1",
        "vendorId": "v-1",
        "vendorName": "Gupta Supplies",
        "oldPrice": 40,
        "newPrice": 42.25,
        "quantity": 5,
        "unitName": "Ltr",
        "changeDate": "2024-03-05T09:00:00Z",
        "changedBy": "purchase.admin",
    }
    values.update(overrides)
    return PriceLog.model_validate(values)


class DetailViewTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    def loaded_state(self, vendor_prices=None, price_logs=None, **raw_material):
        return DetailState(
            loading=False,
            raw_material=make_raw_material(**raw_material),
            vendor_prices=vendor_prices if vendor_prices is not None else [make_vendor_price()],
            price_logs=price_logs if price_logs is not None else [make_price_log()],
        )

    def test_titles_per_state(self):
        self.assertEqual(page_title(DetailState()), "Loading...")
        self.assertEqual(page_title(DetailState(loading=False, reason=NOT_FOUND)), "Not Found")
        self.assertEqual(page_title(self.loaded_state()), "RM-001 - Wheat Flour")

    def test_layout_header_shows_title(self):
        html = render_detail(self.templates, self.loaded_state())
        self.assertIn('<header class="page-header">', html)
        self.assertIn("<h3>RM-001 - Wheat Flour</h3>", html)

    def test_loading_state(self):
        html = render_detail(self.templates, DetailState())
        self.assertIn("Loading raw material...", html)
        self.assertNotIn("vendor-prices-panel", html)

    def test_not_found_state(self):
        html = render_detail(self.templates, DetailState(loading=False, reason=NOT_FOUND))
        self.assertIn("Raw material not found", html)
        self.assertIn("Back to Raw Materials", html)
        self.assertIn('href="/raw-materials"', html)

    def test_vendor_price_renders_currency_and_unit(self):
        html = render_detail(self.templates, self.loaded_state(), tz=IST)
        self.assertIn("₹123.50 / kg", html)
        self.assertIn("Sharma Traders", html)
        self.assertIn("05/03/2024, 02:30 pm", html)

    def test_price_log_prices_use_log_unit(self):
        context = detail_context(self.loaded_state(), show_price_logs=True)
        row = context["price_log_rows"][0]
        self.assertEqual(row["old_price"], "₹40.00 / L")
        self.assertEqual(row["new_price"], "₹42.25 / L")
        self.assertEqual(row["changed_by"], "purchase.admin")

    def test_empty_vendor_prices_show_message(self):
        html = render_detail(self.templates, self.loaded_state(vendor_prices=[]))
        self.assertIn("No vendor prices recorded yet", html)

    def test_empty_price_logs_show_message(self):
        html = render_detail(self.templates, self.loaded_state(price_logs=[]), show_price_logs=True)
        self.assertIn("No price history recorded yet", html)

    def test_tab_flag_switches_visible_table(self):
        state = self.loaded_state()

        vendor_tab = render_detail(self.templates, state, show_price_logs=False)
        self.assertIn(VENDOR_PANEL_VISIBLE, vendor_tab)
        self.assertIn(LOGS_PANEL_HIDDEN, vendor_tab)

        history_tab = render_detail(self.templates, state, show_price_logs=True)
        self.assertIn(VENDOR_PANEL_HIDDEN, history_tab)
        self.assertIn(LOGS_PANEL_VISIBLE, history_tab)
        self.assertIn("Gupta Supplies", history_tab)

    def test_info_panel_optional_fields(self):
        bare = detail_context(self.loaded_state(unitName=None))
        labels = [field["label"] for field in bare["info_fields"]]
        self.assertEqual(labels, ["Category", "Sub Category", "Unit"])
        self.assertEqual(bare["info_fields"][2]["value"], "-")

        full = detail_context(
            self.loaded_state(
                hsnCode="1101",
                lastAddedPrice=38,
                lastVendorName="Sharma Traders",
                lastPriceDate="2024-02-01T04:30:00Z",
            ),
            tz=IST,
        )
        fields = {field["label"]: field for field in full["info_fields"]}
        self.assertEqual(fields["HSN Code"]["value"], "1101")
        self.assertEqual(fields["Last Price"]["value"], "₹38.00 / kg")
        self.assertEqual(fields["Last Price"]["note"], "from Sharma Traders")
        self.assertEqual(fields["Last Purchase Date"]["value"], "01/02/2024, 10:00 am")

    def test_zero_last_price_is_still_shown(self):
        context = detail_context(self.loaded_state(lastAddedPrice=0))
        labels = [field["label"] for field in context["info_fields"]]
        self.assertIn("Last Price", labels)

    def test_tab_query_value(self):
        self.assertTrue(show_price_logs_from_query("history"))
        self.assertTrue(show_price_logs_from_query(" History "))
        self.assertFalse(show_price_logs_from_query(None))
        self.assertFalse(show_price_logs_from_query("vendors"))


if __name__ == "__main__":
    unittest.main()
