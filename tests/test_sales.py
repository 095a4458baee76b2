"""Tests for the sales history helpers"""

from decimal import Decimal

import pytest

from coffeepos.models.sale import Sale
from coffeepos.services.sales import (
    build_sales_page,
    filter_sales,
    paginate,
    sort_sales,
    summarize,
)


def make_sale(sale_id, total, method="cash", cashier="Ana Cruz", created_at=None):
    return Sale(
        id=sale_id,
        total=Decimal(total),
        payment_method=method,
        cashier_name=cashier,
        created_at=created_at,
    )


@pytest.fixture
def sales():
    return [
        make_sale(1, "120.00", "cash", "Ana Cruz", "2026-10-16T09:00:00Z"),
        make_sale(2, "85.50", "card", "Ben Reyes", "2026-10-17T10:30:00Z"),
        make_sale(3, "300.00", "gcash", "Ana Cruz", "2026-10-18T07:38:00Z"),
        make_sale(4, "35.00", "cash", None, None),
    ]


class TestSummary:

    def test_totals_and_average(self, sales):
        summary = summarize(sales)

        assert summary.total_revenue == Decimal("540.50")
        assert summary.total_sales == 4
        assert summary.average_sale == Decimal("135.13")

    def test_no_sales(self):
        summary = summarize([])

        assert summary.total_revenue == Decimal("0")
        assert summary.average_sale == Decimal("0")


class TestFilterAndSort:

    def test_filter_by_payment_method(self, sales):
        assert [s.id for s in filter_sales(sales, payment_method="cash")] == [1, 4]

    def test_filter_by_cashier_is_case_insensitive(self, sales):
        assert [s.id for s in filter_sales(sales, cashier="ana")] == [1, 3]

    def test_no_filters_returns_everything(self, sales):
        assert len(filter_sales(sales)) == 4

    def test_newest_first_by_default(self, sales):
        assert [s.id for s in sort_sales(sales)] == [3, 2, 1, 4]

    def test_sort_by_total_ascending(self, sales):
        assert [s.id for s in sort_sales(sales, "total", descending=False)] == [4, 2, 1, 3]

    def test_unknown_sort_field(self, sales):
        with pytest.raises(ValueError):
            sort_sales(sales, "cashier")


class TestPagination:

    def test_slices_one_based_pages(self):
        items, pages = paginate(list(range(45)), page=3, page_size=20)

        assert items == list(range(40, 45))
        assert pages == 3

    def test_page_past_the_end_is_empty(self):
        items, pages = paginate([1, 2], page=5, page_size=20)
        assert items == []
        assert pages == 1

    @pytest.mark.parametrize("page, page_size", [(0, 20), (1, 0)])
    def test_rejects_non_positive(self, page, page_size):
        with pytest.raises(ValueError):
            paginate([1], page, page_size)

    def test_page_summary_covers_filtered_set(self, sales):
        result = build_sales_page(sales, page=1, page_size=1, payment_method="cash")

        assert [s.id for s in result.sales] == [1]
        assert result.total_items == 2
        assert result.total_pages == 2
        assert result.summary.total_revenue == Decimal("155.00")
