# =============================================================================
# tests/test_catalog.py - Product Catalog Tests
# =============================================================================
# Tests for the listing passes (filter, sort, paginate) and CatalogService.
# Supabase is mocked; the pure passes run on the sample products fixture.
#
# Run with: pytest tests/test_catalog.py -v
# =============================================================================

from unittest.mock import patch

import pytest

from app.exceptions import ProductNotFoundError
from core.models.product import ProductFilters, SortOption
from core.services.catalog_service import (
    HEALTH_CONDITIONS,
    LIFESTYLE_CATEGORIES,
    CatalogService,
    filter_products,
    list_categories,
    paginate,
    sort_products,
)


def ids(products):
    return [p.id for p in products]


# =============================================================================
# Filtering
# =============================================================================

class TestFilterProducts:
    """Tests for filter_products."""

    def test_no_filters_keeps_everything(self, products):
        assert ids(filter_products(products, ProductFilters())) == ["1", "2", "3", "4"]

    def test_category_all_keeps_everything(self, products):
        result = filter_products(products, ProductFilters(category="All"))
        assert len(result) == 4

    def test_category_is_case_insensitive(self, products):
        result = filter_products(products, ProductFilters(category="ayurvedic"))
        assert ids(result) == ["1", "2"]

    def test_age_group(self, products):
        result = filter_products(products, ProductFilters(age_group="Adults"))
        assert ids(result) == ["1", "4"]

    def test_benefit_substring(self, products):
        result = filter_products(products, ProductFilters(benefit="IMMUN"))
        assert ids(result) == ["3"]

    def test_condition_slug_matches_lifestyle_problem(self, products):
        """'sleep-issues' matches the stored 'Sleep Issues'."""
        result = filter_products(products, ProductFilters(condition="sleep-issues"))
        assert ids(result) == ["1"]

    def test_condition_single_word(self, products):
        result = filter_products(products, ProductFilters(condition="inflammation"))
        assert ids(result) == ["2"]

    def test_search_matches_name_and_description(self, products):
        result = filter_products(products, ProductFilters(search="Brahmi"))
        assert ids(result) == ["4"]

    def test_search_matches_category(self, products):
        result = filter_products(products, ProductFilters(search="herbal"))
        assert ids(result) == ["3", "4"]

    def test_search_matches_benefits(self, products):
        result = filter_products(products, ProductFilters(search="mobility"))
        assert ids(result) == ["2"]

    def test_blank_search_is_ignored(self, products):
        result = filter_products(products, ProductFilters(search="   "))
        assert len(result) == 4

    def test_featured_flag(self, products):
        assert ids(filter_products(products, ProductFilters(featured=True))) == ["1", "3"]
        assert ids(filter_products(products, ProductFilters(featured=False))) == ["2", "4"]

    def test_filters_combine(self, products):
        result = filter_products(products, ProductFilters(category="Herbal", featured=True))
        assert ids(result) == ["3"]

    def test_no_match_returns_empty_list(self, products):
        assert filter_products(products, ProductFilters(search="chocolate")) == []

    def test_input_not_mutated(self, products):
        original = list(products)
        filter_products(products, ProductFilters(category="Herbal"))
        assert products == original


# =============================================================================
# Sorting
# =============================================================================

class TestSortProducts:
    """Tests for sort_products."""

    def test_name_is_case_insensitive(self, products):
        assert ids(sort_products(products, "name")) == ["1", "4", "3", "2"]

    def test_newest_puts_undated_last(self, products):
        assert ids(sort_products(products, SortOption.NEWEST)) == ["1", "4", "2", "3"]

    def test_oldest_puts_undated_last(self, products):
        assert ids(sort_products(products, "oldest")) == ["2", "4", "1", "3"]

    def test_featured_first_then_name(self, products):
        assert ids(sort_products(products, "featured")) == ["1", "3", "4", "2"]

    def test_price_low(self, products):
        assert ids(sort_products(products, "price_low")) == ["2", "1", "4", "3"]

    def test_price_high(self, products):
        assert ids(sort_products(products, "price_high")) == ["4", "1", "2", "3"]

    def test_unknown_key_falls_back_to_name(self, products):
        assert ids(sort_products(products, "popularity")) == ids(sort_products(products, "name"))

    def test_does_not_mutate_input(self, products):
        original_ids = ids(products)
        sort_products(products, "price_high")
        assert ids(products) == original_ids


# =============================================================================
# Pagination
# =============================================================================

class TestPaginate:
    """Tests for paginate."""

    def test_first_page(self):
        page = paginate(list(range(30)), page=1, page_size=12)

        assert page.items == list(range(12))
        assert page.total == 30
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_previous is False

    def test_last_partial_page(self):
        page = paginate(list(range(30)), page=3, page_size=12)

        assert page.items == list(range(24, 30))
        assert page.has_next is False
        assert page.has_previous is True

    def test_page_past_end_is_empty(self):
        page = paginate(list(range(30)), page=5, page_size=12)

        assert page.items == []
        assert page.total == 30
        assert page.total_pages == 3

    def test_empty_list(self):
        page = paginate([], page=1, page_size=12)

        assert page.items == []
        assert page.total_pages == 0
        assert page.has_next is False

    @pytest.mark.parametrize("page,page_size", [(0, 12), (1, 0), (-1, 5)])
    def test_invalid_arguments(self, page, page_size):
        with pytest.raises(ValueError):
            paginate([1, 2, 3], page=page, page_size=page_size)


class TestListCategories:

    def test_all_first_then_first_seen_order(self, products):
        assert list_categories(products) == ["All", "Ayurvedic", "Herbal"]

    def test_case_variants_listed_once(self, products):
        products[1].category = "ayurvedic "
        products[3].category = "HERBAL"
        assert list_categories(products) == ["All", "Ayurvedic", "Herbal"]

    def test_empty(self):
        assert list_categories([]) == ["All"]


class TestFacets:

    def test_health_conditions(self):
        slugs = [f.slug for f in HEALTH_CONDITIONS]
        assert slugs == [
            "immunity", "cognitive", "sleep", "heart",
            "stress", "inflammation", "digestion", "energy",
        ]

    def test_lifestyle_categories(self):
        slugs = [f.slug for f in LIFESTYLE_CATEGORIES]
        assert slugs == [
            "joint-pain", "inflammation", "low-immunity",
            "stress", "fatigue", "sleep-issues",
        ]


# =============================================================================
# CatalogService
# =============================================================================

class TestCatalogService:
    """Tests for CatalogService with Supabase mocked."""

    def test_browse_products_filters_sorts_and_pages(self, product_rows):
        with patch("core.services.catalog_service.SupabaseClient") as mock:
            mock.fetch_products.return_value = product_rows

            page = CatalogService.browse_products(
                ProductFilters(category="Ayurvedic"),
                sort_by="price_low",
                page=1,
                page_size=1,
            )

        assert page.total == 2
        assert page.total_pages == 2
        assert [item.id for item in page.items] == ["2"]
        assert page.has_next is True
        assert page.sort_by == SortOption.PRICE_LOW
        assert page.categories == ["All", "Ayurvedic", "Herbal"]

    def test_browse_products_pushes_down_featured_only(self, product_rows):
        with patch("core.services.catalog_service.SupabaseClient") as mock:
            mock.fetch_products.return_value = product_rows

            CatalogService.browse_products(ProductFilters(featured=True, search="calm"))

        mock.fetch_products.assert_called_once_with({"is_featured": True})

    def test_browse_products_unknown_sort_reports_name(self, product_rows):
        with patch("core.services.catalog_service.SupabaseClient") as mock:
            mock.fetch_products.return_value = product_rows

            page = CatalogService.browse_products(ProductFilters(), sort_by="bogus")

        assert page.sort_by == SortOption.NAME

    def test_browse_products_empty_catalog(self):
        with patch("core.services.catalog_service.SupabaseClient") as mock:
            mock.fetch_products.return_value = []

            page = CatalogService.browse_products(ProductFilters())

        assert page.items == []
        assert page.total == 0
        assert page.categories == ["All"]

    def test_summary_card_fields(self, product_rows):
        with patch("core.services.catalog_service.SupabaseClient") as mock:
            mock.fetch_products.return_value = product_rows[:1]

            page = CatalogService.browse_products(ProductFilters())

        card = page.items[0]
        assert card.image == "https://cdn.example.com/ashwagandha.jpg"
        assert card.benefits == ["Reduces stress", "Improves sleep quality"]

    def test_get_product_not_found(self):
        with patch("core.services.catalog_service.SupabaseClient") as mock:
            mock.fetch_product.return_value = None

            with pytest.raises(ProductNotFoundError) as exc_info:
                CatalogService.get_product("999")

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "PRODUCT_NOT_FOUND"

    def test_get_product_detail_excludes_itself_from_related(self, product_rows):
        with patch("core.services.catalog_service.SupabaseClient") as mock:
            mock.fetch_product.return_value = product_rows[0]
            mock.fetch_products.return_value = product_rows[:2]

            detail = CatalogService.get_product_detail("1")

        mock.fetch_products.assert_called_once_with({"category": "Ayurvedic"})
        assert detail.product.id == "1"
        assert [p.id for p in detail.related] == ["2"]

    def test_related_products_without_category(self, product_rows):
        row = dict(product_rows[0], category=None)
        with patch("core.services.catalog_service.SupabaseClient") as mock:
            mock.fetch_product.return_value = row

            detail = CatalogService.get_product_detail("1")

        mock.fetch_products.assert_not_called()
        assert detail.related == []
