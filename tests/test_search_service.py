import unittest

from discovery.catalog import CatalogQuery, InMemoryCatalog
from discovery.config import Settings
from discovery.errors import ValidationError
from discovery.models import Product, VerificationStatus
from discovery.search import SearchFilters, SearchService


def _oid(n: int) -> str:
    return f"{n:024x}"


def _product(
    n: int,
    title: str,
    description: str = "",
    category: str = "handicrafts",
    price: float = 100.0,
    average: float = 0.0,
    count: int = 0,
    active: bool = True,
    status: VerificationStatus = VerificationStatus.APPROVED,
    seller: int = 1000,
) -> Product:
    return Product(
        id=_oid(n),
        title=title,
        description=description,
        price=price,
        category=category,
        seller_id=_oid(seller),
        is_active=active,
        verification_status=status,
        average_rating=average,
        review_count=count,
    )


def _marketplace() -> list[Product]:
    return [
        _product(
            1,
            "Pashmina Shawl",
            "Hand-woven shawl made from fine Himalayan goat wool",
            average=4.5,
            count=20,
        ),
        _product(
            2,
            "Wool Carpet",
            "Hand-knotted Tibetan rug for living rooms",
            average=4.0,
            count=5,
        ),
    ]


class _UnfilteredCatalog(InMemoryCatalog):
    """Catalog that ignores the predicate entirely."""

    async def find_products(self, query: CatalogQuery) -> list[Product]:
        return list(self._products.values())


class SearchServiceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.settings = Settings()
        self.service = SearchService(InMemoryCatalog(_marketplace()), settings=self.settings)

    async def test_exact_word_returns_only_matching_item(self) -> None:
        page = await self.service.search("pashmina")
        self.assertEqual([p.title.en for p in page.items], ["Pashmina Shawl"])
        self.assertEqual(page.total_count, 1)

    async def test_typo_finds_item_through_fuzzy_match(self) -> None:
        page = await self.service.search("pashmeena")
        self.assertEqual([p.title.en for p in page.items], ["Pashmina Shawl"])

    async def test_other_item_is_found_by_its_title(self) -> None:
        page = await self.service.search("carpet")
        self.assertEqual([p.title.en for p in page.items], ["Wool Carpet"])

    async def test_empty_query_returns_empty_result(self) -> None:
        page = await self.service.search("", 1, 10)
        self.assertEqual(page.items, [])
        self.assertEqual(page.total_count, 0)
        self.assertEqual(page.total_pages, 0)

    async def test_whitespace_and_punctuation_queries_return_empty_result(self) -> None:
        for query in ("   ", "\t\n", "?!...", "@#$"):
            page = await self.service.search(query, 1, 10)
            self.assertEqual(page.total_count, 0)
            self.assertEqual(page.items, [])

    async def test_special_characters_do_not_break_matching(self) -> None:
        page = await self.service.search("pashmina!!! (shawl)")
        self.assertEqual([p.title.en for p in page.items], ["Pashmina Shawl"])

    async def test_search_is_idempotent(self) -> None:
        catalog = InMemoryCatalog(
            _product(n, f"Wool Item {n}", "warm wool", average=float(n % 5), count=n)
            for n in range(1, 31)
        )
        service = SearchService(catalog, settings=self.settings)

        first = await service.search("wool", 2, 7)
        second = await service.search("wool", 2, 7)

        self.assertEqual([p.id for p in first.items], [p.id for p in second.items])
        self.assertEqual(first, second)

    async def test_ineligible_products_are_never_returned(self) -> None:
        products = _marketplace() + [
            _product(3, "Pashmina Stole", active=False),
            _product(4, "Pashmina Wrap", status=VerificationStatus.PENDING),
            _product(5, "Pashmina Scarf", status=VerificationStatus.REJECTED),
        ]
        service = SearchService(_UnfilteredCatalog(products), settings=self.settings)

        page = await service.search("pashmina")

        self.assertEqual([p.id for p in page.items], [_oid(1)])

    async def test_higher_weighted_rating_ranks_first_within_a_tier(self) -> None:
        catalog = InMemoryCatalog([
            _product(1, "Wool Carpet", average=5.0, count=1),
            _product(2, "Silk Carpet", average=4.0, count=200),
        ])
        service = SearchService(catalog, settings=self.settings)

        page = await service.search("carpet")

        self.assertEqual([p.id for p in page.items], [_oid(2), _oid(1)])


class PaginationTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        catalog = InMemoryCatalog(
            _product(n, f"Lokta Notebook {n}", "handmade paper") for n in range(1, 26)
        )
        self.service = SearchService(catalog, settings=Settings())

    async def test_pages_partition_results(self) -> None:
        pages = [await self.service.search("lokta", page, 10) for page in (1, 2, 3)]

        self.assertEqual([len(p.items) for p in pages], [10, 10, 5])
        self.assertTrue(all(p.total_count == 25 and p.total_pages == 3 for p in pages))
        ids = [item.id for p in pages for item in p.items]
        self.assertEqual(len(set(ids)), 25)
        self.assertEqual(pages[2].current_page, 3)

    async def test_page_past_the_end_is_empty_with_totals(self) -> None:
        page = await self.service.search("lokta", 4, 10)
        self.assertEqual(page.items, [])
        self.assertEqual(page.total_count, 25)
        self.assertEqual(page.total_pages, 3)
        self.assertEqual(page.current_page, 4)

    async def test_invalid_pagination_raises_validation_error(self) -> None:
        with self.assertRaises(ValidationError):
            await self.service.search("lokta", 0, 10)
        with self.assertRaises(ValidationError):
            await self.service.search("lokta", 1, 0)
        with self.assertRaises(ValidationError):
            await self.service.search("lokta", 1, 101)
        with self.assertRaises(ValidationError):
            await self.service.search("lokta", "2", 10)

    async def test_default_page_size_comes_from_settings(self) -> None:
        service = SearchService(self.service.catalog, settings=Settings(search_default_page_size=4))
        page = await service.search("lokta")
        self.assertEqual(len(page.items), 4)
        self.assertEqual(page.total_pages, 7)


class FilterTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        catalog = InMemoryCatalog([
            _product(1, "Wool Shawl", category="clothing", price=40.0, average=4.5, count=10, seller=1001),
            _product(2, "Wool Carpet", category="handicrafts", price=400.0, average=3.0, count=4, seller=1002),
            _product(3, "Wool Socks", category="clothing", price=8.0, average=2.0, count=6, seller=1001),
            _product(4, "Wool Felt Balls", category="handicrafts", price=12.0, average=4.0, count=8, seller=1002),
        ])
        self.service = SearchService(catalog, settings=Settings())

    async def test_category_filter_is_respected(self) -> None:
        page = await self.service.search("wool", filters=SearchFilters(category="clothing"))
        self.assertEqual(page.total_count, 2)
        self.assertTrue(all(p.category == "clothing" for p in page.items))

    async def test_price_range_filter(self) -> None:
        page = await self.service.search("wool", filters=SearchFilters(min_price=10, max_price=100))
        self.assertEqual(sorted(p.id for p in page.items), [_oid(1), _oid(4)])

    async def test_min_rating_filter_uses_average_rating(self) -> None:
        page = await self.service.search("wool", filters=SearchFilters(min_rating=4.0))
        self.assertEqual(sorted(p.id for p in page.items), [_oid(1), _oid(4)])

    async def test_seller_filter(self) -> None:
        page = await self.service.search("wool", filters=SearchFilters(seller_id=_oid(1001)))
        self.assertEqual(sorted(p.id for p in page.items), [_oid(1), _oid(3)])

    async def test_combined_filters_narrow_together(self) -> None:
        filters = SearchFilters(category="handicrafts", min_rating=3.5, seller_id=_oid(1002))
        page = await self.service.search("wool", filters=filters)
        self.assertEqual([p.id for p in page.items], [_oid(4)])

    async def test_inverted_price_range_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            await self.service.search("wool", filters=SearchFilters(min_price=100, max_price=10))

    async def test_out_of_range_min_rating_is_rejected(self) -> None:
        for min_rating in (-0.5, 5.5):
            with self.assertRaises(ValidationError):
                await self.service.search("wool", filters=SearchFilters(min_rating=min_rating))


class LargeCatalogTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        products = [_product(n, f"Lokta Notebook {n}", "handmade paper") for n in range(1, 601)]
        products.append(_product(999, "Pashmina Shawl", "fine goat wool"))
        self.service = SearchService(InMemoryCatalog(products), settings=Settings())

    async def test_match_late_in_a_large_catalog_is_found(self) -> None:
        page = await self.service.search("pashmina")
        self.assertEqual([p.title.en for p in page.items], ["Pashmina Shawl"])

    async def test_every_matching_product_is_counted(self) -> None:
        page = await self.service.search("lokta", 1, 100)
        self.assertEqual(page.total_count, 600)
        self.assertEqual(page.total_pages, 6)


class QueryTypeTests(unittest.IsolatedAsyncioTestCase):
    async def test_non_string_query_raises_validation_error(self) -> None:
        service = SearchService(InMemoryCatalog(_marketplace()), settings=Settings())
        for query in (123, ["pashmina"], b"pashmina"):
            with self.assertRaises(ValidationError):
                await service.search(query)

    async def test_none_query_reads_as_empty(self) -> None:
        service = SearchService(InMemoryCatalog(_marketplace()), settings=Settings())
        page = await service.search(None)
        self.assertEqual(page.total_count, 0)


if __name__ == "__main__":
    unittest.main()
