"""
Club module pages endpoint and helpers.
"""

from typing import TYPE_CHECKING, List, Optional

from ..types import DrippingInfo, GetPagesOptions, Page, PageType

if TYPE_CHECKING:
    from ..client import HotmartHttpClient


class PagesService:
    """Club pages operations."""

    def __init__(self, client: "HotmartHttpClient") -> None:
        self._client = client

    async def get_pages(self, options: GetPagesOptions) -> List[Page]:
        """List the pages of a module. The endpoint returns a bare JSON array."""
        response = await self._client.get(
            f"/club/api/v2/modules/{options.module_id}/pages",
            params=options.to_params(),
        )
        return [Page.from_dict(item) for item in response or []]

    async def get_page_by_id(self, product_id: int, module_id: str, page_id: str) -> Optional[Page]:
        pages = await self.get_pages(GetPagesOptions(product_id, module_id))
        return next((page for page in pages if page.page_id == page_id), None)

    def is_content_page(self, page: Page) -> bool:
        return page.type == "CONTENT"

    def is_advertisement_page(self, page: Page) -> bool:
        return page.type == "ADVERTISEMENT"

    def is_quiz_page(self, page: Page) -> bool:
        return page.type == "QUIZ"

    def is_webinar_page(self, page: Page) -> bool:
        return page.type == "WEBINAR"

    def is_published(self, page: Page) -> bool:
        return page.published

    def has_media(self, page: Page) -> bool:
        return page.has_media

    def get_pages_by_type(self, pages: List[Page], page_type: PageType) -> List[Page]:
        return [page for page in pages if page.type == page_type]

    def get_published_pages(self, pages: List[Page]) -> List[Page]:
        return [page for page in pages if self.is_published(page)]

    def get_pages_with_media(self, pages: List[Page]) -> List[Page]:
        return [page for page in pages if self.has_media(page)]

    def get_page_comments(self, page: Page) -> int:
        return page.total_comments

    def get_page_rating(self, page: Page) -> float:
        return page.rates_average

    def get_page_order(self, page: Page) -> int:
        return page.page_order

    def sort_pages_by_order(self, pages: List[Page]) -> List[Page]:
        return sorted(pages, key=lambda page: page.page_order)

    def sort_pages_by_rating(self, pages: List[Page], descending: bool = True) -> List[Page]:
        return sorted(pages, key=lambda page: page.rates_average, reverse=descending)

    def get_pages_dripping_info(self, page: Page) -> List[DrippingInfo]:
        return [
            DrippingInfo(
                liberation_type=config.liberation.type,
                liberation_days=config.liberation.liberation_days,
                liberation_date=config.liberation.liberation_date,
                expiration_days=config.expiration.duration_days if config.expiration else None,
                classes=config.classes,
            )
            for config in page.dripping_configs
        ]

    async def get_all_content_pages(self, product_id: int, module_id: str) -> List[Page]:
        pages = await self.get_pages(GetPagesOptions(product_id, module_id))
        return self.get_pages_by_type(pages, "CONTENT")

    async def get_all_quizzes(self, product_id: int, module_id: str) -> List[Page]:
        pages = await self.get_pages(GetPagesOptions(product_id, module_id))
        return self.get_pages_by_type(pages, "QUIZ")

    async def get_all_webinars(self, product_id: int, module_id: str) -> List[Page]:
        pages = await self.get_pages(GetPagesOptions(product_id, module_id))
        return self.get_pages_by_type(pages, "WEBINAR")

    async def get_top_rated_pages(self, product_id: int, module_id: str, limit: int = 10) -> List[Page]:
        pages = await self.get_pages(GetPagesOptions(product_id, module_id))
        return self.sort_pages_by_rating(pages)[:limit]

    async def get_most_commented_pages(self, product_id: int, module_id: str, limit: int = 10) -> List[Page]:
        pages = await self.get_pages(GetPagesOptions(product_id, module_id))
        return sorted(pages, key=lambda page: page.total_comments, reverse=True)[:limit]
