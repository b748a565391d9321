from sawa_admin.gateways.base import Gateway
from sawa_admin.schemas.result import Result
from sawa_admin.schemas.review import Review


class ReviewsGateway(Gateway[Review]):
    resource = "reviews"
    model = Review
    label = "review"

    async def block(self, review_id: int) -> Result[Review | None]:
        return await self._action("PUT", f"{self.path}/{review_id}/block", "Failed to block review")

    async def unblock(self, review_id: int) -> Result[Review | None]:
        return await self._action(
            "PUT", f"{self.path}/{review_id}/unblock", "Failed to unblock review"
        )

    async def toggle_block(self, review: Review) -> Result[Review | None]:
        """Unblock a blocked review, block an active one."""
        if review.is_blocked:
            return await self.unblock(review.id)
        return await self.block(review.id)
