from collections.abc import Sequence

from sawa_admin.gateways.base import Gateway
from sawa_admin.schemas.listing import AvailabilityForm, Listing, ListingRulesForm
from sawa_admin.schemas.result import Result


class ListingsGateway(Gateway[Listing]):
    resource = "listings"
    model = Listing
    label = "listing"

    async def update_status(self, listing_id: int, status: str) -> Result[Listing | None]:
        return await self._action(
            "PUT",
            f"{self.path}/{listing_id}/status",
            "Failed to update listing status",
            json={"status": status},
        )

    async def reorder_images(
        self, listing_id: int, image_ids: Sequence[int]
    ) -> Result[Listing | None]:
        """Persist a new image order; position in ``image_ids`` becomes the order."""
        return await self._action(
            "PUT",
            f"{self.path}/{listing_id}/reorder",
            "Failed to reorder listing images",
            json={
                "images": [
                    {"id": image_id, "orders": index} for index, image_id in enumerate(image_ids)
                ]
            },
        )

    async def update_availability(
        self, listing_id: int, form: AvailabilityForm
    ) -> Result[Listing | None]:
        return await self._action(
            "PUT",
            f"{self.path}/{listing_id}/available-dates",
            "Failed to update listing availability",
            json=form.to_payload(),
        )

    async def update_rules(self, listing_id: int, form: ListingRulesForm) -> Result[Listing | None]:
        return await self._action(
            "PUT",
            f"{self.path}/{listing_id}/rules",
            "Failed to update listing rules",
            json=form.to_payload(),
        )

    async def change_owner(self, listing_id: int, host_id: int) -> Result[Listing | None]:
        """Hand the listing to another host; only ``host_id`` is sent."""
        return await self._action(
            "PUT",
            f"{self.path}/{listing_id}",
            "Failed to change listing owner",
            json={"host_id": host_id},
        )
