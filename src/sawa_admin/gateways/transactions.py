from collections.abc import Mapping
from typing import Any

from sawa_admin.gateways.base import (
    TRANSPORT_ERRORS,
    Gateway,
    clean_filters,
    decode_body,
    describe_transport_error,
    failure_message,
    logger,
)
from sawa_admin.schemas.result import Err, Ok, Result
from sawa_admin.schemas.transaction import Transaction


class TransactionsGateway(Gateway[Transaction]):
    resource = "transactions"
    model = Transaction
    label = "transaction"

    async def update_status(self, transaction_id: int, status: str) -> Result[Transaction | None]:
        return await self._action(
            "PUT",
            f"{self.path}/{transaction_id}",
            "Failed to update transaction status",
            json={"status": status},
        )

    async def export(self, filters: Mapping[str, Any] | None = None) -> Result[bytes]:
        """Download the spreadsheet export for the given list filters."""
        failure = "Failed to export transactions"
        try:
            response = await self.client.request(
                "GET", f"{self.path}/export", params=clean_filters(filters)
            )
        except TRANSPORT_ERRORS as exc:
            logger.warning("gateway_transport_error", gateway=self.name, error=repr(exc))
            return Err(describe_transport_error(exc, failure))
        if not response.is_success:
            message = failure_message(decode_body(response), failure)
            logger.warning(
                "gateway_http_error",
                gateway=self.name,
                status_code=response.status_code,
                message=message,
            )
            return Err(message, status_code=response.status_code)
        return Ok(response.content)
