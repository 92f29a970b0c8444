"""Banking sandbox (Nessie) HTTP client for accounts, purchases and merchants"""

import httpx
from typing import Any, Dict, List
from lifedash_gateway.domain.models import Account, Merchant, Purchase
from lifedash_gateway.domain.exceptions import BankAPIError
from lifedash_gateway.config import settings
from lifedash_gateway.utils.date_utils import parse_iso_date


def parse_account(data: Dict[str, Any]) -> Account:
    return Account(
        id=data["_id"],
        type=data["type"],
        balance=float(data["balance"]),
        nickname=data.get("nickname", ""),
        rewards=data.get("rewards", 0),
        customer_id=data.get("customer_id", ""),
    )


def parse_purchase(data: Dict[str, Any]) -> Purchase:
    return Purchase(
        id=data["_id"],
        merchant_id=data["merchant_id"],
        payer_id=data.get("payer_id", ""),
        purchase_date=parse_iso_date(data["purchase_date"]),
        amount=float(data["amount"]),
        status=data.get("status", ""),
        medium=data.get("medium", ""),
        description=data.get("description") or "",
        type=data.get("type", "merchant"),
    )


def parse_merchant(data: Dict[str, Any]) -> Merchant:
    """Nessie returns category as a list of tags; join them so keyword matching sees all of them"""
    category = data.get("category")
    if isinstance(category, list):
        category = ", ".join(str(tag) for tag in category)

    return Merchant(
        id=data["_id"],
        name=data.get("name"),
        category=category,
        address=data.get("address"),
        geocode=data.get("geocode"),
    )


class NessieClient:
    """Client for the Nessie banking sandbox API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.nessie_api_base
        self.api_key = api_key if api_key is not None else settings.nessie_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _get(self, path: str) -> Any:
        """
        Single GET against the sandbox; no retries.

        Raises:
            BankAPIError: On timeout, HTTP errors, or non-JSON response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}{path}", params={"key": self.api_key})
                response.raise_for_status()
                return response.json()
            except httpx.TimeoutException as e:
                raise BankAPIError(f"Bank API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise BankAPIError(f"Bank API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise BankAPIError(f"Bank API unreachable: {e}") from e
            except ValueError as e:
                raise BankAPIError(f"Invalid JSON from bank: {e}") from e

    async def get_accounts(self, customer_id: str) -> List[Account]:
        """Fetch all accounts owned by a customer"""
        data = await self._get(f"/customers/{customer_id}/accounts")
        try:
            return [parse_account(item) for item in data]
        except (KeyError, ValueError, TypeError) as e:
            raise BankAPIError(f"Invalid account data from bank: {e}") from e

    async def get_purchases(self, account_id: str) -> List[Purchase]:
        """Fetch purchases made from an account"""
        data = await self._get(f"/accounts/{account_id}/purchases")
        try:
            return [parse_purchase(item) for item in data]
        except (KeyError, ValueError, TypeError) as e:
            raise BankAPIError(f"Invalid purchase data from bank: {e}") from e

    async def get_merchant(self, merchant_id: str) -> Merchant:
        """Fetch a merchant's reference data"""
        data = await self._get(f"/merchants/{merchant_id}")
        try:
            return parse_merchant(data)
        except (KeyError, ValueError, TypeError) as e:
            raise BankAPIError(f"Invalid merchant data from bank: {e}") from e
