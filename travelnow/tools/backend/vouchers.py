from typing import List

from travelnow.states import Voucher

from .client import ApiClient


class VoucherService:
    """Promotions: list vouchers and claim them for the current user"""

    def __init__(self, client: ApiClient):
        self.client = client

    def list(self) -> List[Voucher]:
        data = self.client.get("/vouchers")
        if isinstance(data, dict):
            data = data.get("vouchers", [])
        return [Voucher.model_validate(voucher) for voucher in data or []]

    def claimed(self) -> List[Voucher]:
        return [voucher for voucher in self.list() if voucher.is_claimed]

    def claim(self, voucher_id: str) -> dict:
        return self.client.post(f"/vouchers/{voucher_id}/claim") or {}
