from dataclasses import replace
from typing import List
from uuid import uuid4

from common.models.charges import AdditionalCharge
from common.repository.charge_repo import ChargeRepository
from common.schemas.charges import ChargeRequest, ChargeUpdate
from common.utils.custom_exceptions import NotFoundException


class ChargeService:
    def __init__(self, charge_repo: ChargeRepository):
        self.charge_repo = charge_repo

    def list_charges(self) -> List[AdditionalCharge]:
        return sorted(self.charge_repo.list_charges(), key=lambda c: c.name.lower())

    def get_charge(self, charge_id: str) -> AdditionalCharge:
        charge = self.charge_repo.get_charge(charge_id)
        if charge is None:
            raise NotFoundException("additional charge", charge_id, 404)
        return charge

    def create_charge(self, req: ChargeRequest) -> AdditionalCharge:
        charge = AdditionalCharge(charge_id=str(uuid4()), **req.model_dump())
        self.charge_repo.put_charge(charge)
        return charge

    def update_charge(self, charge_id: str, req: ChargeUpdate) -> AdditionalCharge:
        changes = req.model_dump(exclude_unset=True, exclude_none=True)
        charge = replace(self.get_charge(charge_id), **changes)
        self.charge_repo.put_charge(charge, must_exist=True)
        return charge

    def delete_charge(self, charge_id: str):
        self.charge_repo.delete_charge(charge_id)
