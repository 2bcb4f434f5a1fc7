from typing import Iterable, List

from common.models.bookings import BookingCharge
from common.models.charges import AdditionalCharge, ChargeType


def charge_quantity(charge_type: ChargeType, nights: int, guests: int) -> int:
    if charge_type == ChargeType.PER_NIGHT:
        return nights
    if charge_type == ChargeType.PER_PERSON:
        return guests
    return 1


def build_charge_lines(
    charges: Iterable[AdditionalCharge], nights: int, guests: int
) -> List[BookingCharge]:
    lines = []
    for charge in charges:
        quantity = charge_quantity(charge.charge_type, nights, guests)
        lines.append(
            BookingCharge(
                charge_id=charge.charge_id,
                name=charge.name,
                charge_type=charge.charge_type,
                unit_price=charge.price,
                quantity=quantity,
                amount=charge.price * quantity,
            )
        )
    return lines


def calculate_total_price(
    price_per_night: float, nights: int, lines: Iterable[BookingCharge] = ()
) -> float:
    return price_per_night * nights + sum(line.amount for line in lines)
