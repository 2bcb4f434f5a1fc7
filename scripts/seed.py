"""Load the demo catalog into the hotel table.

Usage: TABLE_NAME=hotel-dev python scripts/seed.py [--admin-email EMAIL --admin-password PASSWORD]
"""
import argparse
import logging
import os

from boto3 import resource

from common.models.charges import ChargeType
from common.models.financial import RecordType
from common.models.staff import StaffRole
from common.repository.charge_repo import ChargeRepository
from common.repository.financial_repo import FinancialRepository
from common.repository.housekeeping_repo import HousekeepingRepository
from common.repository.maintenance_repo import MaintenanceRepository
from common.repository.room_repo import RoomRepository
from common.repository.staff_repo import StaffRepository
from common.schemas.charges import ChargeRequest
from common.schemas.financial import FinancialRecordRequest
from common.schemas.rooms import RoomRequest, RoomTypeRequest
from common.schemas.staff import StaffRequest
from common.schemas.tasks import HousekeepingTaskRequest, MaintenanceCategoryRequest
from common.services.charge_service import ChargeService
from common.services.financial_service import FinancialService
from common.services.housekeeping_service import HousekeepingService
from common.services.maintenance_service import MaintenanceService
from common.services.room_service import RoomService
from common.services.staff_service import StaffService
from common.utils.custom_exceptions import ConflictError
from common.utils.datetime_normaliser import today

logger = logging.getLogger("seed")

ROOM_TYPES = [
    {
        "name": "Standard Room",
        "description": "Comfortable room with a queen bed",
        "price": 100,
        "capacity": 2,
        "amenities": ["WiFi", "TV", "Air Conditioning"],
    },
    {
        "name": "Deluxe Room",
        "description": "Spacious room with a king bed and city view",
        "price": 150,
        "capacity": 3,
        "amenities": ["WiFi", "TV", "Air Conditioning", "Mini Bar", "City View"],
    },
    {
        "name": "Executive Suite",
        "description": "Suite with a separate living area",
        "price": 250,
        "capacity": 4,
        "amenities": ["WiFi", "TV", "Air Conditioning", "Mini Bar", "Living Area", "Bathtub"],
    },
]

CHARGES = [
    ("Breakfast", "Continental breakfast buffet", 15, ChargeType.PER_PERSON),
    ("Lunch", "Lunch at the hotel restaurant", 25, ChargeType.PER_PERSON),
    ("Dinner", "Dinner at the hotel restaurant", 35, ChargeType.PER_PERSON),
    ("Spa Access", "Full day spa access", 50, ChargeType.PER_STAY),
    ("Laundry Service", "Same day laundry service", 20, ChargeType.PER_STAY),
    ("Airport Transfer", "One way airport transfer", 40, ChargeType.PER_STAY),
    ("Late Checkout", "Checkout until 4pm", 30, ChargeType.PER_STAY),
]

EXPENSES = [
    ("utilities", "Monthly electricity and water bill", 500),
    ("supplies", "Cleaning supplies and toiletries", 200),
    ("salary", "Staff salaries", 3000),
]

MAINTENANCE_CATEGORIES = [
    ("HVAC System", "Heating, ventilation, and air conditioning maintenance", "#FF6B6B"),
    ("Plumbing", "Pipes, drains, and fixtures maintenance", "#4ECDC4"),
    ("Electrical", "Electrical systems and equipment maintenance", "#45B7D1"),
    ("General Repairs", "General building and furniture repairs", "#96CEB4"),
    ("Safety Equipment", "Fire safety, emergency equipment maintenance", "#FFEAA7"),
]

HOUSEKEEPING_TASKS = [
    ("Clean Bathroom", "Clean and sanitize bathroom fixtures, floor, and mirror", "bathroom", 30),
    ("Change Bed Linens", "Remove used linens and make bed with fresh linens", "bedroom", 15),
    ("Vacuum Carpet", "Vacuum all carpeted areas in the room", "bedroom", 20),
    ("Dust Furniture", "Dust all surfaces including furniture, shelves, and decorations", "bedroom", 15),
    ("Clean Windows", "Clean interior windows and glass surfaces", "bedroom", 10),
    ("Restock Amenities", "Restock toiletries, coffee, and other room amenities", "amenities", 10),
    ("Clean Lobby Area", "Vacuum, dust, and clean main lobby area", "common_area", 45),
    ("Clean Hallways", "Vacuum and clean all hallway surfaces", "common_area", 30),
    ("Empty Trash", "Empty and replace trash liners in all areas", "general", 15),
]


def room_layout():
    """Rooms x01-x05 on floors 1-3; x04/x05 are deluxe and 305 is the suite."""
    for floor in (1, 2, 3):
        for n in range(1, 6):
            number = f"{floor}{n:02d}"
            if number == "305":
                yield number, floor, "Executive Suite"
            elif n >= 4:
                yield number, floor, "Deluxe Room"
            else:
                yield number, floor, "Standard Room"


def seed(table, admin_email=None, admin_password=None):
    room_service = RoomService(RoomRepository(table))
    charge_service = ChargeService(ChargeRepository(table))
    financial_service = FinancialService(FinancialRepository(table))
    staff_repo = StaffRepository(table)
    room_repo = RoomRepository(table)
    maintenance_service = MaintenanceService(MaintenanceRepository(table), room_repo, staff_repo)
    housekeeping_service = HousekeepingService(HousekeepingRepository(table), room_repo, staff_repo)

    type_ids = {}
    for data in ROOM_TYPES:
        room_type = room_service.create_room_type(RoomTypeRequest(**data))
        type_ids[room_type.name] = room_type.room_type_id
    logger.info(f"Created {len(type_ids)} room types")

    created = 0
    for number, floor, type_name in room_layout():
        try:
            room_service.add_room(
                RoomRequest(room_number=number, room_type_id=type_ids[type_name], floor=floor)
            )
            created += 1
        except ConflictError:
            logger.warning(f"Room {number} already exists, skipping")
    logger.info(f"Created {created} rooms")

    for name, description, price, charge_type in CHARGES:
        charge_service.create_charge(
            ChargeRequest(name=name, description=description, price=price, charge_type=charge_type)
        )
    logger.info(f"Created {len(CHARGES)} additional charges")

    for category, description, amount in EXPENSES:
        financial_service.add_record(
            FinancialRecordRequest(
                type=RecordType.EXPENSE,
                category=category,
                description=description,
                amount=amount,
                date=today(),
            )
        )
    logger.info(f"Created {len(EXPENSES)} sample expenses")

    for name, description, color in MAINTENANCE_CATEGORIES:
        maintenance_service.create_category(
            MaintenanceCategoryRequest(name=name, description=description, color=color)
        )
    for name, description, category, minutes in HOUSEKEEPING_TASKS:
        housekeeping_service.create_task(
            HousekeepingTaskRequest(
                name=name, description=description, category=category, estimated_time=minutes
            )
        )
    logger.info("Created maintenance categories and housekeeping templates")

    if admin_email and admin_password:
        try:
            StaffService(staff_repo).add_staff(
                StaffRequest(
                    name="Administrator",
                    email=admin_email,
                    password=admin_password,
                    role=StaffRole.ADMIN,
                    department="management",
                )
            )
            logger.info(f"Created admin account {admin_email}")
        except ConflictError:
            logger.warning(f"Admin account {admin_email} already exists, skipping")


def main():
    parser = argparse.ArgumentParser(description="Seed the hotel table with demo data")
    parser.add_argument("--admin-email")
    parser.add_argument("--admin-password")
    args = parser.parse_args()

    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
    table_name = os.environ["TABLE_NAME"]
    dynamodb = resource("dynamodb", region_name=os.environ.get("AWS_REGION", "ap-south-1"))
    seed(dynamodb.Table(table_name), args.admin_email, args.admin_password)


if __name__ == "__main__":
    main()
