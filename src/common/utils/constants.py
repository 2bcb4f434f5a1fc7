MAX_STAY = 90
TRANSACTION_ATTEMPTS = 3

ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24

DEFAULT_CATEGORY_COLOR = "#3B82F6"
DEFAULT_HOUSEKEEPING_MINUTES = 30

BOOKING_INCOME_CATEGORY = "room_booking"
