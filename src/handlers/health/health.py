import os

from common.utils.custom_response import send_custom_response
from common.utils.datetime_normaliser import utc_now

REQUIRED_SETTINGS = ("TABLE_NAME", "JWT_SECRET")


def health(event, context):
    return send_custom_response(
        200,
        data={
            "status": "ok",
            "message": "Hotel operations API is running",
            "stage": os.environ.get("STAGE", "dev"),
            "settings": {
                name.lower(): "set" if os.environ.get(name) else "not set"
                for name in REQUIRED_SETTINGS
            },
            "timestamp": utc_now(),
        },
    )
