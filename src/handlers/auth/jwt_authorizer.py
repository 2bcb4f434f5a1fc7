import logging
import os

import jwt

from common.utils.jwt_service import decode_access_token

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

if not os.environ.get("JWT_SECRET"):
    raise RuntimeError("JWT_SECRET environment variable is not set")


def _generate_policy(principal_id, effect, resource, context=None):
    auth_response = {
        "principalId": principal_id,
        "policyDocument": {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Action": "execute-api:Invoke",
                    "Effect": effect,
                    "Resource": resource,
                }
            ],
        },
    }

    if context:
        auth_response["context"] = {
            k: str(v) for k, v in context.items()
        }

    return auth_response


def _get_stage_arn(method_arn: str) -> str:
    parts = method_arn.split("/")
    return "/".join(parts[:2]) + "/*/*"


def _extract_token(event) -> str:
    headers = event.get("headers") or {}
    token = (
        headers.get("Authorization")
        or headers.get("authorization")
        or event.get("authorizationToken")
    )
    if not token:
        raise ValueError("Missing Authorization header")
    if token.startswith("Bearer "):
        token = token[len("Bearer "):]
    return token.strip()


def lambda_handler(event, context):
    try:
        decoded = decode_access_token(_extract_token(event))

        user_id = decoded.get("user_id")
        if not user_id:
            raise ValueError("Missing user_id in token")

        return _generate_policy(
            principal_id=user_id,
            effect="Allow",
            resource=_get_stage_arn(event["methodArn"]),
            context={
                "user_id": user_id,
                "email": decoded.get("email", ""),
                "role": decoded.get("role", "STAFF"),
            },
        )

    except jwt.ExpiredSignatureError:
        logger.warning("Authorization failed: token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Authorization failed: invalid token ({e})")
    except ValueError as e:
        logger.warning(f"Authorization failed: {e}")

    return _generate_policy(
        principal_id="unauthorized",
        effect="Deny",
        resource=_get_stage_arn(event["methodArn"]),
    )
