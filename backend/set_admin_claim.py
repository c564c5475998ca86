#!/usr/bin/env python3
"""
Grant (or revoke) the `admin` custom claim that unlocks the /orders/admin,
/orders/{id}/status and listing write endpoints.

Uses the same Firebase credentials as the API (see storefront/config.py).
"""
import logging
import sys

from firebase_admin import auth

from storefront.config import init_firebase

logger = logging.getLogger("storefront.admin_claim")


def set_admin_claim(user_email: str, admin: bool = True) -> bool:
    """Set `admin` on the user's custom claims, keeping any other claims they carry."""
    init_firebase()
    try:
        user = auth.get_user_by_email(user_email)
    except auth.UserNotFoundError:
        logger.error("User not found: %s", user_email)
        return False

    claims = dict(user.custom_claims or {})
    if admin:
        claims["admin"] = True
    else:
        claims.pop("admin", None)
    auth.set_custom_user_claims(user.uid, claims or None)
    logger.info("admin=%s for uid=%s email=%s", admin, user.uid, user.email)
    return True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = sys.argv[1:]
    revoke = "--revoke" in args
    emails = [a for a in args if a != "--revoke"]
    if len(emails) != 1:
        print("Usage: python set_admin_claim.py [--revoke] <user_email>")
        sys.exit(1)

    if set_admin_claim(emails[0], admin=not revoke):
        print("Done. The user must sign out and back in for the change to take effect.")
    else:
        sys.exit(1)
