"""Grant (or revoke) the admin role with the service account.

The first admin cannot be created through the admin console, so this
writes the role record directly.

Usage:
    python -m scripts.promote_admin <user_id> [--demote]
    python -m scripts.promote_admin --list
Requires FIREBASE_SERVICE_ACCOUNT_KEY, FIREBASE_SERVICE_ACCOUNT_PATH or
FIREBASE_CLIENT_EMAIL + FIREBASE_PRIVATE_KEY (+ FIREBASE_PROJECT_ID).
"""

import asyncio
import sys

from authdemo.application.services.admin_service import validate_user_id
from authdemo.core.config import get_settings
from authdemo.core.logging import setup_logging
from authdemo.domain.enums import Role
from authdemo.domain.exceptions import AuthDemoException
from authdemo.infrastructure.firebase import init_firebase
from authdemo.infrastructure.firebase.repositories import FirestoreRoleStore

_USAGE = "Usage: python -m scripts.promote_admin <user_id> [--demote] | --list"


async def main() -> None:
    """Write an admin (or user) role record for the given user id."""
    args = sys.argv[1:]
    if not args or args[0] in ("-h", "--help"):
        print(_USAGE, file=sys.stderr)
        sys.exit(1)

    setup_logging()
    firebase = init_firebase(get_settings())
    if firebase is None:
        print("Firebase service account not configured", file=sys.stderr)
        sys.exit(1)

    try:
        store = FirestoreRoleStore(firebase.firestore)
        if args[0] == "--list":
            for record in await store.list_by_role(Role.ADMIN):
                print(f"{record.user_id}\tupdated {record.updated_at.isoformat()}")
            return
        user_id = validate_user_id(args[0])
        role = Role.USER if "--demote" in args[1:] else Role.ADMIN
        identity = await firebase.identity_admin.get_user(user_id)
        if identity is None:
            print(f"Warning: no account exists with id {user_id}", file=sys.stderr)
        record = await store.set_role(user_id, role, updated_by=None)
        who = identity.email if identity and identity.email else user_id
        print(f"Set role of {who} to {record.role.value}")
    except AuthDemoException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await firebase.aclose()


if __name__ == "__main__":
    asyncio.run(main())
