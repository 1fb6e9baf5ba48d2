"""
Operator commands.

    python -m brikvest.manage init-db
    python -m brikvest.manage create-admin <username> [--role super_admin]
    python -m brikvest.manage seed-properties

create-admin prompts for the password so it never lands in shell history.
"""

import argparse
import getpass
import logging
import sys

from sqlalchemy import select

from brikvest.auth import hash_password
from brikvest.config import LOG_LEVEL
from brikvest.db import init_db, session_scope
from brikvest.models import AdminRole, AdminUser
from brikvest.seed import seed_properties

logger = logging.getLogger("brikvest.manage")


def cmd_init_db(args) -> int:
    init_db()
    return 0


def cmd_create_admin(args) -> int:
    init_db()
    password = args.password or getpass.getpass("Password: ")
    if len(password) < 8:
        print("Password must be at least 8 characters", file=sys.stderr)
        return 1

    with session_scope() as db:
        user = db.scalars(select(AdminUser).where(AdminUser.username == args.username)).first()
        if user is None:
            user = AdminUser(username=args.username)
            db.add(user)
            action = "Created"
        else:
            action = "Updated"
        user.password_hash = hash_password(password)
        user.role = AdminRole(args.role)
        user.is_active = True

    logger.info("[ADMIN] %s admin %r with role %s", action, args.username, args.role)
    return 0


def cmd_seed_properties(args) -> int:
    init_db()
    with session_scope() as db:
        inserted = seed_properties(db)
    print("Sample properties created" if inserted else "Properties already exist")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="brikvest.manage", description="Brikvest operator commands")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init-db", help="Create missing tables")
    p.set_defaults(func=cmd_init_db)

    p = sub.add_parser("create-admin", help="Create or reset an admin user")
    p.add_argument("username")
    p.add_argument("--role", choices=[r.value for r in AdminRole], default=AdminRole.admin.value)
    p.add_argument("--password", help="Non-interactive password (prompted when omitted)")
    p.set_defaults(func=cmd_create_admin)

    p = sub.add_parser("seed-properties", help="Insert sample properties into an empty catalogue")
    p.set_defaults(func=cmd_seed_properties)

    return parser


def main(argv=None) -> int:
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s %(message)s")
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
