"""Storefront management CLI.

Usage:
    python -m storefront.manage setup-db              # Create all tables
    python -m storefront.manage drop-db               # Drop all tables
    python -m storefront.manage grant-admin EMAIL     # Promote an existing user
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront

    print("Initializing storefront domain...")
    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def grant_admin(email):
    """Give the admin role to the account registered under ``email``.

    Returns a process exit code.
    """
    from protean.exceptions import ObjectNotFoundError

    from storefront.user.administration import GrantAdmin

    domain = _domain()
    with domain.domain_context():
        try:
            domain.process(GrantAdmin(email=email), asynchronous=False)
        except ObjectNotFoundError:
            print(f"No user registered with {email}", file=sys.stderr)
            return 1
    print(f"{email} is now an admin. They must log in again to pick up the role.")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    grant_parser = subparsers.add_parser("grant-admin", help="Promote a registered user to admin")
    grant_parser.add_argument("email", help="Email address of the account")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "grant-admin":
        sys.exit(grant_admin(args.email))


if __name__ == "__main__":
    main()
