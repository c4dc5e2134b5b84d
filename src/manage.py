"""ReviewHub management CLI.

Creates and drops the database schema, seeds the default categories and
rebuilds denormalized counters.

Usage:
    python src/manage.py setup-db            # Create all tables
    python src/manage.py drop-db             # Drop all tables
    python src/manage.py seed-categories     # Create missing default categories
    python src/manage.py reconcile-counters  # Rebuild helpful-vote and review counts
"""

import argparse
import sys


def _domain():
    from reviewhub.domain import reviewhub

    print("Initializing reviewhub domain...")
    reviewhub.init()
    return reviewhub


def setup_database():
    """Create the database schema."""
    from reviewhub.utils.db import setup_db

    domain = _domain()
    print("Creating reviewhub database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    """Drop the database schema."""
    from reviewhub.utils.db import drop_db

    domain = _domain()
    print("Dropping reviewhub database schema...")
    drop_db(domain)
    print("Done.")


def seed_categories():
    from reviewhub.category.management import SeedCategories

    domain = _domain()
    with domain.domain_context():
        created = domain.process(SeedCategories(requested_by="manage.py"), asynchronous=False)
    if created:
        print(f"Created categories: {', '.join(created)}")
    else:
        print("All default categories already exist.")


def reconcile_counters():
    from reviewhub.review.reconciliation import ReconcileCounters

    domain = _domain()
    with domain.domain_context():
        summary = domain.process(ReconcileCounters(requested_by="manage.py"), asynchronous=False)
    print(
        f"Checked {summary['reviews_checked']} reviews: "
        f"{summary['reviews_fixed']} helpful-vote counts and "
        f"{summary['categories_fixed']} category counts corrected."
    )


def main():
    parser = argparse.ArgumentParser(description="ReviewHub management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed-categories", help="Create the default categories that are missing")
    subparsers.add_parser("reconcile-counters", help="Recompute denormalized counters from raw rows")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-categories":
        seed_categories()
    elif args.command == "reconcile-counters":
        reconcile_counters()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
