"""Provision the permission catalog, system roles and the default workflow.

Usage:
    python -m scripts.seed_catalog [--no-workflow] [--assign USER_ID ROLE_SLUG]

Idempotent: safe to run on every deploy. Uses DATABASE_URL from settings.
"""

import argparse
import asyncio
import sys

from app.core.config import get_settings
from app.infrastructure.persistence import database
from app.infrastructure.services import CatalogProvisioningService
from app.shared.telemetry.logging import setup_logging


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="python -m scripts.seed_catalog")
    parser.add_argument(
        "--no-workflow",
        action="store_true",
        help="Only provision permissions and system roles",
    )
    parser.add_argument(
        "--assign",
        nargs=2,
        metavar=("USER_ID", "ROLE_SLUG"),
        help="Also assign a provisioned role to an existing user",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> None:
    """Run provisioning in a single transaction."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    get_settings()
    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            service = CatalogProvisioningService(session)
            summary = await service.provision(include_workflow=not args.no_workflow)
            if args.assign:
                user_id, role_slug = args.assign
                await service.assign_role(user_id, role_slug)
                print(f"Assigned role {role_slug} to user {user_id}")
    print(
        f"Provisioned {len(summary.permission_ids)} permissions, "
        f"{len(summary.role_ids)} roles, {len(summary.status_ids)} statuses, "
        f"{len(summary.transition_ids)} transitions"
    )
    if database.engine is not None:
        await database.engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
