#!/usr/bin/env python3
"""Seed administrators into the reserved server_admins group.

Membership of server_admins cannot be changed through the HTTP API. This
script is the out-of-band path: it bootstraps the group if needed and adds
the given principals directly through the configured permission store.

Store and namespace come from the usual PERMS_* environment variables.

Usage:
    python scripts/seed_server_admins.py 123456789 "<@987654321>"
    python scripts/seed_server_admins.py --namespace alpha 42
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src/api to path so the script runs from a plain checkout
src_api_path = Path(__file__).parent.parent / "src" / "api"
sys.path.insert(0, str(src_api_path))

import structlog  # noqa: E402

from infrastructure.logging import configure_logging  # noqa: E402
from infrastructure.observability import DefaultStartupProbe  # noqa: E402
from infrastructure.settings import get_settings  # noqa: E402
from permissions.application.services import (  # noqa: E402
    ServerAdminsBootstrapService,
)
from permissions.domain.value_objects import SERVER_ADMINS  # noqa: E402
from permissions.infrastructure.store_factory import (  # noqa: E402
    create_permission_store,
)
from permissions.ports.exceptions import PermissionsError  # noqa: E402
from permissions.presentation.principal import normalize_principal  # noqa: E402

log = structlog.get_logger()


async def seed_server_admins(namespace: str, principals: list[str]) -> int:
    """Add ``principals`` to server_admins in ``namespace``.

    Returns:
        Process exit code
    """
    settings = get_settings()
    probe = DefaultStartupProbe()
    store = create_permission_store(settings, startup_probe=probe)
    try:
        await ServerAdminsBootstrapService(store=store, probe=probe).ensure_server_admins(
            namespace
        )
        for principal in principals:
            await store.add_member(namespace, SERVER_ADMINS, principal)
            log.info("server_admin_seeded", namespace=namespace, principal=principal)

        members = await store.list_members(namespace, SERVER_ADMINS)
        log.info("server_admins_seeding_complete", namespace=namespace, members=members)
        return 0
    except PermissionsError as e:
        log.error("server_admins_seeding_failed", namespace=namespace, error=str(e))
        return 1
    finally:
        await store.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "principals",
        nargs="+",
        help="Principal ids or mentions to add to server_admins",
    )
    parser.add_argument(
        "--namespace",
        default=None,
        help="Namespace to seed (default: PERMS_NAMESPACE)",
    )
    args = parser.parse_args(argv)

    try:
        principals = [normalize_principal(p) for p in args.principals]
    except ValueError as e:
        parser.error(str(e))

    settings = get_settings()
    configure_logging(debug=settings.debug)
    return asyncio.run(
        seed_server_admins(args.namespace or settings.namespace, principals)
    )


if __name__ == "__main__":
    sys.exit(main())
