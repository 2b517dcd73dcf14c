from __future__ import annotations

import argparse
import logging

from app.connections.mongo import init_mongo, close_mongo
from app.models.role import Role
from app.models.user import User
from app.services.seed import seed_admin, seed_roles
from app.utils.config import settings
from app.utils.log import configure_logging


logger = logging.getLogger(__name__)


def seed(reset: bool = False) -> None:
    init_mongo(settings)
    try:
        if reset:
            # Users reference roles, so drop them first
            User.drop_collection()
            Role.drop_collection()
            logger.info("Dropped users and roles")

        seed_roles()
        seed_admin(settings)
        logger.info("Seed completed.")
    finally:
        close_mongo()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed roles and the bootstrap admin account.")
    parser.add_argument("--reset", action="store_true", help="drop users and roles before seeding")
    args = parser.parse_args(argv)

    configure_logging(settings)
    seed(reset=args.reset)


if __name__ == "__main__":
    main()
