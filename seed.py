import argparse
import asyncio
import logging

import yaml
from sqlmodel import SQLModel

from config import ApplicationConfig
from src.adapter.services.seeder import seed
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import AsyncSessionLocal, engine
from src.logging_config import configure_logging

logger = logging.getLogger(__name__)


async def main(path: str) -> None:
    with open(path, "r") as r_file:
        data = yaml.safe_load(r_file) or {}

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSessionLocal() as session:
        await seed(SqlAlchemyUnitOfWork(session), data)

    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed roles, permissions and users")
    parser.add_argument("path", nargs="?", default="seeds/rbac.yaml")
    args = parser.parse_args()

    configure_logging(ApplicationConfig.LOG_LEVEL, ApplicationConfig.LOG_FORMAT)
    asyncio.run(main(args.path))
