"""Seed the feed database with demo users, follow edges and videos.

    python scripts/load_data.py                      # scripts/demo_data.json
    python scripts/load_data.py path/to/data.json --skip-schema
"""
import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.db.database import get_async_sessionmaker, init_db_schema
from app.services.data_loader_service import DataLoaderService

DEFAULT_DATA_FILE = ROOT / "scripts" / "demo_data.json"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load demo feed data from a JSON document")
    parser.add_argument("data_file", nargs="?", type=Path, default=DEFAULT_DATA_FILE)
    parser.add_argument("--skip-schema", action="store_true", help="do not create missing tables first")
    return parser.parse_args(argv)


async def seed(data_file: Path, create_schema: bool = True) -> dict:
    if create_schema:
        await init_db_schema()

    async with get_async_sessionmaker()() as session:
        return await DataLoaderService(session).load_from_json_file(str(data_file))


def main(argv=None) -> int:
    args = parse_args(argv)
    if not args.data_file.exists():
        logger.error(f"Seed file not found: {args.data_file}")
        return 1

    try:
        result = asyncio.run(seed(args.data_file, create_schema=not args.skip_schema))
    except Exception as e:
        logger.exception(f"Seeding from {args.data_file} failed: {e}")
        return 1

    for kind in ("users", "follows", "videos"):
        logger.info(f"{kind:>8}: {result[kind]} new")
    if result["skipped_ids"]:
        logger.warning(f"Skipped invalid videos: {', '.join(result['skipped_ids'])}")
    logger.success(f"Seeded feed data from {args.data_file.name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
