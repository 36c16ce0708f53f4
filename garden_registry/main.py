import argparse
import json
import os
import sys
import logging
from typing import List, Optional
from dotenv import load_dotenv

from garden_registry.application.garden_registry import GardenRegistry
from garden_registry.domain.result import Result
from garden_registry.infrastructure.database import SqlGardenStore
from garden_registry.infrastructure.memory_store import InMemoryGardenStore
from garden_registry.infrastructure.runtime import MonotonicClock, identity_from_env

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///gardens.db"
MEMORY_DATABASE_URL = "memory://"


def build_registry(db_url: str) -> GardenRegistry:
    """Wire a registry to the store selected by db_url and the caller from the environment."""
    if db_url == MEMORY_DATABASE_URL:
        store = InMemoryGardenStore()
    else:
        store = SqlGardenStore(db_url=db_url)
        store.create_tables()

    return GardenRegistry(store=store, identity=identity_from_env(), clock=MonotonicClock())


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="garden-registry", description="Manage garden records")
    sub = p.add_subparsers(dest="command", required=True)

    for name in ("create", "update"):
        cmd = sub.add_parser(name, help=f"{name} a garden")
        if name == "update":
            cmd.add_argument("id")
        cmd.add_argument("--name")
        cmd.add_argument("--location")
        cmd.add_argument("--image")
        cmd.add_argument("--plant", dest="plants", action="append", default=None, help="repeat for each plant")

    sub.add_parser("list", help="list all gardens")

    for name in ("get", "delete", "plants"):
        sub.add_parser(name).add_argument("id")

    for name in ("add-plant", "remove-plant"):
        cmd = sub.add_parser(name)
        cmd.add_argument("id")
        cmd.add_argument("plant")

    cmd = sub.add_parser("update-image")
    cmd.add_argument("id")
    cmd.add_argument("image")

    return p


def dispatch(registry: GardenRegistry, args: argparse.Namespace) -> Result:
    if args.command in ("create", "update"):
        payload = {
            "name": args.name,
            "location": args.location,
            "plants": args.plants,
            "image": args.image,
        }
        if args.command == "create":
            return registry.create(payload)
        return registry.update(args.id, payload)

    if args.command == "list":
        return registry.list_all()
    if args.command == "get":
        return registry.get(args.id)
    if args.command == "delete":
        return registry.delete(args.id)
    if args.command == "plants":
        return registry.list_plants(args.id)
    if args.command == "add-plant":
        return registry.add_plant(args.id, args.plant)
    if args.command == "remove-plant":
        return registry.remove_plant(args.id, args.plant)
    if args.command == "update-image":
        return registry.update_image(args.id, args.image)

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None, registry: Optional[GardenRegistry] = None) -> int:
    # Load environment variables from .env file
    load_dotenv()

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )

    args = build_parser().parse_args(argv)

    if registry is None:
        db_url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
        registry = build_registry(db_url)

    result = dispatch(registry, args)
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
