"""
Save a record and read it back.
Usage: python examples/put_some_get_some.py [config.json]
"""
import asyncio
import logging
import sys

from restposten_mongodb import Config, connect


async def main():
    db = await connect({"name": "persistence_test"} if not Config.get("db_name") else None)
    try:
        authors = await db.get_collection("author", ["_id"])

        saved = await authors.save({"name": "pvorb"})
        print("saved", saved)

        for record in await authors.find({"name": "pvorb"}):
            print("found", record)
    finally:
        await db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    if len(sys.argv) > 1:
        Config.initialize(sys.argv[1])
    asyncio.run(main())
