#!/usr/bin/env python3
"""
bucketfs Quickstart Example

Shows the basic flow: write, list, copy, change visibility, clean up.

Usage:
    python examples/01_quickstart.py
"""

import asyncio

from bucketfs import MemoryStorageClient, S3Adapter, WriteConfig


async def main() -> None:
    """Filesystem operations over an in-memory bucket."""

    # Use Aioboto3StorageClient (or create_adapter(get_settings())) for a real bucket
    client = MemoryStorageClient()

    async with S3Adapter(client, "assets", prefix="site") as fs:
        await fs.write("css/app.css", "body { margin: 0 }")
        await fs.write("img/logo.png", b"\x89PNG\r\n\x1a\n...", WriteConfig(visibility="public"))
        await fs.create_dir("drafts")

        print("Recursive listing:")
        for record in await fs.list_contents("", recursive=True):
            print(f"  {record.type.value:4}  {record.path}")

        result = await fs.copy("img/logo.png", "img/logo-copy.png")
        visibility = await fs.get_visibility("img/logo-copy.png")
        print(f"\nCopied: {bool(result)} (visibility {visibility.visibility.value})")

        await fs.delete_dir("img")
        print(f"Keys left: {client.keys('assets')}")


if __name__ == "__main__":
    asyncio.run(main())
