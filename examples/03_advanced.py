"""
Advanced configuration: proxy, timeouts, CI keychain, logging
"""
import asyncio
import logging
import os
from dboxpy import (
    APIConfig,
    DropboxClient,
    MemorySecretStore,
    TimeoutConfig,
    setup_logging
)


async def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    setup_logging(logging.DEBUG)

    config = APIConfig.with_proxy(
        "http://proxy.internal:3128",
        timeout=TimeoutConfig(total=7200, sock_read=600),
        require_role="work"
    )

    # Dedicated keychain on a CI machine
    async with DropboxClient(
        app_key=os.environ["DROPBOX_APP_KEY"],
        app_secret=os.environ["DROPBOX_APP_SECRET"],
        keychain=os.path.expanduser("~/Library/Keychains/ci.keychain-db"),
        keychain_password=os.environ.get("CI_KEYCHAIN_PASSWORD"),
        config=config,
        chunk_size=64 * 1024 * 1024,
        work_dir="/tmp/dboxpy-parts"
    ) as dbx:
        result = await dbx.upload("nightly.zip", "/Nightly")
        print(f"Uploaded: {result.path}")

    # No keychain at all: keep the token in memory for this process
    store = MemorySecretStore()
    async with DropboxClient(
        app_key=os.environ["DROPBOX_APP_KEY"],
        app_secret=os.environ["DROPBOX_APP_SECRET"],
        secret_store=store
    ) as dbx:
        await dbx.authorize()
        print(f"Authorized: {dbx.is_authorized}")


if __name__ == "__main__":
    asyncio.run(main())
