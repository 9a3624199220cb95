"""
Upload a file to Dropbox
"""
import asyncio
import os
from dboxpy import DropboxClient


async def main():
    # First run opens the authorization page and asks for the code;
    # later runs reuse the token cached in the keychain.
    async with DropboxClient(
        app_key=os.environ["DROPBOX_APP_KEY"],
        app_secret=os.environ["DROPBOX_APP_SECRET"]
    ) as dbx:

        # Upload to the root folder
        result = await dbx.upload("report.pdf")
        print(f"Uploaded: {result.path} (rev {result.rev})")

        # Upload to a folder
        result = await dbx.upload("build.zip", "/Builds/2024")
        print(f"Uploaded: {result.path}")


if __name__ == "__main__":
    asyncio.run(main())
