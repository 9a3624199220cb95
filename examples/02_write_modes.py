"""
Write modes, progress and batch uploads
"""
import asyncio
import os
from dboxpy import DropboxClient, DropboxError, WriteMode


async def main():
    async with DropboxClient(os.environ["DROPBOX_ACCESS_TOKEN"]) as dbx:

        # Replace whatever is at /Builds/app.ipa
        result = await dbx.upload("app.ipa", "/Builds", WriteMode.OVERWRITE)
        print(f"Overwritten: {result.path} rev {result.rev}")

        # Replace only if nobody changed it since we read revision `rev`
        try:
            result = await dbx.upload(
                "app.ipa", "/Builds", WriteMode.UPDATE, update_rev=result.rev
            )
            print(f"Updated to rev {result.rev}")
        except DropboxError as e:
            print(f"Update rejected: {e}")

        # Files of 150 MB or more go through an upload session
        def on_progress(progress):
            print(f"{progress.state.name}: {progress.percentage:.1f}%")

        result = await dbx.upload("archive.tar.gz", "/Backups", progress_callback=on_progress)
        print(f"Uploaded in {result.chunk_count} chunk(s)")

        # Several files, two at a time
        results = await dbx.upload_many(
            ["a.log", "b.log", "c.log"], "/Logs", max_concurrent=2
        )
        for r in results:
            print(f"{r.name}: {r.rev}")


if __name__ == "__main__":
    asyncio.run(main())
