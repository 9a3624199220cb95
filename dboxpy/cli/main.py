"""dboxpy CLI - Main commands."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

from dboxpy import DropboxClient, DropboxError, DEFAULT_CHUNK_SIZE, setup_logging
from dboxpy.core.upload.models import SessionState, UploadProgress, WriteMode

app = typer.Typer(
    name="dboxpy",
    help="Upload files to Dropbox",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)]
    )
    setup_logging(logging.DEBUG)


def make_client(
    access_token: Optional[str],
    app_key: Optional[str],
    app_secret: Optional[str],
    keychain: Optional[str],
    keychain_password: Optional[str],
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> DropboxClient:
    return DropboxClient(
        access_token,
        app_key=app_key,
        app_secret=app_secret,
        keychain=keychain,
        keychain_password=keychain_password,
        prompt=typer.prompt,
        chunk_size=chunk_size
    )


@app.command()
def upload(
    file_path: Path = typer.Argument(
        ..., envvar="DROPBOX_FILE_PATH", help="Path to the uploaded file",
        exists=True, dir_okay=False, readable=True
    ),
    dropbox_path: str = typer.Option(
        "", "--dropbox-path", "-d", envvar="DROPBOX_PATH",
        help="Path to the destination Dropbox folder"
    ),
    write_mode: str = typer.Option(
        "add", "--write-mode", "-m", envvar="DROPBOX_WRITE_MODE",
        help="add, overwrite or update"
    ),
    update_rev: Optional[str] = typer.Option(
        None, "--update-rev", envvar="DROPBOX_UPDATE_REV",
        help="Revision to update (required with --write-mode update)"
    ),
    app_key: Optional[str] = typer.Option(
        None, "--app-key", envvar="DROPBOX_APP_KEY", help="App Key of your Dropbox app"
    ),
    app_secret: Optional[str] = typer.Option(
        None, "--app-secret", envvar="DROPBOX_APP_SECRET", help="App Secret of your Dropbox app"
    ),
    access_token: Optional[str] = typer.Option(
        None, "--access-token", envvar="DROPBOX_ACCESS_TOKEN",
        help="Access token (skips the keychain and authorization)"
    ),
    keychain: Optional[str] = typer.Option(
        None, "--keychain", envvar="DROPBOX_KEYCHAIN", help="Keychain holding the access token"
    ),
    keychain_password: Optional[str] = typer.Option(
        None, "--keychain-password", envvar="DROPBOX_KEYCHAIN_PASSWORD",
        help="Password to unlock the keychain"
    ),
    chunk_size: int = typer.Option(
        DEFAULT_CHUNK_SIZE, "--chunk-size", min=1,
        help="Files of this size or larger are uploaded in chunks of this size"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Upload a file to Dropbox."""
    configure_logging(verbose)

    try:
        mode = WriteMode.parse(write_mode)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--write-mode")
    if mode is WriteMode.UPDATE and not update_rev:
        raise typer.BadParameter("update_rev required", param_hint="--update-rev")

    async def do_upload():
        console.print(f"Starting upload of {file_path} to Dropbox")
        client = make_client(
            access_token, app_key, app_secret, keychain, keychain_password, chunk_size
        )
        async with client:
            await client.authorize()
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console
            ) as progress:
                task = progress.add_task(f"Uploading {file_path.name}", total=100)

                def on_progress(p: UploadProgress):
                    if p.state is SessionState.DONE:
                        progress.update(task, completed=100)
                    else:
                        progress.update(task, completed=p.percentage)

                return await client.upload(
                    file_path,
                    dropbox_path,
                    write_mode=mode,
                    update_rev=update_rev,
                    progress_callback=on_progress
                )

    try:
        result = run_async(do_upload())
    except DropboxError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Successfully uploaded file to Dropbox at {result.path}[/green]")
    console.print(f"Revision: {result.rev}")
    console.print(f"Size: {result.size:,} bytes ({result.chunk_count} chunk(s))")


@app.command()
def login(
    app_key: str = typer.Option(..., "--app-key", envvar="DROPBOX_APP_KEY", help="App Key of your Dropbox app"),
    app_secret: str = typer.Option(..., "--app-secret", envvar="DROPBOX_APP_SECRET", help="App Secret of your Dropbox app"),
    keychain: Optional[str] = typer.Option(None, "--keychain", envvar="DROPBOX_KEYCHAIN"),
    keychain_password: Optional[str] = typer.Option(None, "--keychain-password", envvar="DROPBOX_KEYCHAIN_PASSWORD"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Authorize with Dropbox and store the access token in the keychain."""
    configure_logging(verbose)

    async def do_login():
        async with make_client(None, app_key, app_secret, keychain, keychain_password) as client:
            await client.authorize()

    try:
        run_async(do_login())
    except DropboxError as e:
        console.print(f"[red]Login failed: {e}[/red]")
        raise typer.Exit(1)

    console.print("[green]Authorized; access token is stored in the keychain[/green]")


@app.command()
def logout(
    keychain: Optional[str] = typer.Option(None, "--keychain", envvar="DROPBOX_KEYCHAIN"),
    keychain_password: Optional[str] = typer.Option(None, "--keychain-password", envvar="DROPBOX_KEYCHAIN_PASSWORD"),
):
    """Delete the stored access token."""
    async def do_logout():
        async with make_client(None, None, None, keychain, keychain_password) as client:
            return await client.logout()

    if run_async(do_logout()):
        console.print("[green]Access token removed from the keychain[/green]")
    else:
        console.print("[yellow]No stored access token[/yellow]")


def main():
    app()


if __name__ == "__main__":
    main()
