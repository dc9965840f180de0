"""
The command-line entry point for the jailed file system.

This script handles environment loading, logging configuration, and runs a
single operation against a jail.
"""

import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime

from dotenv import load_dotenv

from jail_fs.errors import FileSystemError
from jail_fs.filesystem import JailedFileSystem
from jail_fs.models.session import FileEntry
from jail_fs.utils.dependencies import get_base_config

logger = logging.getLogger(__name__)


def setup_environment() -> bool:
    """
    Loads environment variables and configures application-wide logging.
    """
    load_dotenv()  # Load environment variables from .env file.

    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    logging.debug("Environment and logging configured.")
    return True


def parse_args(argv: list[str]) -> argparse.Namespace:
    config = get_base_config()
    parser = argparse.ArgumentParser(prog="jail-fs", description="Operate on files inside a jail root")
    parser.add_argument("--root", default=config.JAIL_ROOT, help="Jail root directory")
    parser.add_argument("--cwd", default=config.JAIL_CWD, help="Working directory inside the jail")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("pwd", help="Print the working directory")
    subparsers.add_parser("uuid", help="Print a unique name")
    ls_parser = subparsers.add_parser("ls", help="List a directory")
    ls_parser.add_argument("path", nargs="?", default=".")
    for name, help_text in (
        ("stat", "Show metadata for a path"),
        ("cat", "Write a file's contents to stdout"),
        ("mkdir", "Create a directory"),
        ("rm", "Delete a file or an empty directory"),
    ):
        subparsers.add_parser(name, help=help_text).add_argument("path")
    put_parser = subparsers.add_parser("put", help="Write stdin to a file")
    put_parser.add_argument("path")
    put_parser.add_argument("--append", action="store_true")
    mv_parser = subparsers.add_parser("mv", help="Rename a path")
    mv_parser.add_argument("src")
    mv_parser.add_argument("dst")
    chmod_parser = subparsers.add_parser("chmod", help="Change permission bits")
    chmod_parser.add_argument("mode", type=lambda value: int(value, 8), help="Octal mode, e.g. 644")
    chmod_parser.add_argument("path")
    return parser.parse_args(argv)


def format_entry(entry: FileEntry) -> str:
    entry_type = "d" if entry.is_directory() else "f"
    modified = datetime.fromtimestamp(entry.mtime).strftime("%Y-%m-%d %H:%M")
    return f"{entry_type} {entry.permissions:04o} {entry.size:>10} {modified} {entry.name}"


async def run_command(fs: JailedFileSystem, args: argparse.Namespace) -> None:
    out = sys.stdout
    match args.command:
        case "pwd":
            out.write(fs.current_directory() + "\n")
        case "uuid":
            out.write(fs.get_unique_name() + "\n")
        case "ls":
            entries = await fs.list(args.path)
            for entry in sorted(entries, key=lambda e: e.name):
                out.write(format_entry(entry) + "\n")
        case "stat":
            out.write(format_entry(await fs.get(args.path)) + "\n")
        case "cat":
            async with await fs.read(args.path) as stream:
                async for chunk in stream:
                    out.buffer.write(chunk)
            out.buffer.flush()
        case "put":
            data = sys.stdin.buffer.read()
            async with await fs.write(args.path, append=args.append) as stream:
                await stream.write(data)
        case "mkdir":
            out.write(await fs.mkdir(args.path) + "\n")
        case "rm":
            await fs.delete(args.path)
        case "mv":
            await fs.rename(args.src, args.dst)
        case "chmod":
            await fs.chmod(args.path, args.mode)


def run(argv: list[str] | None = None) -> int:
    """
    Sets up the environment and runs one command inside the jail.
    """
    if not setup_environment():
        logging.critical("Initial environment setup failed. Exiting.")
        return 1

    args = parse_args(sys.argv[1:] if argv is None else argv)
    fs = JailedFileSystem(
        root=args.root,
        cwd=args.cwd,
        chunk_size=get_base_config().JAIL_READ_CHUNK_SIZE,
    )
    logger.debug("Running %s in jail %s (cwd %s)", args.command, fs.root, fs.cwd)
    try:
        asyncio.run(run_command(fs, args))
    except (FileSystemError, OSError) as e:
        sys.stderr.write(f"jail-fs: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(run())
