import logging
import sys

from arbor import Command, Program, exactly, find_config, setup_logging

setup_logging(console_log_level=logging.WARNING)

REMOTES: dict[str, str] = {"origin": "https://example.com/repo.git"}


def list_remotes(program, record):
    for name, url in REMOTES.items():
        if record.flag("verbose"):
            program.println(f"{name}\t{url}")
        else:
            program.println(name)


def add_remote(program, record):
    name, url = record.tokens
    if name in REMOTES:
        raise ValueError(f"remote {name!r} already exists")
    REMOTES[name] = url
    if record.flag("fetch"):
        program.println(f"Fetching {name}...")
    program.println(f"Added {name} -> {url}")


async def rename_remote(program, record):
    old, new = record.tokens
    if old not in REMOTES:
        raise KeyError(old)
    answer = await program.input(f"Rename {old} to {new}? [y/N] ")
    if answer.strip().lower() == "y":
        REMOTES[new] = REMOTES.pop(old)
        program.println(f"Renamed {old} -> {new}")


remote = Command(name="remote", brief="Manage the set of tracked repositories")

listing = remote.add_subcommand(name="list", brief="List remotes", run=list_remotes)
listing.add_flag("verbose", "v", help="Show remote urls")

add = remote.add_subcommand(
    name="add",
    brief="Add a remote named <name> for the repository at <url>",
    usage="add <name> <url>",
    argument=exactly(2),
    run=add_remote,
)
add.add_flag("fetch", "f", help="Fetch the remote branches")
add.add_flag("track", "t", takes_value=True, help="Branch to track")

remote.add_subcommand(
    name="rename",
    brief="Rename a remote",
    argument=exactly(2),
    run=rename_remote,
)

program = Program(
    "remote_demo",
    brief="Arbor demo: nested sub-commands and flags",
    version="0.1.0",
    config=find_config("remote_demo"),
)
program.add_command(remote)

if __name__ == "__main__":
    argv = [arg for arg in sys.argv if arg != "--pause"]
    sys.exit(program.main(argv, pause=len(argv) != len(sys.argv)))
