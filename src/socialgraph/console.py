"""Interactive console menu over the graph service.

One request at a time: the loop reads an option, prompts for the required
fields, calls the service and prints the outcome.  Core errors are printed
and the loop continues; only startup (connection or bootstrap) failures
end the program.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable
from collections.abc import Callable

from socialgraph.config import BootstrapConfig
from socialgraph.config import Neo4jConfig
from socialgraph.errors import SocialGraphError
from socialgraph.models.nodes import Person
from socialgraph.models.schemas import GraphStats
from socialgraph.service import GraphService

logger = logging.getLogger(__name__)

Ask = Callable[[str], Awaitable[str]]
Say = Callable[[str], None]

MENU = """
=== MINI SOCIAL NETWORK ===
1. Add person
2. List all people
3. Find person
4. Create friendship
5. Show friends of a person
6. Delete friendship
7. Recommendations by city
8. Recommendations by hobby
9. Statistics
10. Delete person
0. Exit
"""

_NAME_WIDTH = 20
_CITY_WIDTH = 15
_HOBBY_WIDTH = 15

# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def _cell(value: str | None, width: int) -> str:
    return (value or "")[:width].ljust(width)


def format_people(rows: list[Person]) -> str:
    """Render people as a fixed-width table."""
    if not rows:
        return "No people registered."
    lines = [
        f"{'Name':<{_NAME_WIDTH}} {'City':<{_CITY_WIDTH}} {'Hobby':<{_HOBBY_WIDTH}}",
        "-" * (_NAME_WIDTH + _CITY_WIDTH + _HOBBY_WIDTH + 2),
    ]
    for person in rows:
        lines.append(
            f"{_cell(person.name, _NAME_WIDTH)} "
            f"{_cell(person.city, _CITY_WIDTH)} "
            f"{_cell(person.hobby, _HOBBY_WIDTH)}"
        )
    return "\n".join(lines)


def format_person(person: Person) -> str:
    view = person.to_display()
    return f"Found: {view['name']} | {view['city']} | {view['hobby']}"


def format_stats(stats: GraphStats) -> str:
    return "\n".join(
        [
            f"Total people: {stats.total_people}",
            f"Total friendships: {stats.total_friendships}",
            f"Average friends per person: {stats.average_friends_per_person:.2f}",
        ]
    )


# ---------------------------------------------------------------------------
# Prompting
# ---------------------------------------------------------------------------


async def _stdin_ask(prompt: str) -> str:
    return await asyncio.to_thread(input, prompt)


async def ask_required(ask: Ask, say: Say, prompt: str) -> str:
    """Prompt until a non-blank answer is given; return it stripped."""
    while True:
        value = (await ask(prompt)).strip()
        if value:
            return value
        say("This field is required.")


# ---------------------------------------------------------------------------
# Menu loop
# ---------------------------------------------------------------------------


async def _handle(option: str, service: GraphService, ask: Ask, say: Say) -> None:
    if option == "1":
        name = await ask_required(ask, say, "Name: ")
        city = await ask_required(ask, say, "City: ")
        hobby = await ask_required(ask, say, "Hobby: ")
        await service.add_person(name, city, hobby)
        say("Person created/updated.")
    elif option == "2":
        say(format_people(await service.list_people()))
    elif option == "3":
        name = await ask_required(ask, say, "Name to find: ")
        person = await service.find_person(name)
        say(format_person(person) if person else "Person not found.")
    elif option == "4":
        a = await ask_required(ask, say, "Name 1: ")
        b = await ask_required(ask, say, "Name 2: ")
        if await service.create_friendship(a, b):
            say("Friendship created (symmetric).")
        else:
            say("No changes (already friends or invalid names).")
    elif option == "5":
        name = await ask_required(ask, say, "Person: ")
        friends = await service.list_friends(name)
        say(format_people(friends) if friends else "No friends registered.")
    elif option == "6":
        a = await ask_required(ask, say, "Name 1: ")
        b = await ask_required(ask, say, "Name 2: ")
        removed = await service.delete_friendship(a, b)
        say(f"Friendships removed: {removed}")
    elif option == "7":
        name = await ask_required(ask, say, "Person: ")
        say("-- Recommendations by city --")
        say(format_people(await service.recommend_by_city(name)))
    elif option == "8":
        name = await ask_required(ask, say, "Person: ")
        say("-- Recommendations by hobby --")
        say(format_people(await service.recommend_by_hobby(name)))
    elif option == "9":
        say(format_stats(await service.stats()))
    elif option == "10":
        name = await ask_required(ask, say, "Name to delete: ")
        await service.delete_person(name)
        say("Person (and their friendships) deleted.")
    else:
        say("Invalid option. Try again.")


async def run_menu(
    service: GraphService, *, ask: Ask = _stdin_ask, say: Say = print
) -> None:
    """Drive the menu until the user picks ``0``."""
    while True:
        say(MENU)
        option = (await ask("Choose an option: ")).strip()
        if option == "0":
            say("Goodbye!")
            return
        try:
            await _handle(option, service, ask, say)
        except SocialGraphError as exc:
            say(f"Error: {exc}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="socialgraph",
        description="Interactive mini social network backed by Neo4j.",
    )
    parser.add_argument(
        "--memory",
        action="store_true",
        help="Use the in-memory backend instead of Neo4j.",
    )
    parser.add_argument(
        "--bootstrap",
        default=BootstrapConfig.file_path,
        help="Cypher file applied once at startup (default: %(default)s).",
    )
    parser.add_argument(
        "--no-bootstrap",
        action="store_true",
        help="Skip the startup batch entirely.",
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Keep applying bootstrap statements after one fails.",
    )
    parser.add_argument("--log-level", default="WARNING")
    return parser


async def _run(args: argparse.Namespace) -> None:
    if args.memory:
        service = GraphService.in_memory()
    else:
        service = await GraphService.connect(Neo4jConfig.from_env())
    try:
        if not args.no_bootstrap:
            await service.bootstrap_from_file(
                BootstrapConfig(
                    file_path=args.bootstrap,
                    stop_on_error=not args.continue_on_error,
                )
            )
        await run_menu(service)
    finally:
        await service.close()


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(_run(args))
    except SocialGraphError as exc:
        logger.error("Fatal error: %s", exc)
        return 1
    except (KeyboardInterrupt, EOFError):
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
