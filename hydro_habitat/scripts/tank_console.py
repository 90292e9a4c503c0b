# tank_console.py
"""
Terminal front end for the tank catalog.

Renders the catalog after every state change and turns typed commands into
controller intents:

    a       add a tank
    e N     edit tank number N
    d N     delete tank number N (asks for confirmation)
    r       reload the catalog
    q       quit

Form prompts show the current value; press Enter to keep it or type "-"
to empty the field.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from hydro_habitat.catalog.controller import CatalogController, CatalogState
from hydro_habitat.catalog.store_client import TankStoreClient
from hydro_habitat.core.config import settings
from hydro_habitat.core.logging_config import setup_logging
from hydro_habitat.schemas.tank import Tank, TankFormValues

EMPTY_CATALOG_MESSAGE = "No tanks found. Add one to get started!"

# typed at a form prompt to empty that field
CLEAR_ANSWER = "-"

FORM_PROMPTS = [
    ("name", "Tank Name"),
    ("volume_liters", "Volume (Liters)"),
    ("water", "Water (tap/ro/rodi)"),
    ("room", "Room"),
    ("rack_location", "Rack Location"),
    ("inventory_number", "Inventory Number"),
    ("notes", "Notes"),
]

Ask = Callable[[str], str]


def describe_tank(number: int, tank: Tank) -> str:
    location = f"{tank.room or 'N/A'} - {tank.rack_location or 'N/A'}"
    return (
        f"{number:>3}. {tank.name} [{tank.inventory_number or 'No ID'}] "
        f"{tank.volume_liters} L, {tank.water.value}, {location}"
    )


def render_catalog(state: CatalogState) -> str:
    lines = ["Tank Inventory", "=============="]
    if state.is_loading:
        lines.append("Loading tanks...")
    if state.error:
        lines.append(state.error)
    if not state.is_loading and not state.error:
        if state.items:
            lines.extend(describe_tank(i, tank) for i, tank in enumerate(state.items, start=1))
        else:
            lines.append(EMPTY_CATALOG_MESSAGE)
    if state.is_form_open:
        lines.append("Edit Tank" if state.editing_tank else "Add New Tank")
    return "\n".join(lines)


def prompt_form(values: TankFormValues, ask: Ask) -> TankFormValues:
    """
    Ask for every form field. An empty answer keeps the current value and
    CLEAR_ANSWER empties the field.
    """
    answers = values.model_dump()
    for field_name, label in FORM_PROMPTS:
        current = answers[field_name]
        answer = ask(f"{label} [{current}]: ")
        if answer.strip() == CLEAR_ANSWER:
            answers[field_name] = ""
        elif answer:
            answers[field_name] = answer
    return TankFormValues(**answers)


def _pick(state: CatalogState, argument: str) -> Optional[Tank]:
    try:
        index = int(argument) - 1
    except ValueError:
        return None
    if 0 <= index < len(state.items):
        return state.items[index]
    return None


def _print_state(state: CatalogState) -> None:
    # intermediate snapshots would only flicker
    if state.is_loading or state.is_saving:
        return
    print(render_catalog(state))


async def run_console(controller: CatalogController, ask: Ask = input) -> None:
    controller.subscribe(_print_state)
    await controller.start()

    while True:
        command = (await asyncio.to_thread(ask, "\n[a]dd, [e]dit N, [d]elete N, [r]efresh, [q]uit > ")).strip()
        if not command:
            continue
        action, _, argument = command.partition(" ")

        if action == "q":
            break
        elif action == "r":
            await controller.refresh()
        elif action == "a":
            controller.begin_create()
        elif action in ("e", "d"):
            tank = _pick(controller.state, argument.strip())
            if tank is None:
                print("Unknown tank number.")
                continue
            if action == "d":
                await controller.delete_entity(tank.id)
                continue
            controller.begin_edit(tank)
        else:
            print(f"Unknown command: {command}")
            continue

        # keep the form up until it saves or the user gives up
        while controller.state.is_form_open:
            values = await asyncio.to_thread(prompt_form, controller.state.form_values, ask)
            if await controller.submit(values):
                break
            retry = await asyncio.to_thread(ask, "Try again? [Y/n] ")
            if retry.strip().lower() == "n":
                controller.cancel()


def confirm_with(ask: Ask) -> Callable[[str], Awaitable[bool]]:
    """A confirm port that asks through `ask` without blocking the event loop."""

    async def confirm(message: str) -> bool:
        answer = await asyncio.to_thread(ask, f"{message} [y/N] ")
        return answer.strip().lower() in ("y", "yes")

    return confirm


def main():
    setup_logging("console", level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
    controller = CatalogController(
        TankStoreClient(), confirm=confirm_with(input), notify=lambda message: print(f"!! {message}")
    )
    asyncio.run(run_console(controller))


if __name__ == "__main__":
    main()
