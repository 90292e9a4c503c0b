"""
Catalog controller: the single owner of the tank catalog on the client side.

The controller keeps the list of tanks, the loading/error status and the one
add/edit form, and routes every read and write through a TankStore. It never
edits `items` locally: after each successful write it reloads the whole list
from the store.

The presentation layer constructs one controller, hands it two ports
(`confirm` for yes/no questions, `notify` for blocking messages) and
subscribes to state snapshots:

    controller = CatalogController(TankStoreClient(), confirm=ask, notify=alert)
    controller.subscribe(render)
    await controller.start()
"""

import inspect
import logging
from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable, List, Optional, Union

from pydantic import ValidationError

from hydro_habitat.catalog.store_client import TankStore, TankStoreError
from hydro_habitat.catalog.validation import VALIDATION_MESSAGE, TankValidationError, to_tank_input
from hydro_habitat.schemas.tank import Tank, TankFormValues, TankUpdate

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to fetch tanks. The backend might be starting up."
SAVE_ERROR_PREFIX = "Error saving tank: "
DELETE_ERROR_PREFIX = "Error deleting tank: "
DELETE_CONFIRM_PROMPT = "Are you sure you want to delete this tank?"

# a console may answer from a worker thread, so the answer can be awaitable
ConfirmPort = Callable[[str], Union[bool, Awaitable[bool]]]
NotifyPort = Callable[[str], None]
StateListener = Callable[["CatalogState"], None]


@dataclass(frozen=True)
class CatalogState:
    """Snapshot of everything the presentation layer renders."""

    items: List[Tank] = field(default_factory=list)
    is_loading: bool = False
    error: Optional[str] = None
    # None while the form is open means "create"
    editing_tank: Optional[Tank] = None
    is_form_open: bool = False
    form_values: Optional[TankFormValues] = None
    is_saving: bool = False

    @property
    def is_empty(self) -> bool:
        """Loaded fine, and there is nothing in the catalog."""
        return not self.is_loading and self.error is None and not self.items


def _decline(message: str) -> bool:
    return False


class CatalogController:
    def __init__(
        self,
        store: TankStore,
        confirm: Optional[ConfirmPort] = None,
        notify: Optional[NotifyPort] = None,
    ):
        self.store = store
        self._confirm = confirm or _decline
        self._notify = notify or (lambda message: logger.warning(message))
        self._state = CatalogState()
        self._listeners: List[StateListener] = []
        # bumped every time a form opens or closes
        self._form_session = 0

    # --- observable state ---

    @property
    def state(self) -> CatalogState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call `listener` with a fresh snapshot after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, **changes) -> None:
        if "items" in changes:
            changes["items"] = list(changes["items"])
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    # --- loading ---

    async def start(self) -> None:
        await self.refresh()

    async def refresh(self) -> bool:
        """
        Reload the whole catalog from the store.

        On failure the last known items are kept and `error` is set; there is
        no retry. `is_loading` is cleared on every exit path.
        """
        self._set_state(is_loading=True, error=None)
        loaded = False
        try:
            tanks = await self.store.list_tanks()
        except TankStoreError as e:
            logger.warning(f"Tank list refresh failed: {e.user_detail}")
            self._set_state(is_loading=False, error=LOAD_ERROR_MESSAGE)
        else:
            logger.info(f"Loaded {len(tanks)} tanks")
            self._set_state(items=tanks, is_loading=False, error=None)
            loaded = True
        finally:
            if self._state.is_loading:
                self._set_state(is_loading=False)
        return loaded

    # --- the add/edit form ---

    def _open_form(self, editing_tank: Optional[Tank], values: TankFormValues) -> None:
        self._form_session += 1
        self._set_state(editing_tank=editing_tank, is_form_open=True, form_values=values)

    def _close_form(self) -> None:
        self._form_session += 1
        self._set_state(editing_tank=None, is_form_open=False, form_values=None)

    def begin_create(self) -> None:
        self._open_form(None, TankFormValues())

    def begin_edit(self, tank: Tank) -> None:
        if not any(item.id == tank.id for item in self._state.items):
            raise ValueError(f"Tank {tank.id} is not in the catalog")
        # a copy, so a reload of `items` cannot change an open form
        snapshot = tank.model_copy(deep=True)
        self._open_form(snapshot, TankFormValues.from_tank(snapshot))

    def cancel(self) -> None:
        self._close_form()

    async def submit(self, form_values: Union[TankFormValues, dict]) -> bool:
        """
        Validate the form and write it to the store.

        Returns True when the write went through. On a validation or write
        failure the form stays open with the submitted values and the user is
        notified.
        """
        if isinstance(form_values, dict):
            try:
                form_values = TankFormValues.model_validate(form_values)
            except ValidationError as e:
                logger.warning(f"Unreadable form values: {e}")
                self._notify(VALIDATION_MESSAGE)
                return False
        if self._state.is_form_open:
            self._set_state(form_values=form_values)

        if self._state.is_saving:
            logger.warning("Ignoring submit while a previous save is still in flight")
            return False

        try:
            payload = to_tank_input(form_values)
        except TankValidationError as e:
            self._notify(e.message)
            return False

        editing_tank = self._state.editing_tank
        session = self._form_session
        self._set_state(is_saving=True)
        try:
            if editing_tank is not None:
                await self.store.update_tank(editing_tank.id, TankUpdate.model_validate(payload.model_dump()))
                logger.info(f"Tank {editing_tank.id} updated")
            else:
                created = await self.store.create_tank(payload)
                logger.info(f"Tank {created.id} created")
        except TankStoreError as e:
            logger.warning(f"Saving tank failed: {e.user_detail}")
            self._notify(SAVE_ERROR_PREFIX + e.user_detail)
            return False
        finally:
            self._set_state(is_saving=False)

        # a form closed (or reopened) while the write was in flight is left alone
        if self._form_session == session and self._state.is_form_open:
            self._close_form()
        await self.refresh()
        return True

    # --- deleting ---

    async def delete_entity(self, tank_id: str) -> bool:
        """
        Delete a tank after the user confirms. The tank stays in `items`
        until the next successful refresh, including when the delete fails.
        """
        confirmed = self._confirm(DELETE_CONFIRM_PROMPT)
        if inspect.isawaitable(confirmed):
            confirmed = await confirmed
        if not confirmed:
            return False

        try:
            await self.store.delete_tank(tank_id)
        except TankStoreError as e:
            logger.warning(f"Deleting tank {tank_id} failed: {e.user_detail}")
            self._notify(DELETE_ERROR_PREFIX + e.user_detail)
            return False

        logger.info(f"Tank {tank_id} deleted")
        await self.refresh()
        return True
