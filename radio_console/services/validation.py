"""
Validation d'unicite des radios / Radio uniqueness validation.

Chaque champ valide (ID, serienummer) suit la machine d'etats
idle -> checking -> valid | invalid. Chaque frappe replanifie la verification
apres une periode de silence ; un compteur de generation garantit que seule
la verification de la derniere valeur peut modifier l'etat.
Each validated field (ID, serial number) follows the state machine
idle -> checking -> valid | invalid. Every keystroke reschedules the check
after a quiet period; a generation counter ensures only the check for the
latest value may update the state.
"""

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from radio_console.models.radio import RADIO_ID_LENGTH
from radio_console.schemas.radio import RadioRead
from radio_console.services.repository import Repository
from radio_console.store import TransportError

log = logging.getLogger(__name__)


class FieldState(str, enum.Enum):
    """Etat de validation d'un champ / Field validation state."""
    IDLE = "idle"
    CHECKING = "checking"
    VALID = "valid"
    INVALID = "invalid"


class ValidationConflict(Exception):
    """ID ou serienummer deja utilise / ID or serial number already in use."""

    def __init__(self, field: str, value: str, message: str):
        super().__init__(message)
        self.field = field
        self.value = value
        self.message = message


@dataclass(frozen=True)
class Messages:
    taken: str
    available: str
    checking: str = "Controleren..."
    error: str = "Fout bij controleren"


ID_MESSAGES = Messages(taken="Dit ID is al in gebruik", available="ID is beschikbaar")
SERIAL_MESSAGES = Messages(taken="Dit serienummer is al in gebruik", available="Serienummer is beschikbaar")


def sanitize_radio_id(raw: str) -> str:
    """Chiffres uniquement, 4 max / Digits only, at most 4."""
    return "".join(ch for ch in raw if ch.isdigit())[:RADIO_ID_LENGTH]


def normalize_serial(raw: str) -> str:
    return raw.upper()


class UniquenessChecker:
    """Recherches ponctuelles, jamais servies par le cache / One-shot lookups, never served from cache."""

    def __init__(self, radios: Repository[RadioRead]):
        self.radios = radios

    async def id_taken(self, radio_id: str) -> bool:
        return await self.radios.get_by_id(radio_id, use_cache=False) is not None

    async def serial_taken(self, serienummer: str) -> bool:
        found = await self.radios.get_by("serienummer", normalize_serial(serienummer), use_cache=False)
        return found is not None

    async def ensure_available(self, radio_id: str | None = None, serienummer: str | None = None) -> None:
        """Lever ValidationConflict si deja pris / Raise ValidationConflict when already taken."""
        if radio_id is not None and await self.id_taken(radio_id):
            raise ValidationConflict("id", radio_id, ID_MESSAGES.taken)
        if serienummer is not None and await self.serial_taken(serienummer):
            raise ValidationConflict("serienummer", normalize_serial(serienummer), SERIAL_MESSAGES.taken)

    async def availability(self, radio_id: str | None = None, serienummer: str | None = None) -> dict:
        """Verification immediate, sans debounce / Immediate check, no debounce.

        Un ID incomplet reste idle, comme dans le formulaire.
        An incomplete ID stays idle, as in the form.
        """
        result = {}
        if radio_id is not None:
            value = sanitize_radio_id(radio_id)
            if len(value) == RADIO_ID_LENGTH:
                state, message = await evaluate("id", value, self.id_taken, ID_MESSAGES)
            else:
                state, message = FieldState.IDLE, ""
            result["id"] = {"status": state.value, "message": message}
        if serienummer:
            state, message = await evaluate(
                "serienummer", normalize_serial(serienummer), self.serial_taken, SERIAL_MESSAGES,
            )
            result["serienummer"] = {"status": state.value, "message": message}
        return result


Lookup = Callable[[str], Awaitable[bool]]
OnChange = Callable[["FieldValidator"], Awaitable[None]]


async def evaluate(name: str, value: str, lookup: Lookup, messages: Messages) -> tuple[FieldState, str]:
    """Une recherche -> etat final ; une erreur de transport bloque (invalid).
    One lookup -> final state; a transport error fails closed (invalid).
    """
    try:
        taken = await lookup(value)
    except TransportError as exc:
        log.warning("Uniqueness check failed for %s=%r: %s", name, value, exc)
        return FieldState.INVALID, messages.error
    if taken:
        return FieldState.INVALID, messages.taken
    return FieldState.VALID, messages.available


class FieldValidator:
    """Verification debouncee d'un champ / Debounced check of one field."""

    def __init__(
        self,
        name: str,
        lookup: Lookup,
        messages: Messages,
        delay: float = 0.5,
        normalize: Callable[[str], str] = str,
        accept: Callable[[str], bool] = bool,
        on_change: OnChange | None = None,
    ):
        self.name = name
        self.lookup = lookup
        self.messages = messages
        self.delay = delay
        self.normalize = normalize
        self.accept = accept
        self.on_change = on_change

        self.value = ""
        self.state = FieldState.IDLE
        self.message = ""
        self.generation = 0
        self._timer: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()

    def snapshot(self) -> dict:
        return {"field": self.name, "value": self.value, "status": self.state.value, "message": self.message}

    async def _set(self, state: FieldState, message: str = "") -> None:
        self.state = state
        self.message = message
        if self.on_change is not None:
            await self.on_change(self)

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def schedule(self, raw: str) -> str:
        """Nouvelle frappe / New keystroke.

        Annule la verification en attente et en planifie une nouvelle.
        Cancels the pending check and schedules a new one.
        """
        value = self.normalize(raw)
        self.value = value
        self.generation += 1
        self._cancel_timer()

        if not self.accept(value):
            await self._set(FieldState.IDLE)
            return value

        task = asyncio.ensure_future(self._run(value, self.generation))
        self._timer = task
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return value

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            # Typiquement le client s'est deconnecte pendant la verification
            # Typically the client disconnected mid-check
            log.warning("State change for %s dropped: %r", self.name, exc)

    async def _run(self, value: str, generation: int) -> None:
        await asyncio.sleep(self.delay)
        if generation != self.generation:
            return

        # Le minuteur est ecoule : la requete n'est plus annulable
        # Timer elapsed: the request can no longer be cancelled
        self._timer = None
        await self._set(FieldState.CHECKING, self.messages.checking)
        state, message = await evaluate(self.name, value, self.lookup, self.messages)

        if generation != self.generation:
            log.debug("Discarding stale check for %s=%r", self.name, value)
            return
        await self._set(state, message)

    async def reset(self) -> None:
        self.generation += 1
        self._cancel_timer()
        self.value = ""
        await self._set(FieldState.IDLE)

    def close(self) -> None:
        """Demontage : annule le minuteur, ignore tout resultat en vol / Teardown: cancel timer, drop any in-flight result."""
        self.generation += 1
        self._cancel_timer()

    async def drain(self) -> None:
        """Attendre la fin des taches en cours / Wait for outstanding tasks."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


class RadioFormValidator:
    """Validation du formulaire radio / Radio form validation.

    En edition, aucune verification : l'enregistrement existe deja.
    When editing, no checks run: the record already exists.
    """

    def __init__(
        self,
        checker: UniquenessChecker,
        delay: float = 0.5,
        editing: bool = False,
        on_change: OnChange | None = None,
    ):
        self.editing = editing
        self.id = FieldValidator(
            "id",
            checker.id_taken,
            ID_MESSAGES,
            delay=delay,
            normalize=sanitize_radio_id,
            accept=lambda v: len(v) == RADIO_ID_LENGTH,
            on_change=on_change,
        )
        self.serienummer = FieldValidator(
            "serienummer",
            checker.serial_taken,
            SERIAL_MESSAGES,
            delay=delay,
            normalize=normalize_serial,
            on_change=on_change,
        )

    @property
    def fields(self) -> dict[str, FieldValidator]:
        return {"id": self.id, "serienummer": self.serienummer}

    async def input(self, field: str, raw: str) -> str:
        validator = self.fields.get(field)
        if validator is None:
            raise KeyError(field)
        if self.editing:
            validator.value = validator.normalize(raw)
            return validator.value
        return await validator.schedule(raw)

    def can_submit(self) -> bool:
        if self.editing:
            return True
        return (
            self.id.state == FieldState.VALID
            and len(self.id.value) == RADIO_ID_LENGTH
            and self.serienummer.state == FieldState.VALID
        )

    def snapshot(self) -> dict:
        return {
            "editing": self.editing,
            "can_submit": self.can_submit(),
            "fields": {name: v.snapshot() for name, v in self.fields.items()},
        }

    async def reset(self) -> None:
        """Formulaire vide apres enregistrement / Empty form after a save."""
        for validator in self.fields.values():
            await validator.reset()

    def close(self) -> None:
        for validator in self.fields.values():
            validator.close()

    async def drain(self) -> None:
        for validator in self.fields.values():
            await validator.drain()
