"""WebSocket de validation du formulaire radio / Radio form validation WebSocket.

Le client envoie chaque frappe ({"field": "id", "value": "10"}) ; le serveur
renvoie l'etat complet du formulaire a chaque changement.
The client sends every keystroke; the server pushes the full form state on
every change.
"""

import asyncio
import json

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect

from radio_console.api.deps import get_debounce_delay, get_radio_service
from radio_console.services.radio_service import RadioService
from radio_console.services.validation import FieldValidator, RadioFormValidator

router = APIRouter()


def parse_message(text: str) -> dict | None:
    """Objet JSON ou None / JSON object or None."""
    try:
        message = json.loads(text)
    except ValueError:
        return None
    return message if isinstance(message, dict) else None


class FormConnection:
    """Une connexion = un formulaire / One connection = one form."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket
        self._lock = asyncio.Lock()
        self.form: RadioFormValidator | None = None

    async def send(self, event: str, **extra):
        message = {"event": event, **self.form.snapshot(), **extra}
        async with self._lock:
            await self.websocket.send_text(json.dumps(message, ensure_ascii=False))

    async def on_change(self, validator: FieldValidator):
        await self.send("state", field=validator.name)


@router.websocket("/ws/radio-form")
async def websocket_radio_form(
    websocket: WebSocket,
    editing: bool = Query(default=False),
    service: RadioService = Depends(get_radio_service),
    delay: float = Depends(get_debounce_delay),
):
    """Validation d'unicite en direct / Live uniqueness validation.

    Types de messages entrants : input (field + value), snapshot, reset
    """
    await websocket.accept()
    connection = FormConnection(websocket)
    form = RadioFormValidator(service.checker, delay=delay, editing=editing, on_change=connection.on_change)
    connection.form = form
    await connection.send("ready")
    try:
        while True:
            message = parse_message(await websocket.receive_text())
            if message is None:
                await connection.send("error", detail="Message must be a JSON object")
                continue
            if message.get("type") == "snapshot":
                await connection.send("snapshot")
                continue
            if message.get("type") == "reset":
                await form.reset()
                await connection.send("reset")
                continue
            field = message.get("field")
            if field not in form.fields:
                await connection.send("error", detail=f"Unknown field: {field}")
                continue
            await form.input(field, str(message.get("value", "")))
            await connection.send("input", field=field)
    except WebSocketDisconnect:
        pass
    finally:
        # Demontage : aucun resultat en vol ne sera applique / Teardown: no in-flight result is applied
        form.close()
