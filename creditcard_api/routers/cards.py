from __future__ import annotations

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from creditcard_api.core.utils import absolute_url
from creditcard_api.services.card_service import CardService, card_to_dict

router = APIRouter(prefix="/creditcards", tags=["creditcards"])


def _get_card_service(request: Request) -> CardService:
    svc = getattr(getattr(request.app, "state", None), "card_service", None)
    if not svc:
        raise RuntimeError("CardService nao configurado")
    return svc


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.get("")
def list_cards(request: Request, email: str = ""):
    svc = _get_card_service(request)
    cards = svc.cards_for_email(email)
    return [card_to_dict(card) for card in cards]


@router.post("", status_code=201)
def store_card(request: Request, payload: dict = Body(...)):
    svc = _get_card_service(request)
    email = payload.get("email")
    card = svc.register_and_issue(email if isinstance(email, str) else None)
    location = absolute_url(f"{router.prefix}/{card.id}")
    return JSONResponse(card_to_dict(card), status_code=201, headers={"Location": location})


@router.get("/{card_id}")
def show_card(card_id: int, request: Request):
    svc = _get_card_service(request)
    card = svc.get_card(card_id)
    if not card:
        return _error_response("Cartao nao encontrado.", 404)
    return card_to_dict(card)
