"""
FastAPI backend: contact card conversion between vCard and chat data messages.
Run with uvicorn: uvicorn api.main:app --reload
"""

import base64
import binascii
import logging
from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from contactshare.application import ContactShareService, Invalid
from contactshare.config import Settings, load_settings
from contactshare.infrastructure import (
    InMemoryAvatarStore,
    NativeContactCodec,
    VCardCodec,
    WireMessageCodec,
    reachable_numbers,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def build_service(settings: Settings) -> ContactShareService:
    return ContactShareService(
        WireMessageCodec(),
        VCardCodec(),
        NativeContactCodec(include_avatar=settings.import_native_avatars),
        InMemoryAvatarStore(),
        sending_enabled=settings.sending_enabled,
        find_reachable_numbers=partial(reachable_numbers, default_region=settings.default_region),
    )


def get_service(app: FastAPI) -> ContactShareService:
    if getattr(app.state, "service", None) is None:
        app.state.service = build_service(load_settings())
    return app.state.service


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = load_settings()
    app.state.service = build_service(settings)
    logger.info(
        "Contact share API ready (sending enabled: %s, default region: %s).",
        settings.sending_enabled,
        settings.default_region or "none",
    )
    yield


app = FastAPI(title="Contactshare API", lifespan=lifespan)


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: conversion ---


class VCardBody(BaseModel):
    vcard: str


class MessageBody(BaseModel):
    # Base64 of the serialized data message.
    payload: str


class OutgoingMessage(BaseModel):
    payload: str
    display_name: str
    reachable_numbers: list[str] = []


class ReceivedCard(BaseModel):
    vcard: str
    display_name: str
    valid: bool


@app.post("/convert/vcard-to-message")
def vcard_to_message(body: VCardBody, request: Request) -> OutgoingMessage:
    service = get_service(request.app)
    received = service.import_vcard(body.vcard.encode("utf-8"))
    if isinstance(received, Invalid):
        raise HTTPException(status_code=400, detail=received.reason)
    share = service.prepare_outgoing(received.contact)
    if isinstance(share, Invalid):
        raise HTTPException(status_code=400, detail=share.reason)
    return OutgoingMessage(
        payload=base64.b64encode(share.payload).decode("ascii"),
        display_name=share.display_name,
        reachable_numbers=service.reachable_numbers(received.contact),
    )


@app.post("/convert/message-to-vcard")
def message_to_vcard(body: MessageBody, request: Request) -> ReceivedCard:
    service = get_service(request.app)
    try:
        data = base64.b64decode(body.payload, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="Payload is not valid base64")
    received = service.receive_data_message(data)
    if isinstance(received, Invalid):
        raise HTTPException(status_code=400, detail=received.reason)
    exported = service.export_vcard(received.contact)
    if isinstance(exported, Invalid):
        raise HTTPException(status_code=400, detail=exported.reason)
    return ReceivedCard(
        vcard=exported.data.decode("utf-8"),
        display_name=exported.display_name,
        valid=received.contact.is_valid(),
    )
