# This file defines the names endpoints that store and list registered names.
# It exists so HTTP verbs and paths translate directly into NameRegistry calls.
# The router carries no prefix; the app mounts it under the primary path and the legacy alias.
# Responses are plain text, and storage failures are rendered by the shared error handlers.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response
from fastapi.responses import PlainTextResponse

from sandpit.api.dependencies import get_name_registry
from sandpit.api.plain_text import names_sentence
from sandpit.api.schemas.common import ErrorResponse
from sandpit.api.services.name_registry import NameRegistry

router = APIRouter(tags=["names"], responses={500: {"model": ErrorResponse}})
NameRegistryDep = Annotated[NameRegistry, Depends(get_name_registry)]


@router.get("", response_class=PlainTextResponse)
@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
def list_names(registry: NameRegistryDep) -> str:
    return names_sentence(registry.list_names())


# The path convertor keeps encoded slashes inside a single name.
@router.post("/{name:path}", response_class=Response)
def add_name(name: Annotated[str, Path(min_length=1)], registry: NameRegistryDep) -> Response:
    registry.add_name(name)
    return Response(status_code=200)
