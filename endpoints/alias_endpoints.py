from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from groupconf.aliases import Aliases
from groupconf.config_file import MISSING
from groupconf.errors import ConfigError, NotFoundError

router = APIRouter(prefix="/aliases", tags=["aliases"])
logger = logging.getLogger(__name__)


class AliasPairsRequest(BaseModel):
    pairs: list[str] = Field(default_factory=list)


class AliasValueRequest(BaseModel):
    # Required; an explicit null is stored as JSON null.
    value: Any


def _aliases(request: Request) -> Aliases:
    return request.app.state.aliases


def _lock(request: Request) -> asyncio.Lock:
    # Every facade call is a read-modify-write on one shared store; run them one at a time.
    return request.app.state.aliases_lock


def _http_error(err: ConfigError) -> HTTPException:
    # Rendering text is left to the client; send the stable key and tokens.
    status = 404 if isinstance(err, NotFoundError) else 400
    logger.info("ALIAS REQUEST rejected: %s %s", err.name, list(err.tokens))
    return HTTPException(status_code=status, detail={"error": err.name, "tokens": [str(t) for t in err.tokens]})


@router.get("/{group}")
async def list_aliases(group: str, request: Request, value: str | None = None):
    aliases = _aliases(request)
    try:
        async with _lock(request):
            if value is not None:
                return JSONResponse({"alias": await aliases.by_value(value, group)})
            return JSONResponse(await aliases.list(group))
    except ConfigError as e:
        raise _http_error(e) from e


@router.get("/{group}/{alias}")
async def fetch_alias(group: str, alias: str, request: Request):
    try:
        async with _lock(request):
            value = await _aliases(request).fetch(alias, group)
    except ConfigError as e:
        raise _http_error(e) from e
    if value is MISSING:
        raise HTTPException(status_code=404, detail={"error": "NoAliasFound", "tokens": [alias]})
    return JSONResponse({"alias": alias, "value": value})


@router.post("/{group}")
async def update_aliases(group: str, body: AliasPairsRequest, request: Request):
    try:
        async with _lock(request):
            applied = await _aliases(request).parse_and_update(body.pairs, group)
    except ConfigError as e:
        raise _http_error(e) from e
    # Removed aliases are reported as null.
    return JSONResponse({k: (None if v is MISSING else v) for k, v in applied.items()})


@router.put("/{group}/{alias}")
async def set_alias(group: str, alias: str, body: AliasValueRequest, request: Request):
    try:
        async with _lock(request):
            await _aliases(request).update(alias, body.value, group)
    except ConfigError as e:
        raise _http_error(e) from e
    return JSONResponse({"alias": alias, "value": body.value})


@router.delete("/{group}/{alias}")
async def remove_alias(group: str, alias: str, request: Request):
    try:
        async with _lock(request):
            await _aliases(request).remove(alias, group)
    except ConfigError as e:
        raise _http_error(e) from e
    return Response(status_code=204)
