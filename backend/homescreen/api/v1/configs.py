"""Authenticated CRUD endpoints for home-screen configurations.

Handlers are a thin transport: parse the body, call the store in the
threadpool, map store error codes to problem+json statuses. Records are
returned exactly as stored; the response schemas only document them.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from homescreen.core.dependencies import get_config_store, require_api_key
from homescreen.core.exceptions import ProblemDetailError
from homescreen.schemas.common import ErrorResponse
from homescreen.schemas.config import (
    ConfigMetadataResponse,
    ImportResponse,
    StoredConfigResponse,
)
from homescreen.services.config_store import ConfigStore, StoreResult
from homescreen.services.interchange import (
    build_export_document,
    export_filename,
    parse_import,
)

router = APIRouter(
    dependencies=[Depends(require_api_key)],
    responses={status: {"model": ErrorResponse} for status in (400, 401, 403, 404, 409, 500)},
)


async def _read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        raise ProblemDetailError.bad_request("Invalid JSON in request body") from exc


def _unwrap(result: StoreResult) -> Any:
    if not result.success:
        raise ProblemDetailError.from_store_error(result.error)
    return result.data


@router.get("", response_model=list[ConfigMetadataResponse])
async def list_configs(store: ConfigStore = Depends(get_config_store)):
    """Metadata of every stored configuration, most recently updated first."""
    return _unwrap(await run_in_threadpool(store.list_configs))


@router.post(
    "",
    response_model=None,
    status_code=201,
    responses={201: {"model": StoredConfigResponse}},
)
async def create_config(
    request: Request,
    config_id: str | None = Query(None, alias="id"),
    store: ConfigStore = Depends(get_config_store),
):
    payload = await _read_json_body(request)
    return _unwrap(await run_in_threadpool(store.create, payload, config_id))


@router.post("/import", response_model=None, responses={200: {"model": ImportResponse}})
async def import_config(request: Request):
    """Validate an uploaded document (wrapped or bare) and return its payload.

    Nothing is persisted; the editor loads the payload as unsaved state.
    """
    result = parse_import(await request.body())
    if not result.success:
        raise ProblemDetailError(
            status=400,
            title="Bad Request",
            detail="Invalid import document",
            code="VALIDATION_ERROR",
            errors=result.errors,
        )
    return {"data": result.payload}


@router.get(
    "/{config_id}",
    response_model=None,
    responses={200: {"model": StoredConfigResponse}},
)
async def get_config(config_id: str, store: ConfigStore = Depends(get_config_store)):
    return _unwrap(await run_in_threadpool(store.get, config_id))


@router.put(
    "/{config_id}",
    response_model=None,
    responses={200: {"model": StoredConfigResponse}},
)
async def update_config(
    config_id: str,
    request: Request,
    store: ConfigStore = Depends(get_config_store),
):
    """Replace the whole payload. Updating a missing ``default`` creates it."""
    payload = await _read_json_body(request)
    return _unwrap(await run_in_threadpool(store.update, config_id, payload))


@router.delete("/{config_id}", status_code=204)
async def delete_config(config_id: str, store: ConfigStore = Depends(get_config_store)):
    _unwrap(await run_in_threadpool(store.delete, config_id))
    return Response(status_code=204)


@router.get("/{config_id}/export")
async def export_config(config_id: str, store: ConfigStore = Depends(get_config_store)):
    """Download the configuration as a StoredConfig-shaped JSON file."""
    record = _unwrap(await run_in_threadpool(store.get, config_id))
    document = build_export_document(
        record["data"], config_id=record["id"], created_at=record["createdAt"]
    )
    filename = export_filename(record["id"])
    return JSONResponse(
        content=document,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
