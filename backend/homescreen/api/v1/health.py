"""Health check endpoint."""

import os

from fastapi import APIRouter, Depends

from homescreen import __version__
from homescreen.core.dependencies import get_config_store
from homescreen.services.config_store import ConfigStore

router = APIRouter()


@router.get("/health")
def health_check(store: ConfigStore = Depends(get_config_store)):
    """Check that the data directory exists (or can be created) and is writable."""
    storage_status = "ok"

    try:
        store.data_dir.mkdir(parents=True, exist_ok=True)
        if not os.access(store.data_dir, os.W_OK):
            storage_status = "error"
    except OSError:
        storage_status = "error"

    return {
        "status": "ok" if storage_status == "ok" else "degraded",
        "storage": storage_status,
        "version": __version__,
    }
