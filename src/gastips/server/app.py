"""Starlette app factory with lifespan that loads the catalog once."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from starlette.applications import Starlette

from gastips.catalog.config import CONFIG_FILENAME, CatalogConfig, load_catalog_config
from gastips.catalog.index import Catalog
from gastips.catalog.loader import load_configured_catalog
from gastips.server.routes_system import routes as system_routes
from gastips.server.routes_tips import routes as tips_routes

logger = logging.getLogger(__name__)


def create_app(
    catalog: Catalog | None = None,
    config: CatalogConfig | None = None,
) -> Starlette:
    """Create the read-only catalog API.

    A prebuilt catalog wins; otherwise the catalog named by config (or
    .gastips.json in the working directory) is loaded at startup.
    """

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
        if catalog is not None:
            app.state.catalog = catalog
        else:
            cfg = config or load_catalog_config(Path.cwd() / CONFIG_FILENAME)
            app.state.catalog = load_configured_catalog(cfg)
        logger.info(f"Serving {len(app.state.catalog)} gas tips")
        yield

    return Starlette(routes=system_routes + tips_routes, lifespan=lifespan)
