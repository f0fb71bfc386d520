# SPDX-License-Identifier: MIT
"""
animix server entrypoint.

Wires FastMCP with the anime, manga and meta tool modules under animix/tools/.
Configuration comes from ANIMIX_* environment variables, e.g.
ANIMIX_CATALOG__TIMEOUT=10 or ANIMIX_CATALOG__SCHEDULE_TIMEZONE=Asia/Tokyo.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from mcp.server.fastmcp import FastMCP
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.config import CatalogConfig
from .services.anime import AnimeService
from .services.manga import MangaService
from .tools import anime, manga, meta

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ANIMIX_", env_nested_delimiter="__")

    catalog: CatalogConfig = CatalogConfig()
    log_level: str = "INFO"


def create_app(config: Optional[CatalogConfig] = None) -> FastMCP:
    config = config or Settings().catalog
    mcp = FastMCP("animix")

    anime.register_tools(mcp, AnimeService(config))
    manga.register_tools(mcp, MangaService(config))
    meta.register_tools(mcp, config)

    return mcp


def main() -> None:
    settings = Settings()
    # stdout carries the MCP stdio protocol
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting animix (timeout=%ss, attempts=%d)", settings.catalog.timeout, settings.catalog.max_attempts)
    create_app(settings.catalog).run()


if __name__ == "__main__":
    main()
