"""Main application facade wiring settings, content store and composer."""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Optional

import yaml
from dotenv import load_dotenv

from schema_manager.modules.output.composer import OutputFilter, SchemaComposer
from schema_manager.modules.output.serializer import render_head
from schema_manager.modules.schema_types.registry import TypeFilter, TypeRegistry
from schema_manager.settings import SiteSettings

logger = logging.getLogger(__name__)


class SchemaManager:
    """Central application class that wires together every module.

    Usage::

        app = SchemaManager()
        app.initialize()
        html = app.render_head(item_id=42)
    """

    def __init__(
        self,
        config_path: str = "config/settings.yaml",
        env_path: str = ".env",
        clock: Optional[Callable] = None,
    ):
        self._config_path = config_path
        self._env_path = env_path
        self._clock = clock
        self.config: dict[str, Any] = {}
        self.settings = SiteSettings()
        self._initialized = False
        self._repository = None
        self._conflicts = None
        self._output_filters: list[OutputFilter] = []
        self._type_filters: list[TypeFilter] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, database_url: Optional[str] = None) -> None:
        """Load environment and configuration, then initialise the database."""
        if self._initialized:
            return

        env_file = Path(self._env_path)
        if env_file.exists():
            load_dotenv(env_file)
            logger.info("Loaded environment from %s", self._env_path)

        self.config = self._load_config()
        self.settings = SiteSettings.from_mapping(self.config.get("schema", {}))

        from schema_manager.database import init_db
        db_cfg = self.config.get("database", {})
        db_url = (
            database_url
            or os.getenv("SCHEMA_MANAGER_DATABASE_URL")
            or db_cfg.get("url")
        )
        init_db(database_url=db_url, echo=db_cfg.get("echo", False))

        self._initialized = True
        logger.info("SchemaManager initialised.")

    def _load_config(self) -> dict[str, Any]:
        """Load the YAML configuration file."""
        config_file = Path(self._config_path)
        if not config_file.exists():
            logger.warning("Config file not found: %s, using defaults.", self._config_path)
            return {}
        with open(config_file, "r", encoding="utf-8") as fh:
            config = yaml.safe_load(fh) or {}
        logger.info("Configuration loaded from %s", self._config_path)
        return config

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("Call initialize() before using the application.")

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def add_output_filter(self, output_filter: OutputFilter) -> None:
        """Register ``(schemas, item_id) -> schemas``, run before output."""
        self._output_filters.append(output_filter)

    def add_type_filter(self, type_filter: TypeFilter) -> None:
        """Register ``(type_map) -> type_map`` for the selectable type list."""
        self._type_filters.append(type_filter)

    # ------------------------------------------------------------------
    # Components (lazy)
    # ------------------------------------------------------------------

    def _get_composer(self) -> SchemaComposer:
        registry = TypeRegistry(clock=self._clock, type_filters=self._type_filters)
        return SchemaComposer(registry=registry, output_filters=self._output_filters)

    def _get_repository(self):
        if self._repository is None:
            from schema_manager.modules.content.repository import ContentRepository
            self._repository = ContentRepository()
        return self._repository

    def _get_conflict_detector(self):
        if self._conflicts is None:
            from schema_manager.conflicts import ConflictDetector
            self._conflicts = ConflictDetector(
                lambda: self.config.get("active_plugins", []) or []
            )
        return self._conflicts

    def _commerce_enabled(self) -> bool:
        return bool(self.config.get("commerce", {}).get("enabled", False))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def render(self, item_id: Optional[int] = None) -> list[Any]:
        """Schema objects for a site-wide page (no id) or a single item."""
        self._ensure_initialized()
        composer = self._get_composer()
        if item_id is None:
            return composer.compose(self.settings)

        repo = self._get_repository()
        item = repo.get_item(item_id)
        commerce = repo.get_commerce(item_id) if self._commerce_enabled() else None
        return composer.compose(self.settings, item, commerce)

    def render_head(self, item_id: Optional[int] = None) -> str:
        """``<script type="application/ld+json">`` tags for the page head."""
        return render_head(self.render(item_id))

    def preview(self, item_id: int) -> str:
        self._ensure_initialized()
        repo = self._get_repository()
        item = repo.get_item(item_id)
        commerce = repo.get_commerce(item_id) if self._commerce_enabled() else None
        return self._get_composer().preview(self.settings, item, commerce)

    def available_types(self) -> dict[str, str]:
        return TypeRegistry(type_filters=self._type_filters).available_types()

    def bulk_assign(self, taxonomy: str, term_id: int, schema_type: str, enable: bool = False) -> int:
        self._ensure_initialized()
        return self._get_repository().bulk_assign(
            taxonomy, term_id, schema_type, enable=enable,
            allowed_types=self.available_types(),
        )

    def save_overrides(self, item_id: int, **overrides: Any):
        self._ensure_initialized()
        return self._get_repository().save_overrides(item_id, **overrides)

    def import_content(self, path: str) -> dict[str, int]:
        """Import a YAML content file into the store."""
        self._ensure_initialized()
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        return self._get_repository().import_content(data)

    def detect_conflicts(self) -> list[str]:
        return self._get_conflict_detector().detect()

    def get_status(self) -> dict[str, Any]:
        return {
            "initialized": self._initialized,
            "enabled": self.settings.enabled,
            "schema_type": self.settings.schema_type,
            "website_schema": self.settings.website_schema,
            "breadcrumb_enabled": self.settings.breadcrumb_enabled,
            "enabled_post_types": list(self.settings.enabled_post_types),
            "commerce_enabled": self._commerce_enabled(),
        }
