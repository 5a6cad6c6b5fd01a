"""Site-wide schema settings: defaults, sanitisation and loading."""

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping

from schema_manager.utils.validators import validate_email, validate_url

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: dict[str, Any] = {
    "enabled": True,
    "schema_type": "Organization",
    "website_schema": True,
    "enabled_post_types": ("post", "page"),
    "breadcrumb_enabled": False,
    "site_name": "",
    "site_url": "",
    "site_description": "",
    "org_name": "",
    "org_url": "",
    "org_logo": "",
    "org_phone": "",
    "org_email": "",
    "org_street": "",
    "org_locality": "",
    "org_region": "",
    "org_postal_code": "",
    "org_country": "",
    "person_name": "",
    "person_url": "",
    "person_job_title": "",
    "person_image": "",
    "lb_price_range": "",
    "lb_opening_hours": "",
    "service_name": "",
    "service_description": "",
    "service_url": "",
    "service_type": "",
    "service_area": "",
}

_BOOL_FIELDS = ("enabled", "website_schema", "breadcrumb_enabled")
_URL_FIELDS = ("site_url", "org_url", "org_logo", "person_url", "person_image", "service_url")


@dataclass(frozen=True)
class SiteSettings:
    """Settings snapshot for a single render.  Every key always has a value."""

    enabled: bool = True
    schema_type: str = "Organization"
    website_schema: bool = True
    enabled_post_types: tuple[str, ...] = ("post", "page")
    breadcrumb_enabled: bool = False
    site_name: str = ""
    site_url: str = ""
    site_description: str = ""
    org_name: str = ""
    org_url: str = ""
    org_logo: str = ""
    org_phone: str = ""
    org_email: str = ""
    org_street: str = ""
    org_locality: str = ""
    org_region: str = ""
    org_postal_code: str = ""
    org_country: str = ""
    person_name: str = ""
    person_url: str = ""
    person_job_title: str = ""
    person_image: str = ""
    lb_price_range: str = ""
    lb_opening_hours: str = ""
    service_name: str = ""
    service_description: str = ""
    service_url: str = ""
    service_type: str = ""
    service_area: str = ""

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "SiteSettings":
        """Merge *raw* over the defaults and sanitise the result."""
        return cls(**sanitize_settings(raw or {}))

    def home_url(self, path: str = "/") -> str:
        """Return the site root URL joined with *path* (``""`` if unset)."""
        if not self.site_url:
            return ""
        return self.site_url.rstrip("/") + "/" + path.lstrip("/")

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return " ".join(str(value).split())


def sanitize_settings(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Coerce a raw settings mapping into clean, fully-populated values.

    Unknown keys are dropped.  Booleans are coerced, text is trimmed and
    whitespace-collapsed, URL and email fields that fail validation are
    blanked rather than rejected.
    """
    merged = dict(DEFAULT_SETTINGS)
    merged.update({k: v for k, v in raw.items() if k in DEFAULT_SETTINGS})

    clean: dict[str, Any] = {}
    for key, value in merged.items():
        if key in _BOOL_FIELDS:
            clean[key] = _as_bool(value)
        elif key == "enabled_post_types":
            if isinstance(value, str):
                value = value.split(",")
            clean[key] = tuple(
                _as_text(v).lower() for v in (value or ()) if _as_text(v)
            )
        else:
            clean[key] = _as_text(value)

    if not clean["schema_type"]:
        clean["schema_type"] = DEFAULT_SETTINGS["schema_type"]

    for key in _URL_FIELDS:
        if clean[key]:
            ok, err = validate_url(clean[key])
            if not ok:
                logger.warning("Dropping invalid %s setting: %s", key, err)
                clean[key] = ""

    if clean["org_email"]:
        ok, err = validate_email(clean["org_email"])
        if not ok:
            logger.warning("Dropping invalid org_email setting: %s", err)
            clean["org_email"] = ""

    return clean
