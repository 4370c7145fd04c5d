import json
import re
from pathlib import Path
from typing import Dict, List, Optional

from jsonschema import Draft202012Validator

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
SITE_CONFIG_SCHEMA = "site_config.schema.json"
SITE_CONFIG_FILE = "site.config.json"
REQUIRED_FIELDS = ("siteName", "baseUrl", "defaultDescription", "defaultOgImage", "locale")
DEFAULT_OG_IMAGE = "/images/og-default.png"

HTTP_URL = re.compile(r"^https?://")

_VALIDATORS: Dict[str, Draft202012Validator] = {}


def _validator(schema_name: str = SITE_CONFIG_SCHEMA) -> Draft202012Validator:
    if schema_name in _VALIDATORS:
        return _VALIDATORS[schema_name]
    path = SCHEMA_DIR / schema_name
    if not path.exists():
        raise FileNotFoundError(f"Schema {schema_name} not found in {SCHEMA_DIR}")
    schema = json.loads(path.read_text(encoding="utf-8"))
    Draft202012Validator.check_schema(schema)
    validator = Draft202012Validator(schema)
    _VALIDATORS[schema_name] = validator
    return validator


def invalid_fields(config: object) -> Optional[List[str]]:
    """
    Required fields that are missing or not non-blank strings, in declaration order.
    Returns None when the config is not a JSON object at all.
    """
    if not isinstance(config, dict):
        return None
    bad = set()
    for error in _validator().iter_errors(config):
        if error.validator == "required":
            bad.update(name for name in REQUIRED_FIELDS if name not in config)
        elif error.path:
            bad.add(str(error.path[0]))
    return [name for name in REQUIRED_FIELDS if name in bad]


def config_errors(config: object) -> List[str]:
    fields = invalid_fields(config)
    if fields is None:
        return [f"{SITE_CONFIG_FILE} must contain a JSON object"]
    return [f"Missing or empty string field: {name}" for name in fields]


def config_warnings(config: object) -> List[str]:
    if not isinstance(config, dict):
        return []
    warnings: List[str] = []
    base_url = config.get("baseUrl")
    if isinstance(base_url, str) and not HTTP_URL.match(base_url):
        warnings.append("baseUrl should start with http:// or https://")
    og_image = config.get("defaultOgImage")
    if isinstance(og_image, str) and not og_image.startswith("/") and not HTTP_URL.match(og_image):
        warnings.append("defaultOgImage should be root-relative (/images/...) or absolute (https://...)")
    return warnings


def base_url_of(config: object) -> Optional[str]:
    if isinstance(config, dict):
        value = config.get("baseUrl")
        if isinstance(value, str) and value:
            return value
    return None
