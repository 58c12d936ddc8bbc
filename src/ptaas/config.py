"""
Client configuration, persisted as JSON in ``~/.ptaas/config.json``.
"""

import json
import logging
import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

CONFIG_FILE = Path.home() / ".ptaas" / "config.json"


class ClientConfig(BaseModel):
    dialect: Literal["camel", "snake"] = "camel"
    # log-and-ignore unknown failure symbols instead of rejecting the payload
    tolerate_unknown_symbols: bool = False


def config_path() -> Path:
    override = os.environ.get("PTAAS_CONFIG")
    return Path(override) if override else CONFIG_FILE


def load_config(path: Optional[Path] = None) -> ClientConfig:
    path = path or config_path()
    try:
        return ClientConfig.model_validate(json.loads(path.read_text()))
    except FileNotFoundError:
        return ClientConfig()
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("Ignoring invalid config at %s: %s", path, e)
        return ClientConfig()


def save_config(cfg: ClientConfig, path: Optional[Path] = None) -> Path:
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(cfg.model_dump(), indent=2))
    return path
