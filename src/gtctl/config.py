"""
Client settings — ~/.gtctl/config.json, overridden by GTCTL_* environment variables.
"""

import json
import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from gtctl.errors import ConfigError
from gtctl.transport.channel import DEFAULT_RUN_DIR

CONFIG_FILE = Path.home() / ".gtctl" / "config.json"

ENV_VARS = {
    "run_dir": "GTCTL_RUN_DIR",
    "device": "GTCTL_DEVICE",
    "timeout": "GTCTL_TIMEOUT",
}


class ControlSettings(BaseModel):
    run_dir: str = DEFAULT_RUN_DIR
    device: Optional[str] = None
    # None blocks on the daemon forever
    timeout: Optional[float] = Field(default=None, gt=0)


def _load_config(config_file: Path) -> dict:
    try:
        text = config_file.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read {config_file}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return {}


def load_settings(
    config_file: Path = CONFIG_FILE,
    environ: Optional[Mapping[str, str]] = None,
) -> ControlSettings:
    environ = os.environ if environ is None else environ
    cfg = _load_config(config_file)
    if not isinstance(cfg, dict):
        cfg = {}
    for key, var in ENV_VARS.items():
        if environ.get(var):
            cfg[key] = environ[var]
    try:
        return ControlSettings.model_validate(cfg)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(p) for p in err["loc"])
        raise ConfigError(f"invalid setting {loc}: {err['msg']}") from e
