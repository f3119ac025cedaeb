from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from schema import Schema, And, Optional as Opt, SchemaError

CONFIG_ENV_VAR = "CMDSPACES_CONFIG"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(Exception):
    pass


class Config:
    config_file: Optional[Path]

    separator: str
    casefold: bool
    argv_offset: int
    bin: str
    log_level: str

    SCHEMA = Schema(
        {
            Opt("separator", default=":"): And(str, lambda s: len(s) > 0 and s != " "),
            Opt("casefold", default=False): bool,
            Opt("argv_offset", default=0): And(int, lambda n: n >= 0),
            Opt("bin", default="cmdspaces"): And(str, lambda s: len(s.strip()) > 0),
            Opt("log_level", default="INFO"): And(str, lambda s: s.upper() in LOG_LEVELS),
        }
    )

    _inst: Optional[Config] = None

    def __init__(self, config_file: Optional[Path] = None, **overrides):
        if config_file is None and CONFIG_ENV_VAR in os.environ:
            config_file = Path(os.environ[CONFIG_ENV_VAR])

        self.config_file = None if config_file is None else Path(config_file).resolve()
        self.load(overrides)

    @classmethod
    def instance(cls) -> Config:
        if cls._inst is None:
            cls._inst = cls()
        return cls._inst

    @classmethod
    def reset(cls, inst: Optional[Config] = None):
        cls._inst = inst

    @property
    def as_dict(self) -> Dict[str, Any]:
        ret = {}

        for attr in Config.__annotations__.keys():
            if attr == "_inst" or attr == "config_file" or attr == "SCHEMA":
                continue
            ret[attr] = getattr(self, attr)

        return ret

    @property
    def numeric_log_level(self) -> int:
        return getattr(logging, self.log_level.upper())

    def load(self, overrides: Optional[Dict[str, Any]] = None):
        data: Dict[str, Any] = {}

        if self.config_file is not None:
            try:
                with self.config_file.open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigError(
                    "Could not read config file {}: {}".format(self.config_file, e)
                ) from e

        if overrides:
            data.update(overrides)

        try:
            data = self.SCHEMA.validate(data)
        except SchemaError as e:
            raise ConfigError("Config does not fit schema: {}".format(e)) from e

        for attr, hint in Config.__annotations__.items():
            if attr not in data:
                continue

            val = data[attr]
            if hint == "str":
                val = str(val)
                if attr != "separator":
                    val = val.strip()

            setattr(self, attr, val)

    def save(self):
        if self.config_file is None:
            raise ConfigError("No config file to save to")

        with self.config_file.open("w", encoding="utf-8") as f:
            json.dump(self.as_dict, f, indent=4)


def get() -> Config:
    return Config.instance()
