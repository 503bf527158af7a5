"""Load the JSON rule file into a validated :class:`~bankcsv.models.Config`.

Expected shape::

    {
      "AccountFromDescription": [
        {"Account": "Expenses:Coffee", "Regex": "Coffee"},
        ...
      ]
    }

Unknown keys are ignored; a missing ``AccountFromDescription`` yields no rules.
Regexes are not compiled here; a bad pattern surfaces when it is first
evaluated by the classifier.
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from pydantic import ValidationError

from .errors import ConfigError
from .logging_setup import get_logger
from .models import Config

logger = get_logger("bankcsv.config")


def parse_config(text: str | bytes, *, source: str = "<config>") -> Config:
    try:
        return Config.model_validate_json(text)
    except ValidationError as exc:
        raise ConfigError(f"invalid config {source}: {exc}") from exc


def load_config(path: str | PathLike[str]) -> Config:
    """Read and validate the rule file at ``path``."""

    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as exc:
        raise ConfigError(f"cannot read config {p}: {exc}") from exc
    cfg = parse_config(data, source=str(p))
    logger.debug("loaded %d rule(s) from %s", len(cfg.account_from_description), p)
    return cfg


__all__ = ["load_config", "parse_config"]
