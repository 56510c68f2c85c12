# settings.py — API key (secrets → ENV → .env) + model names

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

API_KEY_NAMES = ("GEMINI_API_KEY", "API_KEY")

DEFAULT_RESEARCH_MODEL = "gemini-3-pro-preview"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_ANALYSIS_MODEL = "gemini-2.5-flash"


def _parse_env_file(path: str) -> dict:
    out = {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                s = line.strip()
                if not s or s.startswith("#") or "=" not in s:
                    continue
                k, v = s.split("=", 1)
                out[k.strip()] = v.strip().strip('"').strip("'")
    except FileNotFoundError:
        pass
    return out


def _from_secrets(secrets: Optional[Mapping], name: str) -> Optional[str]:
    if secrets is None:
        return None
    try:
        return secrets.get(name)
    except Exception as e:  # st.secrets raises when no secrets.toml exists
        logger.debug("secrets lookup for %s unavailable: %s", name, e)
        return None


def load_api_key(secrets: Optional[Mapping] = None, env_path: str = ".env") -> Optional[str]:
    for name in API_KEY_NAMES:
        v = _from_secrets(secrets, name)
        if v: return v
    for name in API_KEY_NAMES:
        v = os.environ.get(name)
        if v: return v
    envmap = _parse_env_file(env_path)
    for name in API_KEY_NAMES:
        v = envmap.get(name)
        if v:
            os.environ[name] = v
            return v
    return None


@dataclass(frozen=True)
class Settings:
    api_key: str
    research_model: str = DEFAULT_RESEARCH_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    analysis_model: str = DEFAULT_ANALYSIS_MODEL

    @classmethod
    def from_env(cls, api_key: str) -> "Settings":
        return cls(
            api_key=api_key,
            research_model=os.environ.get("BRANDVISION_RESEARCH_MODEL", DEFAULT_RESEARCH_MODEL),
            image_model=os.environ.get("BRANDVISION_IMAGE_MODEL", DEFAULT_IMAGE_MODEL),
            analysis_model=os.environ.get("BRANDVISION_ANALYSIS_MODEL", DEFAULT_ANALYSIS_MODEL),
        )


def log_level() -> str:
    return os.environ.get("BRANDVISION_LOG_LEVEL", "INFO").upper()
