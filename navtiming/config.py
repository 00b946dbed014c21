"""
Host Configuration

Reads the page's configuration source once per invocation into a typed
struct. Every consulted key is listed in CONFIG_KEYS.

Values are kept as the host supplied them; each consumer applies its
own rule (e.g. a non-numeric sampling factor means "never sample").
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional
import json
from pathlib import Path


# Struct attribute -> configuration key
CONFIG_KEYS: Dict[str, str] = {
    'sampling_factor': 'wgNavigationTimingSamplingFactor',  # admit with p = 1/F
    'user_id': 'wgUserId',                                  # None => anonymous
    'page_id': 'wgArticleId',
    'namespace_id': 'wgNamespaceNumber',
    'revision_id': 'wgCurRevisionId',
    'action': 'wgAction',                                   # view, submit, ...
    'powered_by_hhvm': 'wgPoweredByHHVM',                   # runtime label
    'special_page_name': 'wgCanonicalSpecialPageName',      # suppresses page identity
    'mobile_mode': 'wgMFMode',                              # omitted for desktop
    'post_edit': 'wgPostEdit',                              # triggers SaveTiming
}

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'config' / 'navtiming.json'


@dataclass(frozen=True)
class HostConfig:
    """Typed view over the host configuration for one page view."""
    sampling_factor: Any = None
    user_id: Any = None
    page_id: Any = None
    namespace_id: Any = None
    revision_id: Any = None
    action: Any = None
    powered_by_hhvm: Any = None
    special_page_name: Any = None
    mobile_mode: Any = None
    post_edit: Any = None

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None

    @property
    def is_special_page(self) -> bool:
        """Special pages carry placeholder ids (0) that must not be reported."""
        return bool(self.special_page_name)

    @property
    def runtime(self) -> str:
        return 'HHVM' if self.powered_by_hhvm else 'PHP5'

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> HostConfig:
        """Populate from an opaque key -> value lookup."""
        return cls(**{
            attribute: config.get(key)
            for attribute, key in CONFIG_KEYS.items()
        })

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> HostConfig:
        """Load from a JSON object keyed like the page configuration."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)

        if not isinstance(config, dict):
            raise ValueError(f"{config_path}: expected a JSON object")

        return cls.from_mapping(config)

    def to_mapping(self) -> Dict[str, Any]:
        return {
            CONFIG_KEYS[f.name]: getattr(self, f.name)
            for f in fields(self)
        }
