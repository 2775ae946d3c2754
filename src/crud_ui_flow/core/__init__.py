"""Core package initialization."""

from crud_ui_flow.core.config import CacheConfig, FlowConfig, UIConfig

__all__ = [
    "CacheConfig",
    "FlowConfig",
    "UIConfig",
]
