"""
配置模組
提供規劃器全局配置管理
"""

from .settings import (
    GeometrySettings,
    LoggingSettings,
    PlannerSettings,
    RayGrowthSettings,
    SearchSettings,
    VisibilitySettings,
    VoronoiSettings,
    get_settings,
    init_settings
)

__all__ = [
    'GeometrySettings',
    'LoggingSettings',
    'PlannerSettings',
    'RayGrowthSettings',
    'SearchSettings',
    'VisibilitySettings',
    'VoronoiSettings',
    'get_settings',
    'init_settings'
]
