"""
全局配置管理模組
提供幾何、可視圖、Voronoi、射線生長、搜索與日誌配置
"""

import json
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

import yaml

from ..utils.logger import get_logger, setup_logger


@dataclass
class GeometrySettings:
    """幾何配置"""
    # 頂點量化精度（小數點後位數）
    key_precision: int = 5


@dataclass
class VisibilitySettings:
    """可視圖配置"""
    # 共用端點計數超過此值時，視為穿過多邊形內部
    touch_threshold: int = 3


@dataclass
class VoronoiSettings:
    """Voronoi 骨架配置"""
    # 障礙物邊與畫布邊界的取樣間距
    sample_spacing: float = 20.0

    # 未提供畫布範圍時使用的預設值
    default_canvas_width: float = 800.0
    default_canvas_height: float = 600.0


@dataclass
class RayGrowthSettings:
    """射線生長（中軸近似）配置"""
    step: float = 5.0               # 每輪生長長度
    sample_spacing: float = 5.0     # 沿邊取樣間距
    initial_length: float = 5.0     # 射線初始長度
    boundary_margin: float = 50.0   # 生長邊界外擴距離
    max_rounds: int = 10000         # 生長輪數上限


@dataclass
class SearchSettings:
    """A* 搜索配置"""
    # 啟發式函數 ("manhattan", "euclidean", "chebyshev")
    heuristic: str = "manhattan"


@dataclass
class LoggingSettings:
    """日誌配置"""
    level: str = "INFO"
    log_to_file: bool = False
    log_dir: Optional[str] = None


@dataclass
class PlannerSettings:
    """規劃器配置集合"""
    geometry: GeometrySettings = field(default_factory=GeometrySettings)
    visibility: VisibilitySettings = field(default_factory=VisibilitySettings)
    voronoi: VoronoiSettings = field(default_factory=VoronoiSettings)
    ray_growth: RayGrowthSettings = field(default_factory=RayGrowthSettings)
    search: SearchSettings = field(default_factory=SearchSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    # 各區段名稱與對應類別
    _SECTIONS = {
        'geometry': GeometrySettings,
        'visibility': VisibilitySettings,
        'voronoi': VoronoiSettings,
        'ray_growth': RayGrowthSettings,
        'search': SearchSettings,
        'logging': LoggingSettings,
    }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlannerSettings':
        """
        從字典建立配置，缺少的區段使用預設值

        參數:
            data: 配置字典

        返回:
            PlannerSettings 實例
        """
        sections = {}
        for name, section_cls in cls._SECTIONS.items():
            if name in data:
                sections[name] = section_cls(**data[name])
        return cls(**sections)

    def load(self, config_file: str) -> bool:
        """
        從文件載入配置（依副檔名判斷 JSON / YAML）

        參數:
            config_file: 配置文件路徑

        返回:
            是否成功載入
        """
        logger = get_logger()
        try:
            if not os.path.exists(config_file):
                logger.warning(f"配置文件不存在: {config_file}")
                return False

            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.endswith(('.yaml', '.yml')):
                    config_data = yaml.safe_load(f) or {}
                else:
                    config_data = json.load(f)

            loaded = PlannerSettings.from_dict(config_data)
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logger.error(f"載入配置失敗: {e}")
            return False

        for name in self._SECTIONS:
            setattr(self, name, getattr(loaded, name))
        return True

    def save(self, config_file: str) -> bool:
        """
        儲存配置到文件

        參數:
            config_file: 配置文件路徑

        返回:
            是否成功儲存
        """
        try:
            directory = os.path.dirname(config_file)
            if directory:
                os.makedirs(directory, exist_ok=True)

            with open(config_file, 'w', encoding='utf-8') as f:
                if config_file.endswith(('.yaml', '.yml')):
                    yaml.safe_dump(self.get_dict(), f, allow_unicode=True, sort_keys=False)
                else:
                    json.dump(self.get_dict(), f, indent=4, ensure_ascii=False)

            return True
        except OSError as e:
            get_logger().error(f"儲存配置失敗: {e}")
            return False

    def reset_to_default(self):
        """重設為預設配置"""
        for name, section_cls in self._SECTIONS.items():
            setattr(self, name, section_cls())

    def get_dict(self) -> Dict[str, Any]:
        """獲取配置字典"""
        return {name: asdict(getattr(self, name)) for name in self._SECTIONS}


# 全局配置實例（唯讀預設值）
_global_settings: Optional[PlannerSettings] = None


def get_settings() -> PlannerSettings:
    """
    獲取全局配置實例（單例模式）

    返回:
        PlannerSettings 實例
    """
    global _global_settings
    if _global_settings is None:
        _global_settings = PlannerSettings()
    return _global_settings


def init_settings(config_file: Optional[str] = None) -> PlannerSettings:
    """
    初始化全局配置，並依 logging 區段重設預設日誌器

    參數:
        config_file: 配置文件路徑（可選）

    返回:
        PlannerSettings 實例
    """
    global _global_settings
    _global_settings = PlannerSettings()
    if config_file:
        _global_settings.load(config_file)

    log_config = _global_settings.logging
    setup_logger(
        level=log_config.level,
        log_dir=log_config.log_dir,
        log_to_file=log_config.log_to_file
    )
    return _global_settings
