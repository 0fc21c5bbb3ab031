"""
配置管理模組
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from .classifier import ACTION_VERBS, FeatureNameClassifier
from .models import DEFAULT_HOURS, DEFAULT_TICKET_PREFIX

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".ehour-sync"
CONFIG_FILE = CONFIG_DIR / "config.json"


@dataclass
class Config:
    """應用程式配置"""
    ticket_prefix: str = DEFAULT_TICKET_PREFIX   # e.g. MKIS → MKIS-869
    default_hours: int = DEFAULT_HOURS           # report 每日預設工時
    action_verbs: list[str] = field(default_factory=lambda: list(ACTION_VERBS))
    # eHour 頁面設定
    default_project: str = ""
    auto_submit: bool = False
    debug_mode: bool = False

    @classmethod
    def load(cls) -> "Config":
        """載入配置，檔案損壞或欄位型別不符時使用預設值"""
        if not CONFIG_FILE.exists():
            return cls()
        try:
            with open(CONFIG_FILE) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load {CONFIG_FILE}, using defaults: {e}")
            return cls()
        if not isinstance(data, dict):
            logger.warning(f"{CONFIG_FILE} is not a JSON object, using defaults")
            return cls()
        return cls(**cls._valid_fields(data))

    @classmethod
    def _valid_fields(cls, data: dict) -> dict:
        """只保留已知且型別正確的欄位"""
        defaults = asdict(cls())
        values = {}
        for key, value in data.items():
            if key not in defaults:
                continue
            expected = type(defaults[key])
            if expected is list:
                valid = isinstance(value, list) and all(isinstance(v, str) for v in value)
            elif expected is int:
                # bool 是 int 的子類別
                valid = isinstance(value, int) and not isinstance(value, bool) and value >= 0
            else:
                valid = isinstance(value, expected)
            if valid:
                values[key] = value
            else:
                logger.warning(f"Ignoring invalid config value {key}={value!r}")
        return values

    def save(self):
        """儲存配置"""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, 'w') as f:
            json.dump(asdict(self), f, indent=2, ensure_ascii=False)
        CONFIG_FILE.chmod(0o600)

    def get_classifier(self) -> FeatureNameClassifier:
        """依配置的動詞建立功能名稱判斷器"""
        return FeatureNameClassifier.from_verbs(self.action_verbs)
