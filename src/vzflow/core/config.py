"""
核心配置模块
"""
from typing import Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """系统配置"""

    model_config = SettingsConfigDict(
        env_prefix="VZFLOW_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # 日志
    log_level: str = Field(default="INFO")
    log_path: str = Field(default="./logs")
    log_retention_days: int = Field(default=3)
    log_console_enabled: bool = Field(default=True)

    # 条件等待
    wait_interval_ms: int = Field(default=50)
    # None 表示无限等待（默认行为）
    wait_timeout_s: Optional[float] = Field(default=None)

    # OCR
    paddle_ocr_lang: str = Field(default="en")
    ocr_min_confidence: float = Field(default=0.5)

    # 图像特征匹配
    image_match_threshold: float = Field(default=0.5)
    feature_print_size: int = Field(default=32)

    # 线程池（<=0 表示自动计算）
    compute_thread_pool_size: int = Field(default=0)
    io_thread_pool_size: int = Field(default=0)

    # 键盘事件日志
    event_log_size: int = Field(default=512)

    # 安装向导
    account_username: str = Field(default="admin")
    account_password: str = Field(default="secret123")
    globe_template_path: str = Field(default="assets/globe.png")
    globe_anchor: Tuple[int, int] = Field(default=(915, 682))

    @property
    def wait_interval(self) -> float:
        """轮询间隔（秒）"""
        return max(0, self.wait_interval_ms) / 1000.0


# 全局配置实例
settings = Settings()
