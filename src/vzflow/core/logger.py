"""
日志配置模块
"""
import sys
from pathlib import Path
from typing import Dict

from loguru import logger
from .config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

_configured = False
# run_id -> sink id，避免同一次运行重复添加文件输出
_workflow_sinks: Dict[str, int] = {}


def _console_stream():
    for stream in (sys.stdout, sys.__stdout__, sys.stderr, sys.__stderr__):
        if stream is not None:
            return stream
    return None


def setup_logger(force: bool = False):
    """配置日志系统

    Args:
        force: 为 True 时移除已有处理器并按当前 settings 重新配置
    """
    global _configured
    if _configured and not force:
        return logger

    # 移除默认处理器
    logger.remove()
    _workflow_sinks.clear()

    # 创建日志目录
    log_dir = Path(settings.log_path)
    log_dir.mkdir(parents=True, exist_ok=True)

    # 控制台输出
    console_missing = False
    if settings.log_console_enabled:
        stream = _console_stream()
        if stream is not None:
            logger.add(stream, level=settings.log_level, format=CONSOLE_FORMAT)
        else:
            console_missing = True

    # 文件输出 - 全局日志
    logger.add(
        log_dir / "vzflow_{time:YYYY-MM-DD}.log",
        level=settings.log_level,
        format=FILE_FORMAT,
        rotation="00:00",  # 每天午夜轮转
        retention=f"{settings.log_retention_days} days",
        encoding="utf-8",
    )

    # 错误日志单独记录
    logger.add(
        log_dir / "error_{time:YYYY-MM-DD}.log",
        level="ERROR",
        format=FILE_FORMAT,
        rotation="00:00",
        retention=f"{settings.log_retention_days * 2} days",
        encoding="utf-8",
    )

    _configured = True
    if console_missing:
        logger.warning("未检测到可用控制台输出流，仅写入文件日志")
    return logger


def get_workflow_logger(run_id: str):
    """获取单次工作流运行专用日志器"""
    run_logger = logger.bind(run_id=run_id)
    if run_id in _workflow_sinks:
        return run_logger

    log_dir = Path(settings.log_path) / "runs"
    log_dir.mkdir(parents=True, exist_ok=True)

    _workflow_sinks[run_id] = logger.add(
        log_dir / f"run_{run_id}_{{time:YYYY-MM-DD}}.log",
        level=settings.log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
        rotation="00:00",
        retention=f"{settings.log_retention_days} days",
        encoding="utf-8",
        filter=lambda record: record["extra"].get("run_id") == run_id,
    )
    return run_logger


def release_workflow_logger(run_id: str) -> None:
    """运行结束后移除该 run_id 的文件输出并关闭日志文件"""
    sink_id = _workflow_sinks.pop(run_id, None)
    if sink_id is None:
        return
    logger.remove(sink_id)


# 初始化日志系统
setup_logger()
