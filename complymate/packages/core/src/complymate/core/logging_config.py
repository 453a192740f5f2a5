"""日志初始化 -- structlog 事件统一经标准库 logging 输出到 stderr

任务变更、通知推送等事件带 service 字段，便于和 uvicorn/httpx 日志区分；
CLI 的报表写 stdout，日志只写 stderr，二者互不干扰。
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from .config import get_log_format, get_log_level

SERVICE_NAME = "complymate"

# 第三方库的逐请求/逐连接日志，只保留 WARNING 及以上
NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "multipart")


def _add_service(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_service,
    ]


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(log_format: str | None = None, level: int | None = None) -> None:
    """初始化日志

    Args:
        log_format: "dev" 或 "json"，缺省读取 COMPLYMATE_LOG_FORMAT
        level: 标准库 logging 级别，缺省读取 COMPLYMATE_LOG_LEVEL
    """
    log_format = log_format or get_log_format()
    level = get_log_level() if level is None else level

    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    final_processors: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if log_format == "json":
        final_processors.append(structlog.processors.dict_tracebacks)
    final_processors.append(_renderer(log_format))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=final_processors,
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
