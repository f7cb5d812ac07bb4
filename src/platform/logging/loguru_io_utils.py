from inspect import getfile, getsourcelines
from os.path import basename
import re
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    MASK,
    SENSITIVE_KEYWORDS,
    TRUNCATE_LIMIT,
    call_depth_var,
    chain_start_time_var,
)


# Matches key=value / 'key': 'value' pairs inside repr() output
_SENSITIVE_PAIR = re.compile(
    r"""(['"]?)\b({keys})\1(\s*[=:]\s*)(['"])(.*?)\4""".format(
        keys='|'.join(sorted(SENSITIVE_KEYWORDS, key=len, reverse=True))
    )
)


def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    try:
        lineno = getsourcelines(func)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(getattr(func, "__func__", func)))}::{func.__qualname__}:{lineno}'


def increase_call_depth() -> None:
    call_depth_var.set(call_depth_var.get() + 1)


def reset_call_depth() -> None:
    layer = call_depth_var.get() - 1
    call_depth_var.set(layer)
    if layer <= 0:
        chain_start_time_var.set(0)


def mask_sensitive(data: Any) -> Any:
    try:
        text = str(data)
    except Exception:
        return data
    masked = _SENSITIVE_PAIR.sub(lambda m: f'{m[1]}{m[2]}{m[1]}{m[3]}{m[4]}{MASK}{m[4]}', text)
    return data if masked == text else masked


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    return MASK if keyword in SENSITIVE_KEYWORDS else value


def truncate_content(data: Any) -> Any:
    text = data if isinstance(data, str) else repr(data)
    if len(text) <= TRUNCATE_LIMIT:
        return data
    return f'{text[:TRUNCATE_LIMIT]}...(+{len(text) - TRUNCATE_LIMIT} chars)'
