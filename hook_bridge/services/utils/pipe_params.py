"""
管道分隔参数解析

格式：`key1: value 1 | key2: value 2`
- 按 `|` 切分，每段只按第一个 `:` 切成 key/value，value 中其余的 `:` 原样保留
- key/value 各自去掉首尾空白
- 空段、没有 `:` 的段、key 为空的段直接丢弃（不报错）
- 重复 key 以后出现的为准
"""
from __future__ import annotations

from typing import Dict

PARAM_SEPARATOR = "|"
KEY_VALUE_SEPARATOR = ":"


def collect_params_from_pipe_separated_text(text: str) -> Dict[str, str]:
    collected: Dict[str, str] = {}
    for segment in text.split(PARAM_SEPARATOR):
        segment = segment.strip()
        if not segment:
            continue

        key, sep, value = segment.partition(KEY_VALUE_SEPARATOR)
        key = key.strip()
        if not sep or not key:
            continue

        collected[key] = value.strip()
    return collected
