from __future__ import annotations

import re

_LOCAL_PATTERN = re.compile(
    r"(^localhost)|(^127\.)|(^10\.)|(^172\.(1[6-9]|2[0-9]|3[0-1])\.)|(^192\.168\.)"
)


def is_local_instance(instance: str) -> bool:
    return bool(_LOCAL_PATTERN.search(instance.strip()))


def build_instance_url(instance: str) -> str:
    """Turn an instance address into a base URL.

    Local and private network hosts are reached over plain http, anything
    else over https. An explicit scheme is left untouched.
    """
    value = instance.strip().rstrip("/")
    if not value:
        raise ValueError("Instance address cannot be empty")

    if value.startswith("http://") or value.startswith("https://"):
        return value

    if is_local_instance(value):
        return f"http://{value}"
    return f"https://{value}"
