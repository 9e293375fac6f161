"""
hosts 文件行的解析与序列化
"""

import re
from typing import Iterable, List, Optional

from hosts_writer.models import OWNER_MARKER, FileLine


ENCODING = "utf-8"

_LINE_BREAK = re.compile(r"(\r?\n)")
_OWNER_SUFFIX = re.compile(r"#(?P<container_id>[^\s#]+) " + re.escape(OWNER_MARKER) + r"$")


def detect_newline(raw: bytes) -> str:
    """文件已使用 CRLF 时返回 CRLF，否则返回 LF"""
    return "\r\n" if b"\r\n" in raw else "\n"


def parse_line(text: str, newline: Optional[str] = None) -> FileLine:
    """
    将单行分类为外部行或本程序拥有的行

    只有以所有权标记结尾的行才算拥有的行。
    """
    if not text.endswith(OWNER_MARKER):
        return FileLine(text, newline=newline)

    match = _OWNER_SUFFIX.search(text)
    return FileLine(
        text, True, match.group("container_id") if match else None, newline
    )


def decode(raw: bytes) -> List[FileLine]:
    """
    将文件内容解析为有序的行列表

    每行保留自己原有的行尾，混合 LF/CRLF 的文件也能原样写回。

    参数:
        raw: hosts 文件的原始字节

    返回:
        FileLine 列表，顺序与文件一致
    """
    # 带捕获组的 split 交替返回 行内容、行尾
    pieces = _LINE_BREAK.split(raw.decode(ENCODING, errors="surrogateescape"))
    lines = [
        parse_line(pieces[i], pieces[i + 1])
        for i in range(0, len(pieces) - 1, 2)
    ]
    if pieces[-1]:
        lines.append(parse_line(pieces[-1], ""))
    return lines


def encode(lines: Iterable[FileLine], newline: str = "\n") -> bytes:
    """
    按给定顺序序列化行列表

    已有的行使用自己的行尾；新行以及后面又追加了内容的无行尾末行
    使用 newline。

    参数:
        lines: FileLine 序列
        newline: 新行使用的行分隔符

    返回:
        要写回文件的字节
    """
    lines = list(lines)
    last = len(lines) - 1
    parts = []
    for index, line in enumerate(lines):
        ending = line.newline
        if ending is None or (not ending and index < last):
            ending = newline
        parts.append(line.text + ending)
    return "".join(parts).encode(ENCODING, errors="surrogateescape")
