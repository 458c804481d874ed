"""Program name, version and the help text shown in the about box."""

from __future__ import annotations

NAME = "Com Monitor"
VERSION = "1.20"

_SEPARATOR = "-" * 53

_FEATURES = (
    "能实现对串口的读取与写入, 16进制与字符方式两种",
    "支持文件发送, 保存到文本",
    "支持自动发送, 自定义发送周期",
    "自动识别已有串口",
    "支持串口超时设置",
    "提供128个ASCII码表供代码转换时参考",
    "接收字符数据时, 支持'\\b'控制字符与Linux终端颜色控制序列",
    "接收字符数据时, 支持GB2312中文显示",
    "支持命令文件, 可保存并发送常用命令",
)

_PARAMETERS = (
    "最大发送文件大小: 1MB(1048576字节)实际文件大小.",
    "发送区最大文本大小: (同<最大发送文件大小)",
    "数据接收区缓冲区大小(16进制与文本字符一样): 不限制",
    "停止显示后, 内部保存数据缓冲区大小: 1MB",
    "读串口时, 一次性最大读取大小: 1MB",
)

_USAGE = (
    "先设置好各个串口的参数之后打开串口进行读与写",
    "一般设置(需参考硬件):",
    "    波特率: 9600",
    "    校验位: 无",
    "    数据位: 8位",
    "    停止位: 1位",
)

_OTHERS = (
    "自动发送时间间隔范围: 10ms~60000ms",
    "16进制发送格式: 每个16进制值由两个相邻字符组成, 空白字符用于分隔",
    "字符发送模式下可以使用转义字符:",
    "    1.支持的字符型转义字符: \\r,\\n,\\t,\\v,\\a,\\b,\\\\",
    "    2.支持的16进制转义字符格式: \\x?? - 一个问号代表一个16进制字符, 不可省略其一",
    "    3.'?', ''', '\"' 等可打印字符不需要转义",
    "接收字符数据时, '\\r', '\\n', '\\r\\n', '\\n\\r' 均产生仅一个换行符, 即使分两次接收",
)


def name_and_version() -> str:
    """Return the program name followed by its version."""
    return f"{NAME} {VERSION}"


def _section(title: str, lines, numbered: bool = False) -> list[str]:
    out = [f"{title}:"]
    for number, line in enumerate(lines, start=1):
        out.append(f"    {number}.{line}" if numbered else f"    {line}")
    out.append(_SEPARATOR)
    return out


def about_text() -> str:
    """Return the help text: features, limits, usage and notes."""
    lines = [name_and_version(), _SEPARATOR]
    lines += _section("软件说明", _FEATURES, numbered=True)
    lines += _section("软件参数", _PARAMETERS)
    lines += _section("使用帮助", _USAGE)
    lines += _section("其它", _OTHERS)
    return "\n".join(lines) + "\n"