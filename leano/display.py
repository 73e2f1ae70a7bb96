#!/usr/bin/env python3
"""
Text rendering of Leano replies

Pure functions: data in, text out. Fields that are missing or empty are
left out of the output entirely.
"""

import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .pages import PAGES, PageView
from .router_api import field_value

CLEAR_SCREEN = "\x1b[2J\x1b[H"

# Signal Quality Evaluation Functions


def evaluate_rssi(rssi):
    """
    Evaluate RSSI (Received Signal Strength Indicator)
    Range: -50 (excellent) to -120 (very poor) dBm
    """
    if rssi >= -65:
        return "Excellent", "🟢"
    elif rssi >= -75:
        return "Good", "🟢"
    elif rssi >= -85:
        return "Fair", "🟡"
    elif rssi >= -95:
        return "Poor", "🟠"
    else:
        return "Very Poor", "🔴"


def evaluate_rsrp(rsrp):
    """
    Evaluate RSRP (Reference Signal Received Power)
    Range: -44 (max) to -140 (min) dBm
    """
    if rsrp >= -80:
        return "Excellent", "🟢"
    elif rsrp >= -90:
        return "Good", "🟢"
    elif rsrp >= -100:
        return "Fair", "🟡"
    elif rsrp >= -110:
        return "Poor", "🟠"
    else:
        return "Very Poor", "🔴"


def evaluate_rsrq(rsrq):
    """
    Evaluate RSRQ (Reference Signal Received Quality)
    Range: -3 (excellent) to -20 (bad) dB
    """
    if rsrq >= -9:
        return "Excellent", "🟢"
    elif rsrq >= -12:
        return "Fair", "🟡"
    elif rsrq >= -15:
        return "Poor", "🟠"
    else:
        return "Very Poor", "🔴"


def evaluate_sinr(sinr):
    """
    Evaluate SINR (Signal-to-Interference plus Noise Ratio)
    Range: <0 (unusable) to 20+ (excellent)
    """
    if sinr >= 20:
        return "Excellent", "🟢"
    elif sinr >= 13:
        return "Good", "🟢"
    elif sinr >= 0:
        return "Fair", "🟡"
    else:
        return "Poor/Unusable", "🔴"


def _number(value: str) -> Optional[float]:
    """Leading number of a value like "-95" or "-95 dBm" """
    try:
        return float(value.split()[0])
    except (IndexError, ValueError):
        return None


# Value formatters


def format_bytes(value: str) -> str:
    """Format a byte count with binary units (1536 -> "1.50 KB")"""
    size = _number(value)
    if size is None:
        return value

    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{int(size)} B" if unit == "B" else f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} TB"


def format_duration(value: str) -> str:
    """Format seconds as "1d 02:03:04" (days omitted when zero)"""
    seconds = _number(value)
    if seconds is None:
        return value

    seconds = int(seconds)
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)
    clock = f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{days}d {clock}" if days else clock


def _with_unit(unit: str) -> Callable[[str], str]:
    return lambda value: f"{value} {unit}" if _number(value) is not None else value


def _with_quality(unit: str, evaluate) -> Callable[[str], str]:
    def format_signal(value: str) -> str:
        number = _number(value)
        if number is None:
            return value
        quality, emoji = evaluate(number)
        return f"{value} {unit}  {emoji} {quality}"
    return format_signal


def _percent(value: str) -> str:
    return f"{value}%" if _number(value) is not None else value


# Page layouts: (field, label, formatter)

Row = Tuple[str, str, Optional[Callable[[str], str]]]

PAGE_ROWS: Dict[PageView, List[Row]] = {
    PageView.DATA_USAGE: [
        ("recieve", "Downloaded", format_bytes),
        ("sentt", "Uploaded", format_bytes),
        ("WANUP", "WAN Uptime", format_duration),
    ],
    PageView.CONNECTION: [
        ("INTERNET", "Internet", None),
        ("TYPE", "Network Type", None),
        ("APN", "APN", None),
        ("CSQ", "CSQ", None),
        ("ICCID", "ICCID", None),
        ("IMSI", "IMSI", None),
    ],
    PageView.NETWORK: [
        ("MCC", "MCC", None),
        ("MNC", "MNC", None),
        ("BAND", "Band", None),
        ("EARFCN", "EARFCN", None),
        ("PCID", "PCI", None),
        ("TAC", "TAC", None),
        ("ENODE", "eNodeB", None),
        ("CELL", "Cell ID", None),
    ],
    PageView.CELL_INFO: [
        ("RSSI", "RSSI", _with_quality("dBm", evaluate_rssi)),
        ("RSRP", "RSRP", _with_quality("dBm", evaluate_rsrp)),
        ("RSRQ", "RSRQ", _with_quality("dB", evaluate_rsrq)),
        ("SINR", "SINR", _with_quality("dB", evaluate_sinr)),
        ("CSQ", "CSQ", None),
    ],
    PageView.IP_CONFIG: [
        ("IPV4", "WAN IPv4", None),
        ("IPV6", "WAN IPv6", None),
        ("DNS1", "DNS 1", None),
        ("DNS2", "DNS 2", None),
        ("lanip", "LAN IP", None),
        ("netmask", "Netmask", None),
    ],
    PageView.SYSTEM: [
        ("model", "Model", None),
        ("serial", "Serial", None),
        ("hardv", "Hardware", None),
        ("sofv", "Firmware", None),
        ("IMEI", "IMEI", None),
        ("SYSUP", "Uptime", format_duration),
        ("cpu1", "CPU 1", _percent),
        ("cpu2", "CPU 2", _percent),
        ("ram", "RAM", _with_unit("KB")),
    ],
}

PAGE_ICONS = {
    PageView.DATA_USAGE: "📊",
    PageView.CONNECTION: "🌐",
    PageView.NETWORK: "📡",
    PageView.CELL_INFO: "📶",
    PageView.IP_CONFIG: "🔌",
    PageView.SYSTEM: "💻",
}

# Status block shown above the page on every live frame
SUMMARY_ROWS: List[Row] = [
    ("IMEI", "IMEI", None),
    ("IPV4", "IP", None),
    ("CSQ", "CSQ", None),
    ("INTERNET", "Internet", None),
    ("cpu1", "CPU 1", _percent),
    ("cpu2", "CPU 2", _percent),
    ("ram", "RAM", _with_unit("KB")),
    ("SYSUP", "Uptime", format_duration),
    ("recieve", "RX", format_bytes),
    ("sentt", "TX", format_bytes),
]

NEIGHBOUR_COLUMNS = ["type", "band", "earfcn", "pcid", "rsrp", "rsrq", "rsrppp"]


def draw_table(rows: Sequence[Sequence[str]], header: Optional[Sequence[str]] = None) -> str:
    """Draw rows as a box-drawing table"""
    all_rows = ([list(header)] if header else []) + [list(r) for r in rows]
    widths = [max(len(r[i]) for r in all_rows) for i in range(len(all_rows[0]))]

    def line(left, mid, right):
        return left + mid.join("─" * (w + 2) for w in widths) + right

    def cells(row):
        return "│" + "│".join(f" {c:<{w}} " for c, w in zip(row, widths)) + "│"

    out = [line("┌", "┬", "┐")]
    if header:
        out.append(cells(all_rows[0]))
        out.append(line("├", "┼", "┤"))
        all_rows = all_rows[1:]
    out.extend(cells(r) for r in all_rows)
    out.append(line("└", "┴", "┘"))
    return "\n".join(out)


def _present_rows(layout: List[Row], data: Dict[str, Any]) -> List[Tuple[str, str]]:
    rows = []
    for name, label, formatter in layout:
        value = field_value(data, name)
        if value is None:
            continue
        rows.append((label, formatter(value) if formatter else value))
    return rows


def page_rows(view: PageView, data: Dict[str, Any]) -> List[Tuple[str, str]]:
    """(label, formatted value) pairs for the fields present on a page"""
    return _present_rows(PAGE_ROWS[view], data)


def render_summary(data: Dict[str, Any]) -> str:
    """Status block (IMEI, IP, CSQ, Internet, CPU, RAM, uptime, RX/TX)"""
    rows = _present_rows(SUMMARY_ROWS, data)
    if not rows:
        return ""
    return f"📋 STATUS\n\n{draw_table(rows)}"


def render(view: PageView, data: Dict[str, Any], position: Optional[int] = None) -> str:
    """
    Render one dashboard page

    Args:
        view: Page to render
        data: get_index_data reply
        position: 1-based page number for the heading (default: view's index)

    Returns:
        Text block
    """
    position = position or PAGES.index(view) + 1
    heading = f"{PAGE_ICONS[view]} {view.title.upper()}  [{position}/{len(PAGES)}]"

    rows = page_rows(view, data)
    if not rows:
        return f"{heading}\n\n   No data available"
    return f"{heading}\n\n{draw_table(rows)}"


def render_frame(view: PageView, data: Dict[str, Any], interval: Optional[float] = None) -> str:
    """Full-screen frame for the live dashboard: status block, then the page"""
    lines = [
        CLEAR_SCREEN + "=" * 70,
        f"⏰ {time.strftime('%H:%M:%S')}",
        "=" * 70,
        "",
    ]
    summary = render_summary(data)
    if summary:
        lines += [summary, ""]
    lines += [render(view, data), ""]
    if interval:
        lines.append(f"⏳ Refreshing every {interval:g}s  (n/p + Enter to switch page, q + Enter to stop)")
    return "\n".join(lines)


def render_neighbour_cells(cells: List[Dict[str, str]]) -> str:
    """Render neighbour cells as a table, one row per cell"""
    if not cells:
        return "📡 Neighbour cells: none reported"

    present = {name for cell in cells for name in cell}
    columns = [c for c in NEIGHBOUR_COLUMNS if c in present]
    columns += sorted(present - set(NEIGHBOUR_COLUMNS))

    if not columns:
        return f"📡 Neighbour cells: {len(cells)} (no details)"

    header = ["#"] + [c.upper() for c in columns]
    rows = [[str(i)] + [cell.get(c, "-") for c in columns]
            for i, cell in enumerate(cells, 1)]
    return f"📡 Neighbour cells: {len(cells)}\n\n{draw_table(rows, header)}"
