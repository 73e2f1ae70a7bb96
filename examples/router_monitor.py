#!/usr/bin/env python3
"""
Router Monitoring Example - Live Signal Dashboard

Polls get_index_data and redraws the Cell Info page (RSSI, RSRP, RSRQ,
SINR with quality assessments) under a status summary until you type
q + Enter. n/p + Enter switch pages.

Usage:
    python router_monitor.py [interval_seconds]
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))
from leano.config import clamp_interval
from leano.display import render_frame
from leano.errors import LeanoError
from leano.monitor import watch_and_poll
from leano.pages import PageView, PaginationState
from leano.router_api import RouterAPI


def main():
    try:
        interval = clamp_interval(float(sys.argv[1])) if len(sys.argv) > 1 else 3.0
    except ValueError:
        print(f"Usage: {sys.argv[0]} [interval_seconds]")
        return 1

    print("="*70)
    print("📶 LEANO SIGNAL MONITOR")
    print("="*70)

    try:
        # Try environment variables first
        try:
            api = RouterAPI.from_env()
            print("\n✅ Authenticated using environment variables")
        except ValueError:
            api = RouterAPI.login_interactive()
    except (ValueError, LeanoError) as e:
        print(f"\n❌ Authentication failed: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\n❌ Cancelled by user")
        return 1

    pages = PaginationState(PageView.CELL_INFO)

    def show(response, view):
        print(render_frame(view, response, interval), flush=True)

    try:
        frames = watch_and_poll(api, show, interval=interval, pages=pages)
    except LeanoError as e:
        print(f"\n⚠️  Monitoring failed: {e}")
        return 1
    except KeyboardInterrupt:
        frames = None

    print("\n" + "="*70)
    print("👋 Monitoring stopped" + (f" after {frames} update(s)" if frames else ""))
    print("="*70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
