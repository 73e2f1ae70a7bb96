#!/usr/bin/env python3
"""
Router Information Tool

Prints every dashboard page once, followed by the neighbour cell scan.
"""

import sys
from pathlib import Path

# Import the API
sys.path.insert(0, str(Path(__file__).parent.parent))
from leano.display import render, render_neighbour_cells
from leano.errors import LeanoError
from leano.pages import PAGES
from leano.router_api import RouterAPI


def main():
    if len(sys.argv) > 1 and sys.argv[1] in ['--help', '-h']:
        print("="*70)
        print("📡 LEANO API - ROUTER INFORMATION TOOL")
        print("="*70)
        print("\nUsage:")
        print("  python router_info.py              # Interactive login")
        print("  python router_info.py --help       # Show this help")
        print("\nEnvironment Variables:")
        print("  LEANO_URL       Router base URL")
        print("  LEANO_USERNAME  Username")
        print("  LEANO_PASSWORD  Password (skips the prompts)")
        return 0

    print("="*70)
    print("📡 LEANO API - ROUTER INFORMATION TOOL")
    print("="*70)

    try:
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

    print(f"   Router: {api.base_url}")

    try:
        data = api.get_index_data()
        for view in PAGES:
            print("\n" + "─"*70)
            print(render(view, data))

        print("\n" + "─"*70)
        print(render_neighbour_cells(api.neighbour_cells()))
    except LeanoError as e:
        print(f"\n❌ Error: {e}")
        return 1

    print("\n" + "="*70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
