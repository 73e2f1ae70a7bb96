#!/usr/bin/env python3
"""
Display Complete Router Status

This script fetches and displays the complete JSON response from the
router's get_index_data command.

Usage:
    python router_status.py
"""

import sys
import os
import json

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from leano.router_api import RouterAPI


def main():
    """Fetch and display complete router status"""

    print("=" * 70)
    print("Leano Router - Complete Status Dump")
    print("=" * 70)
    print()

    # Authenticate
    try:
        print("[*] Authenticating...")
        api = RouterAPI.login_interactive()
        print("[✓] Authentication successful\n")
    except Exception as e:
        print(f"[!] Authentication failed: {e}")
        return 1

    print("[*] Fetching dashboard data...")
    try:
        status = api.get_index_data()
        print("[✓] Status retrieved successfully\n")
    except Exception as e:
        print(f"[!] Failed to fetch status: {e}")
        return 1

    print("=" * 70)
    print("COMPLETE STATUS JSON:")
    print("=" * 70)
    print()
    print(json.dumps(status, indent=2))
    print()
    print("=" * 70)
    print("✅ Complete!")
    print("=" * 70)

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\n[!] Interrupted by user")
        sys.exit(130)
