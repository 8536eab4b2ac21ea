#!/usr/bin/env python3
"""
Check the HubSpot integration against a live portal.

Usage:
    python -m scripts.check_hubspot
    python -m scripts.check_hubspot --create  # Also create a test contact and log a call
"""

import argparse
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load .env
from dotenv import load_dotenv
load_dotenv(project_root / ".env")

import os


def check_env() -> bool:
    print("\n── Checking Environment ──")

    token = os.environ.get("HUBSPOT_ACCESS_TOKEN")
    if not token:
        print("❌ HUBSPOT_ACCESS_TOKEN not set")
        return False

    print(f"✓ HUBSPOT_ACCESS_TOKEN: {token[:8]}...")
    return True


def check_connection() -> bool:
    print("\n── Connecting to HubSpot ──")

    from app.hubspot.client import check_connection as fetch_contacts

    try:
        count = fetch_contacts()
    except Exception as e:
        print(f"❌ Error connecting to HubSpot: {e}")
        return False

    print("✓ Successfully connected to HubSpot API")
    print(f"✓ Found {count} contacts")
    return True


def check_contact_and_call() -> bool:
    print("\n── Creating Test Contact ──")

    from app.hubspot.crm import CallData, ContactData, create_or_update_contact, log_call_engagement

    email = f"test_{int(time.time() * 1000)}@example.com"
    print(f"Creating test contact with email: {email}")

    try:
        contact = create_or_update_contact(
            ContactData(email=email, first_name="Test", last_name="Script", phone="555-123-4567")
        )
        print(f"✓ Contact {'created' if contact.created else 'updated'}: {contact.id}")

        call_id = log_call_engagement(
            contact.id,
            CallData(
                notes="Test call from the voice assistant",
                status="COMPLETED",
                duration=60000,
                from_number="+1234567890",
                to_number="+0987654321",
            ),
        )
        print(f"✓ Call logged: {call_id}")
    except Exception as e:
        print(f"❌ HubSpot write failed: {e}")
        return False

    return True


def main():
    parser = argparse.ArgumentParser(description="Check HubSpot integration")
    parser.add_argument("--create", action="store_true", help="Create a test contact and call")
    args = parser.parse_args()

    print("=" * 50)
    print("HUBSPOT CONNECTION CHECK")
    print("=" * 50)

    if not check_env():
        print("\n⚠️  Set HUBSPOT_ACCESS_TOKEN in .env")
        sys.exit(1)

    ok = check_connection()
    if ok and args.create:
        ok = check_contact_and_call()

    print("\n" + "=" * 50)
    if not ok:
        print("❌ Checks failed.")
        sys.exit(1)
    print("✓ All checks completed successfully!")
    print("=" * 50)


if __name__ == "__main__":
    main()
