#!/usr/bin/env python3
"""
Push the tool definitions in vapi_tools/ to Vapi.

Every tool whose id is configured (SEARCH_PROPERTIES_ID, SCHEDULE_VIEWING_ID,
CREATE_CONTACT_ID, LOG_CALL_ID) is updated and pointed at SERVER_URL.

Usage:
    python -m scripts.update_vapi_tools
    python -m scripts.update_vapi_tools --dry-run  # Show current and new config, no writes
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load .env
from dotenv import load_dotenv
load_dotenv(project_root / ".env")

import httpx

from app.vapi.config import get_vapi_config, validate_vapi_config
from app.vapi.service import get_vapi_tool_service
from app.vapi.tools import TOOL_PATHS, build_tool_update, load_tool_definition


async def update_tools(dry_run: bool) -> bool:
    config = get_vapi_config()
    service = get_vapi_tool_service()
    all_ok = True

    for name, tool_id in config.tool_ids().items():
        print(f"\n── Updating {name} ({tool_id}) ──")
        body = build_tool_update(
            load_tool_definition(name),
            server_url=config.server_url,
            path=TOOL_PATHS[name],
            secret=config.vapi_secret_token,
        )

        if dry_run:
            try:
                current = await service.get_tool(tool_id)
                print(f"Currently calls: {current.get('server', {}).get('url', '(none)')}")
            except httpx.HTTPError as e:
                print(f"❌ Could not fetch {name}: {e}")
                all_ok = False
            print(json.dumps(body, indent=2))
            continue

        try:
            await service.update_tool(tool_id, body)
            print(f"✓ {name} now calls {body['server']['url']}")
        except httpx.HTTPError as e:
            print(f"❌ {name} update failed: {e}")
            all_ok = False

    return all_ok


def main():
    parser = argparse.ArgumentParser(description="Update Vapi tool definitions")
    parser.add_argument("--dry-run", action="store_true", help="Print the update bodies only")
    args = parser.parse_args()

    config = get_vapi_config()

    if not config.vapi_private_key:
        print("Error: VAPI_PRIVATE_KEY environment variable is not set")
        sys.exit(1)

    if not validate_vapi_config():
        print("Error: Tool IDs must be set in environment variables")
        sys.exit(1)

    if not config.server_url:
        print("Error: SERVER_URL environment variable is not set")
        sys.exit(1)

    if not asyncio.run(update_tools(args.dry_run)):
        sys.exit(1)

    print("\nAll tools updated!")


if __name__ == "__main__":
    main()
