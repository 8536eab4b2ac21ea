#!/usr/bin/env python3
"""Send a sample Vapi tool call to a running server and print the response."""

import argparse
import json
import sys
import uuid

import requests

SAMPLES = {
    "search": (
        "/api/vapi/property/search",
        "searchProperties",
        {"location": "Austin", "bedrooms": 3, "priceRange": {"Min": 500000, "Max": 1000000}},
    ),
    "schedule": (
        "/api/vapi/property/schedule-viewing",
        "scheduleViewing",
        {
            "propertyId": "prop3",
            "datetime": "2030-06-03T10:00:00",
            "clientName": "Jane Doe",
            "clientPhone": "+15125550100",
        },
    ),
    "contact": (
        "/api/vapi/hubspot/sync-contact",
        "createContact",
        {"email": "jane.doe@example.com", "firstName": "Jane", "lastName": "Doe"},
    ),
}


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("tool", choices=sorted(SAMPLES))
    parser.add_argument("--url", default="http://localhost:3000")
    parser.add_argument("--secret", default="", help="Value for the x-vapi-secret header")
    args = parser.parse_args()

    path, name, arguments = SAMPLES[args.tool]
    payload = {
        "message": {
            "type": "tool-calls",
            "toolCalls": [
                {
                    "id": f"call_{uuid.uuid4().hex[:12]}",
                    "type": "function",
                    "function": {"name": name, "arguments": arguments},
                }
            ],
        }
    }

    headers = {"x-vapi-secret": args.secret} if args.secret else {}

    print(f"POST {args.url}{path}")
    response = requests.post(f"{args.url}{path}", json=payload, headers=headers, timeout=30)
    print(f"Status: {response.status_code}")

    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)

    if not response.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
