"""
Processing of webhook notifications sent by HubSpot.

HubSpot posts a batch (list) of events; a single object is accepted too.
Events are only logged for now.
"""

from typing import Any

import structlog

logger = structlog.get_logger()


def _handle_event(event: dict[str, Any]) -> None:
    subscription_type = event.get("subscriptionType")
    object_id = event.get("objectId")

    logger.info("Received HubSpot webhook event", subscription_type=subscription_type)

    if subscription_type == "contact.creation":
        logger.info("New contact created in HubSpot", object_id=object_id)

    elif subscription_type == "contact.propertyChange":
        logger.info(
            "Contact property changed",
            object_id=object_id,
            property_name=event.get("propertyName"),
            property_value=event.get("propertyValue"),
        )

    elif subscription_type == "deal.propertyChange":
        if event.get("propertyName") == "dealstage":
            logger.info(
                "Deal moved to stage",
                object_id=object_id,
                stage=event.get("propertyValue"),
            )

    else:
        logger.info("Unhandled event type", subscription_type=subscription_type)


def process_events(body: Any) -> int:
    """
    Process a HubSpot webhook body.

    Returns:
        Number of events handled
    """
    events = body if isinstance(body, list) else [body]
    handled = 0

    for event in events:
        if not isinstance(event, dict):
            logger.warning("Skipping malformed HubSpot event", event=repr(event)[:200])
            continue
        try:
            _handle_event(event)
            handled += 1
        except Exception as e:
            logger.error("Error processing HubSpot webhook event", error=str(e))

    return handled
