import json
import logging
import re
from typing import Any, Dict, Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction

logger = logging.getLogger(__name__)

# Event names shared with the POS screens
ORDER_CREATED = "order:created"
ORDER_UPDATED = "order:updated"
KITCHEN_READY = "kitchen:ready"
TABLE_UPDATED = "table:updated"

_GROUP_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]")


def tenant_group_name(tenant_id, room: Optional[str] = None) -> str:
    """
    Channel group for a tenant's POS screens, optionally narrowed to a room.

    Group names may only contain ASCII alphanumerics, hyphens, underscores
    and periods.
    """
    group = f"tenant_{tenant_id}_pos"
    if room:
        group = f"{group}_{_GROUP_UNSAFE.sub('_', str(room))}"
    return group[:99]


def json_safe(payload: Any) -> Any:
    """Convert UUID/Decimal/datetime values so the channel layer can encode them."""
    return json.loads(json.dumps(payload, cls=DjangoJSONEncoder))


class EventBroadcaster:
    """
    Pushes POS events to the websocket screens of one tenant.

    Delivery is best-effort: failures are logged and never raised to the
    caller, and nothing is stored for replay.

    room narrows delivery to screens that joined that room. Order and table
    services leave it unset and reach every screen of the tenant.
    """

    @staticmethod
    def broadcast(tenant_id, event_name: str, payload: Dict[str, Any], room: Optional[str] = None):
        channel_layer = get_channel_layer()
        if not channel_layer:
            logger.warning(f"No channel layer available, dropping {event_name}")
            return

        group_name = tenant_group_name(tenant_id, room)
        try:
            async_to_sync(channel_layer.group_send)(
                group_name,
                {
                    "type": "pos.event",
                    "event": event_name,
                    "data": json_safe(payload),
                },
            )
            logger.debug(f"Sent {event_name} to {group_name}")
        except Exception as e:
            logger.error(f"Error broadcasting {event_name} to {group_name}: {e}")

    @staticmethod
    def broadcast_on_commit(tenant_id, event_name: str, payload: Dict[str, Any], room: Optional[str] = None):
        """
        Send after the current transaction commits, or right away outside one.

        Observers re-fetch on events, so they must never see uncommitted rows.
        """
        transaction.on_commit(
            lambda: EventBroadcaster.broadcast(tenant_id, event_name, payload, room=room)
        )
