import json
import logging
from datetime import datetime

from channels.generic.websocket import AsyncWebsocketConsumer

from .services import tenant_group_name

logger = logging.getLogger(__name__)


class POSEventsConsumer(AsyncWebsocketConsumer):
    """
    Real-time event stream for cashier, kitchen, bar and admin screens.

    Every connection joins its tenant's group and receives order and table
    events as {"event": ..., "data": ...}. Screens that miss events while
    disconnected re-fetch state over HTTP.

    A screen may also send {"type": "join", "room": ...} to subscribe to a
    room subgroup. Order and table services broadcast to the whole tenant
    group only, so rooms receive events only when a caller of
    EventBroadcaster.broadcast passes room explicitly.
    """

    async def connect(self):
        self.tenant = self.scope.get('tenant')
        self.user = self.scope.get('user')
        self.groups_joined = []

        if not self.tenant:
            logger.warning("POSEventsConsumer: No tenant in scope. Closing connection.")
            await self.close(code=4003)
            return

        if not (self.user and self.user.is_authenticated):
            logger.warning(f"POSEventsConsumer: Anonymous connection for tenant {self.tenant.slug}. Closing.")
            await self.close(code=4003)
            return

        if self.user.tenant_id != self.tenant.id:
            logger.warning(
                f"POSEventsConsumer: User {self.user.id} does not belong to tenant {self.tenant.slug}. Closing."
            )
            await self.close(code=4003)
            return

        await self._join(tenant_group_name(self.tenant.id))
        await self.accept()

        logger.info(f"POS screen connected: user={self.user.email} tenant={self.tenant.slug}")

        await self.send(text_data=json.dumps({
            "type": "connection_established",
            "tenant": self.tenant.slug,
            "role": self.user.role,
            "timestamp": self.get_timestamp(),
        }))

    async def disconnect(self, close_code):
        for group_name in getattr(self, 'groups_joined', []):
            await self.channel_layer.group_discard(group_name, self.channel_name)
        logger.info(f"POS screen disconnected (code {close_code})")

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or "")
        except json.JSONDecodeError:
            logger.error("Invalid JSON received on POS event socket")
            return

        if not isinstance(data, dict):
            logger.error(f"Expected a JSON object on POS event socket, got {type(data).__name__}")
            return

        message_type = data.get("type")

        if message_type == "ping":
            await self.send(text_data=json.dumps(
                {"type": "pong", "timestamp": self.get_timestamp()}
            ))
        elif message_type == "join":
            room = data.get("room")
            if not room:
                await self.send(text_data=json.dumps(
                    {"type": "error", "message": "room is required"}
                ))
                return
            await self._join(tenant_group_name(self.tenant.id, room))
            await self.send(text_data=json.dumps({"type": "joined", "room": room}))
        else:
            logger.warning(f"Unknown message type on POS event socket: {message_type}")

    async def pos_event(self, event):
        """Forward a broadcast from EventBroadcaster to the screen."""
        await self.send(text_data=json.dumps({
            "event": event["event"],
            "data": event["data"],
        }))

    async def _join(self, group_name):
        if group_name in self.groups_joined:
            return
        await self.channel_layer.group_add(group_name, self.channel_name)
        self.groups_joined.append(group_name)

    def get_timestamp(self):
        return datetime.now().isoformat()
