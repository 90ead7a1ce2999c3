"""
Event Broadcaster Tests

Events reach exactly the screens of the tenant they belong to, and a
failing channel layer never breaks the request that produced the event.
"""
import asyncio
import uuid
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from asgiref.sync import sync_to_async
from channels.layers import get_channel_layer

from notifications.services import (
    ORDER_UPDATED,
    TABLE_UPDATED,
    EventBroadcaster,
    json_safe,
    tenant_group_name,
)


class TestGroupNames:

    def test_tenant_group(self):
        tenant_id = uuid.UUID('11111111-2222-3333-4444-555555555555')

        assert tenant_group_name(tenant_id) == 'tenant_11111111-2222-3333-4444-555555555555_pos'

    def test_room_is_sanitized(self):
        assert tenant_group_name('abc', 'bar counter/1') == 'tenant_abc_pos_bar_counter_1'

    def test_group_name_fits_channels_limit(self):
        assert len(tenant_group_name('abc', 'x' * 200)) < 100


class TestJsonSafe:

    def test_decimals_uuids_and_dates_become_strings(self):
        tenant_id = uuid.uuid4()

        data = json_safe({'total': Decimal('300.00'), 'tenant': tenant_id, 'items': [{'price': Decimal('1.50')}]})

        assert data == {'total': '300.00', 'tenant': str(tenant_id), 'items': [{'price': '1.50'}]}


@pytest.mark.asyncio
class TestFanOut:

    async def test_event_reaches_tenant_group(self):
        layer = get_channel_layer()
        channel = await layer.new_channel()
        await layer.group_add(tenant_group_name('tenant-a'), channel)

        await sync_to_async(EventBroadcaster.broadcast)(
            'tenant-a', ORDER_UPDATED, {'id': 7, 'status': 'ready'}
        )

        message = await layer.receive(channel)
        assert message == {
            'type': 'pos.event',
            'event': ORDER_UPDATED,
            'data': {'id': 7, 'status': 'ready'},
        }

    async def test_event_does_not_reach_other_tenant(self):
        layer = get_channel_layer()
        channel_a = await layer.new_channel()
        channel_b = await layer.new_channel()
        await layer.group_add(tenant_group_name('tenant-a'), channel_a)
        await layer.group_add(tenant_group_name('tenant-b'), channel_b)

        await sync_to_async(EventBroadcaster.broadcast)(
            'tenant-b', TABLE_UPDATED, {'number': 5, 'status': 'occupied'}
        )

        message = await layer.receive(channel_b)
        assert message['event'] == TABLE_UPDATED
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(layer.receive(channel_a), timeout=0.1)

    async def test_room_event_stays_in_room(self):
        layer = get_channel_layer()
        tenant_channel = await layer.new_channel()
        room_channel = await layer.new_channel()
        await layer.group_add(tenant_group_name('tenant-a'), tenant_channel)
        await layer.group_add(tenant_group_name('tenant-a', 'bar'), room_channel)

        await sync_to_async(EventBroadcaster.broadcast)(
            'tenant-a', ORDER_UPDATED, {'id': 1, 'status': 'ready'}, room='bar'
        )

        message = await layer.receive(room_channel)
        assert message['data'] == {'id': 1, 'status': 'ready'}
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(layer.receive(tenant_channel), timeout=0.1)


class TestBestEffortDelivery:

    def test_layer_failure_is_not_raised(self):
        layer = MagicMock()
        layer.group_send = AsyncMock(side_effect=RuntimeError('redis down'))

        with patch('notifications.services.get_channel_layer', return_value=layer):
            EventBroadcaster.broadcast('tenant-a', ORDER_UPDATED, {'id': 1, 'status': 'ready'})

        layer.group_send.assert_awaited_once()

    def test_missing_layer_is_skipped(self):
        with patch('notifications.services.get_channel_layer', return_value=None):
            EventBroadcaster.broadcast('tenant-a', ORDER_UPDATED, {'id': 1, 'status': 'ready'})

    @pytest.mark.django_db
    def test_on_commit_defers_send(self, django_capture_on_commit_callbacks):
        with patch.object(EventBroadcaster, 'broadcast') as broadcast:
            with django_capture_on_commit_callbacks(execute=False) as callbacks:
                EventBroadcaster.broadcast_on_commit('tenant-a', ORDER_UPDATED, {'id': 1})

            broadcast.assert_not_called()
            callbacks[0]()

        broadcast.assert_called_once_with('tenant-a', ORDER_UPDATED, {'id': 1}, room=None)
