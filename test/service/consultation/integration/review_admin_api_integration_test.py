"""
HTTP tests for the review and admin endpoints (ASGI transport, SQLite)
"""

import httpx
import pytest

from src.platform.constant.route_constant import (
    ADMIN_DASHBOARD,
    ADMIN_RESET_SLOTS,
    BOOKING_CREATE,
    REVIEW_CREATE,
    REVIEW_LIST,
    REVIEW_PUBLISH,
    REVIEW_SUMMARY,
    REVIEW_VERIFY,
    SLOT_STATE,
)


def _review_payload(rating: int = 5, **overrides) -> dict:
    payload = {
        'name': 'Anna Schmidt',
        'email': 'anna@example.com',
        'rating': rating,
        'title': 'Very helpful',
        'body': 'Clear advice and concrete next steps for my application.',
    }
    payload.update(overrides)
    return payload


async def _submit(client: httpx.AsyncClient, rating: int = 5) -> dict:
    response = await client.post(REVIEW_CREATE, json=_review_payload(rating))
    assert response.status_code == 201
    return response.json()


async def _verify(client: httpx.AsyncClient, submitted: dict) -> httpx.Response:
    return await client.post(
        REVIEW_VERIFY, json={'reviewId': submitted['review_id'], 'code': submitted['code']}
    )


async def _publish(
    client: httpx.AsyncClient, review_id: str, password: str = 'test-admin-secret'
) -> httpx.Response:
    return await client.post(
        REVIEW_PUBLISH, json={'reviewId': review_id, 'adminPassword': password}
    )


async def _published(client: httpx.AsyncClient, rating: int) -> str:
    submitted = await _submit(client, rating)
    assert (await _verify(client, submitted)).status_code == 200
    assert (await _publish(client, submitted['review_id'])).status_code == 200
    return submitted['review_id']


class TestReviewSubmissionApi:
    async def test_create_review(self, client: httpx.AsyncClient, email_outbox):
        response = await client.post(REVIEW_CREATE, json=_review_payload())

        assert response.status_code == 201
        body = response.json()
        assert body['review_id']
        assert body['code']
        assert body['notified'] is True
        assert email_outbox.sent_emails[-1].to == 'anna@example.com'

    async def test_too_many_links_are_refused(self, client: httpx.AsyncClient):
        body = 'See https://a.example and http://b.example and www.c.example for details.'

        response = await client.post(REVIEW_CREATE, json=_review_payload(body=body))

        assert response.status_code == 400
        assert response.json()['error_code'] == 'validation_error'

    @pytest.mark.parametrize('overrides', [{'rating': 0}, {'rating': 6}, {'body': 'short'}])
    async def test_invalid_input(self, client: httpx.AsyncClient, overrides: dict):
        response = await client.post(REVIEW_CREATE, json=_review_payload(**overrides))

        assert response.status_code == 400


class TestReviewVerificationApi:
    async def test_code_verifies_once(self, client: httpx.AsyncClient):
        submitted = await _submit(client)

        first = await _verify(client, submitted)
        replay = await _verify(client, submitted)

        assert first.status_code == 200
        assert first.json() == {'success': True}
        assert replay.status_code == 400
        assert replay.json()['error_code'] == 'verification_failed'

    async def test_wrong_code(self, client: httpx.AsyncClient):
        submitted = await _submit(client)

        response = await _verify(client, {**submitted, 'code': 'not-the-code'})

        assert response.status_code == 400
        assert response.json()['error_code'] == 'verification_failed'

    async def test_malformed_id_fails_like_a_wrong_code(self, client: httpx.AsyncClient):
        response = await client.post(REVIEW_VERIFY, json={'reviewId': 'nope', 'code': 'x'})

        assert response.status_code == 400
        assert response.json()['error_code'] == 'verification_failed'

    @pytest.mark.parametrize(
        'payload', [{'reviewId': 'x' * 500, 'code': 'x'}, {'reviewId': 'x', 'code': 'y' * 500}]
    )
    async def test_over_long_input_fails_like_a_wrong_code(
        self, client: httpx.AsyncClient, payload: dict
    ):
        response = await client.post(REVIEW_VERIFY, json=payload)

        assert response.status_code == 400
        assert response.json()['error_code'] == 'verification_failed'


class TestReviewPublicationApi:
    async def test_wrong_password(self, client: httpx.AsyncClient):
        submitted = await _submit(client)
        await _verify(client, submitted)

        response = await _publish(client, submitted['review_id'], password='wrong')

        assert response.status_code == 401
        assert response.json()['error_code'] == 'unauthorized'

    async def test_unverified_review_cannot_be_published(self, client: httpx.AsyncClient):
        submitted = await _submit(client)

        response = await _publish(client, submitted['review_id'])

        assert response.status_code == 409
        assert response.json()['error_code'] == 'invalid_state'

    async def test_publish(self, client: httpx.AsyncClient):
        submitted = await _submit(client)
        await _verify(client, submitted)

        response = await _publish(client, submitted['review_id'])

        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['review_id'] == submitted['review_id']
        assert body['published_at']


class TestReviewListApi:
    async def test_list_with_paging_filter_and_aggregate(self, client: httpx.AsyncClient):
        ids = [await _published(client, rating) for rating in (5, 5, 4, 3)]
        await _submit(client, rating=1)

        response = await client.get(REVIEW_LIST, params={'limit': 2, 'offset': 1})

        assert response.status_code == 200
        body = response.json()
        assert [item['id'] for item in body['items']] == [ids[2], ids[1]]
        assert (body['total'], body['count'], body['average']) == (4, 4, 4.3)
        assert body['items'][0]['display_name'] == 'Anna S.'
        assert 'email' not in body['items'][0]

        filtered = (await client.get(REVIEW_LIST, params={'rating': 3})).json()
        assert [item['id'] for item in filtered['items']] == [ids[3]]
        assert filtered['total'] == 1

    async def test_empty_list(self, client: httpx.AsyncClient):
        body = (await client.get(REVIEW_LIST)).json()

        assert body == {'items': [], 'total': 0, 'count': 0, 'average': None}

    @pytest.mark.parametrize('params', [{'limit': 0}, {'offset': -1}, {'rating': 6}])
    async def test_invalid_query(self, client: httpx.AsyncClient, params: dict):
        response = await client.get(REVIEW_LIST, params=params)

        assert response.status_code == 400
        assert response.json()['error_code'] == 'validation_error'

    async def test_summary(self, client: httpx.AsyncClient):
        for rating in (5, 4):
            await _published(client, rating)

        response = await client.get(REVIEW_SUMMARY)

        assert response.status_code == 200
        assert response.json() == {'count': 2, 'average': 4.5}


class TestSlotResetApi:
    async def _fill_march(self, client: httpx.AsyncClient) -> None:
        for n in range(5):
            response = await client.post(
                BOOKING_CREATE,
                json={
                    'name': f'Client {n}',
                    'email': f'client{n}@example.com',
                    'startsAt': '2031-03-14T15:00:00+01:00',
                    'duration': 30,
                },
            )
            assert response.status_code == 201

    async def test_reset(self, client: httpx.AsyncClient, admin_secret: str):
        await self._fill_march(client)

        response = await client.post(
            ADMIN_RESET_SLOTS, json={'adminPass': admin_secret, 'year': 2031, 'month': 3}
        )

        assert response.status_code == 200
        assert response.json() == {
            'success': True,
            'message': 'Slots for 2031-03 reset',
            'remaining': 5,
        }
        state = await client.get(SLOT_STATE, params={'year': 2031, 'month': 3})
        assert state.json()['remaining'] == 5

    async def test_admin_password_alias(self, client: httpx.AsyncClient, admin_secret: str):
        response = await client.post(
            ADMIN_RESET_SLOTS, json={'adminPassword': admin_secret, 'year': 2031, 'month': 3}
        )

        assert response.status_code == 200

    async def test_wrong_password(self, client: httpx.AsyncClient):
        await self._fill_march(client)

        response = await client.post(
            ADMIN_RESET_SLOTS, json={'adminPass': 'wrong', 'year': 2031, 'month': 3}
        )

        assert response.status_code == 401
        state = await client.get(SLOT_STATE, params={'year': 2031, 'month': 3})
        assert state.json()['remaining'] == 0


class TestAdminDashboardApi:
    async def test_dashboard(self, client: httpx.AsyncClient, admin_headers: dict):
        submitted = await _submit(client)
        await _verify(client, submitted)
        await client.post(
            BOOKING_CREATE,
            json={
                'name': 'Client',
                'email': 'client@example.com',
                'startsAt': '2031-03-14T15:00:00+01:00',
                'duration': 60,
            },
        )

        response = await client.get(ADMIN_DASHBOARD, headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        [review] = body['pendingReviews']
        assert review['id'] == submitted['review_id']
        assert review['email'] == 'anna@example.com'
        [booking] = body['upcomingBookings']
        assert booking['duration'] == 60
        assert booking['status'] == 'new'

    async def test_requires_bearer(self, client: httpx.AsyncClient):
        response = await client.get(ADMIN_DASHBOARD)

        assert response.status_code == 401


class TestOperationalEndpoints:
    async def test_health(self, client: httpx.AsyncClient):
        response = await client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    async def test_metrics(self, client: httpx.AsyncClient):
        await client.post(REVIEW_CREATE, json=_review_payload())

        response = await client.get('/metrics')

        assert response.status_code == 200
        assert 'review_transitions_total' in response.text
