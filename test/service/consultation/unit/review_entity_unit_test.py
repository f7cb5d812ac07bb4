from datetime import datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import ValidationError
from src.service.consultation.domain.entity.review_entity import (
    Review,
    count_url_like,
    display_name,
)
from src.service.consultation.domain.enum.review_status import ReviewStatus


def _create(**overrides) -> Review:
    params = {
        'name': 'Anna Schmidt',
        'email': 'anna@example.com',
        'rating': 5,
        'body': 'Clear advice and concrete next steps.',
        'verification_code_hash': 'a' * 64,
        'verification_ttl': timedelta(hours=72),
    }
    params.update(overrides)
    return Review.create(**params)


class TestReviewCreate:
    def test_new_review_is_pending_with_expiry(self):
        before = datetime.now(timezone.utc)

        review = _create(title='  Great session  ')

        assert review.status == ReviewStatus.PENDING
        assert review.title == 'Great session'
        assert review.verification_expires_at is not None
        assert review.verification_expires_at >= before + timedelta(hours=72)

    @pytest.mark.parametrize('rating', [0, 6, True, 4.5])
    def test_rejects_rating_outside_one_to_five(self, rating):
        with pytest.raises(ValidationError, match='rating must be an integer between 1 and 5'):
            _create(rating=rating)

    def test_rejects_short_body_after_strip(self):
        with pytest.raises(ValidationError, match='at least 10 characters'):
            _create(body='   too short   ')

    def test_body_of_exactly_ten_characters_is_accepted(self):
        assert _create(body='  0123456789  ').body == '0123456789'

    def test_rejects_three_links(self):
        body = 'see http://a.example and https://b.example and www.c.example'

        with pytest.raises(ValidationError, match='at most 2 links'):
            _create(body=body)

    def test_accepts_two_links(self):
        body = 'see http://a.example and www.b.example for details'

        assert _create(body=body).body == body

    def test_accepts_two_links_with_scheme_and_www(self):
        body = 'Great help, see https://www.example.com and https://www.other.org for more'

        assert _create(body=body).body == body

    def test_rejects_three_links_with_scheme_and_www(self):
        body = 'see https://www.a.example, http://www.b.example and https://www.c.example'

        with pytest.raises(ValidationError, match='at most 2 links'):
            _create(body=body)

    def test_rejects_long_title(self):
        with pytest.raises(ValidationError, match='title must be at most 200'):
            _create(title='x' * 201)


class TestReviewHelpers:
    def test_count_url_like_is_case_insensitive(self):
        assert count_url_like('HTTPS://x.example WWW.y.example plain text') == 2

    def test_count_url_like_counts_each_link_once(self):
        assert count_url_like('https://www.example.com/page and www.other.org') == 2

    @pytest.mark.parametrize(
        'name, expected',
        [
            ('Anna Maria Schmidt', 'Anna S.'),
            ('anna schmidt', 'anna S.'),
            ('Cher', 'Cher'),
            ('   ', 'Anonymous'),
        ],
    )
    def test_display_name(self, name: str, expected: str):
        assert display_name(name) == expected

    def test_verification_window(self):
        review = _create(verification_ttl=timedelta(hours=1))
        now = datetime.now(timezone.utc)

        assert review.is_verification_open(now=now)
        assert not review.is_verification_open(now=now + timedelta(hours=2))

    def test_verification_closed_once_verified(self):
        review = _create()
        review.status = ReviewStatus.VERIFIED

        assert not review.is_verification_open(now=datetime.now(timezone.utc))
