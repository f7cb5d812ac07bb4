"""
Unit tests for the review value objects: rating aggregate and verification codes
"""

import pytest

from src.service.consultation.domain.value_object.rating_summary import RatingSummary
from src.service.consultation.domain.value_object.verification_code import (
    generate_verification_code,
    hash_verification_code,
    verification_code_matches,
)


class TestRatingSummary:
    def test_aggregate_of_four_reviews(self):
        """Given ratings [5, 5, 4, 3], the summary is count 4 with average 4.3"""
        summary = RatingSummary.from_totals(count=4, rating_sum=5 + 5 + 4 + 3)

        assert summary.count == 4
        assert summary.average == 4.3

    def test_half_rounds_up(self):
        # 17 / 4 = 4.25
        assert RatingSummary.from_totals(count=4, rating_sum=17).average == 4.3
        # 9 / 2 = 4.5 stays exact
        assert RatingSummary.from_totals(count=2, rating_sum=9).average == 4.5

    def test_no_reviews_has_no_average(self):
        summary = RatingSummary.from_totals(count=0, rating_sum=0)

        assert summary.count == 0
        assert summary.average is None


class TestVerificationCode:
    def test_codes_are_unique_and_url_safe(self):
        codes = {generate_verification_code() for _ in range(50)}

        assert len(codes) == 50
        assert all(len(code) >= 32 for code in codes)
        assert all('/' not in code and '+' not in code for code in codes)

    def test_hash_is_sha256_hex(self):
        digest = hash_verification_code('abc')

        assert digest == 'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'

    def test_matching_code(self):
        code = generate_verification_code()

        assert verification_code_matches(code=code, code_hash=hash_verification_code(code))

    @pytest.mark.parametrize(
        'code, code_hash',
        [
            ('wrong', hash_verification_code('right')),
            ('', hash_verification_code('')),
            ('right', None),
        ],
    )
    def test_non_matching_code(self, code: str, code_hash: str | None):
        assert not verification_code_matches(code=code, code_hash=code_hash)
