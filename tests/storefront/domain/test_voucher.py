"""Domain tests for voucher code generation."""

from datetime import UTC, datetime

import pytest

from storefront.promo.voucher import (
    MAX_ATTEMPTS,
    generate_voucher_code,
    unique_voucher_code,
    voucher_pattern,
)


class TestGenerateVoucherCode:
    def test_code_shape(self):
        code = generate_voucher_code("pashudh-")
        assert voucher_pattern("pashudh-").match(code)

    def test_date_suffix_is_ddmmyyyy(self):
        code = generate_voucher_code("pashudh-", today=datetime(2026, 3, 7, tzinfo=UTC))
        assert code.endswith("-07032026")

    def test_random_part_is_six_alphanumerics(self):
        code = generate_voucher_code("x-", today=datetime(2026, 3, 7, tzinfo=UTC))
        body = code[len("x-") : -len("-07032026")]
        assert len(body) == 6
        assert body.isalnum()

    def test_custom_prefix(self):
        code = generate_voucher_code("gift/")
        assert code.startswith("gift/")
        assert voucher_pattern("gift/").match(code)

    def test_codes_differ(self):
        assert len({generate_voucher_code("p-") for _ in range(50)}) > 1


class TestUniqueVoucherCode:
    def test_returns_first_free_code(self):
        code = unique_voucher_code("p-", lambda candidate: False)
        assert voucher_pattern("p-").match(code)

    def test_retries_on_collision(self):
        attempts = []

        def is_taken(candidate):
            attempts.append(candidate)
            return len(attempts) < 3

        code = unique_voucher_code("p-", is_taken)
        assert len(attempts) == 3
        assert code == attempts[-1]

    def test_gives_up_after_bounded_attempts(self):
        attempts = []

        def always_taken(candidate):
            attempts.append(candidate)
            return True

        with pytest.raises(RuntimeError):
            unique_voucher_code("p-", always_taken)
        assert len(attempts) == MAX_ATTEMPTS
