from datetime import datetime, timedelta, timezone

import pytest

from steamcore.totp import (
    CODE_CHARS,
    InvalidSharedSecretError,
    Totp,
    generate_totp_code,
)

ENCODED_KEY = "password"


@pytest.mark.parametrize("when", [0, 29, 1_000_000, 1_700_000_000])
def test_code_has_five_allowed_chars(when):
    code = generate_totp_code(ENCODED_KEY, when)
    assert len(code) == 5
    assert set(code) <= set(CODE_CHARS)


def test_same_period_gives_same_code():
    assert generate_totp_code(ENCODED_KEY, 30) == generate_totp_code(ENCODED_KEY, 59)


def test_datetime_and_timestamp_agree():
    moment = datetime.fromtimestamp(90, timezone.utc)
    assert generate_totp_code(ENCODED_KEY, moment) == generate_totp_code(ENCODED_KEY, 90)


def test_codes_vary_across_periods():
    codes = {generate_totp_code(ENCODED_KEY, period * 30) for period in range(50)}
    assert len(codes) > 1


def test_invalid_secret_raises():
    with pytest.raises(InvalidSharedSecretError):
        generate_totp_code("secret", 0)


def test_non_base64_characters_raise_value_error():
    with pytest.raises(ValueError, match="invalid base64 shared secret"):
        generate_totp_code("not base64!", 0)


def test_totp_generate_code_matches_function():
    totp = Totp(ENCODED_KEY, 1000)
    assert totp.generate_code() == generate_totp_code(ENCODED_KEY, 1000)
    assert totp.shared_secret == ENCODED_KEY


def test_totp_now_uses_current_time():
    before = datetime.now(timezone.utc)
    totp = Totp.now(ENCODED_KEY)
    assert abs(totp.when - before) < timedelta(seconds=5)
    assert totp.generate_code() == generate_totp_code(ENCODED_KEY, totp.when)