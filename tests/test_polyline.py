from __future__ import annotations

import pytest

from app.core.polyline import (
    Point,
    PolylineDecodeError,
    _encode_value,
    decode_polyline,
    encode_polyline,
)

from tests.conftest import CANONICAL_POINTS, CANONICAL_POLYLINE


def assert_points_close(actual, expected, tol=1e-5):
    assert len(actual) == len(expected)
    for got, want in zip(actual, expected):
        assert got[0] == pytest.approx(want[0], abs=tol)
        assert got[1] == pytest.approx(want[1], abs=tol)


def test_canonical_vector():
    pts = decode_polyline(CANONICAL_POLYLINE)
    assert_points_close(pts, CANONICAL_POINTS)


def test_points_have_lat_lng_fields():
    first = decode_polyline(CANONICAL_POLYLINE)[0]
    assert isinstance(first, Point)
    assert first.lat == pytest.approx(38.5)
    assert first.lng == pytest.approx(-120.2)
    lat, lng = first
    assert (lat, lng) == (first.lat, first.lng)


def test_empty_string_yields_empty_path():
    assert decode_polyline("") == []


def test_decoding_is_deterministic():
    assert decode_polyline(CANONICAL_POLYLINE) == decode_polyline(CANONICAL_POLYLINE)


def test_single_zero_point():
    assert decode_polyline("??") == [Point(0.0, 0.0)]


def test_variable_width_pairs_resume_at_cursor():
    # Tiny deltas (one char each) followed by a large one (several chars).
    coords = [(0.0, 0.0), (0.00001, -0.00001), (45.12345, -122.54321), (45.12346, -122.54321)]
    encoded = encode_polyline(coords)
    assert_points_close(decode_polyline(encoded), coords)


def test_round_trip_preserves_order_and_duplicates():
    coords = [
        (-33.86785, 151.20732),
        (-33.86785, 151.20732),
        (-27.46977, 153.02513),
        (-12.46344, 130.84565),
        (-33.86785, 151.20732),
    ]
    assert_points_close(decode_polyline(encode_polyline(coords)), coords)


def test_length_matches_encoded_pairs():
    coords = [(i * 0.1, -i * 0.2) for i in range(50)]
    assert len(decode_polyline(encode_polyline(coords))) == 50


def test_precision_six():
    coords = [(-27.470125, 153.021072), (-27.468, 153.0235)]
    encoded = encode_polyline(coords, precision=6)
    assert_points_close(decode_polyline(encoded, precision=6), coords, tol=1e-6)


def test_truncated_chunk_raises():
    # '_' , 'p', '~', 'i' all carry the continuation bit
    with pytest.raises(PolylineDecodeError) as exc_info:
        decode_polyline("_p~i")
    assert exc_info.value.position == 4


def test_truncated_chunk_after_valid_pairs_raises():
    with pytest.raises(PolylineDecodeError):
        decode_polyline(CANONICAL_POLYLINE + "_")


def test_latitude_without_longitude_raises():
    with pytest.raises(PolylineDecodeError) as exc_info:
        decode_polyline("_p~iF")
    assert "longitude" in str(exc_info.value)


def test_character_outside_alphabet_raises():
    with pytest.raises(PolylineDecodeError) as exc_info:
        decode_polyline("?? ?")
    assert exc_info.value.position == 2


def test_decode_error_is_a_value_error():
    with pytest.raises(ValueError):
        decode_polyline("~")


def test_delta_wraps_to_32_bits():
    # A seven-chunk value whose bits above 31 are discarded by 32-bit
    # encoders: (2**31 + 1) << 1 == 2**32 + 2, which wraps to 2 -> delta 1.
    encoded = _encode_value(2**31 + 1) + "?"
    assert len(_encode_value(2**31 + 1)) == 7
    pts = decode_polyline(encoded)
    assert pts[0].lat == pytest.approx(0.00001)
    assert pts[0].lng == 0.0


def test_long_continuation_run_is_bounded():
    # Every '~' carries the continuation bit; only the low 32 bits survive,
    # 0xFFFFFFFF -> int32 -1 -> zig-zag delta 0.
    pts = decode_polyline("~" * 200_000 + "??")
    assert pts == [Point(0.0, 0.0)]


def test_chunks_past_bit_31_are_discarded():
    # The eighth chunk starts at bit 35, so '@' (value 1) there changes nothing.
    assert decode_polyline("~" * 7 + "@" + "?") == decode_polyline("~" * 7 + "?" + "?")


def test_negative_full_range_values():
    coords = [(-90.0, -180.0), (90.0, 180.0)]
    assert_points_close(decode_polyline(encode_polyline(coords)), coords)
