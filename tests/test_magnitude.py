import pytest

from threshold_studio.processing.magnitude import calculate_magnitude


def test_black_has_zero_magnitude():
    assert calculate_magnitude((0, 0, 0)) == 0.0


def test_white_has_unit_magnitude():
    assert calculate_magnitude((255, 255, 255)) == pytest.approx(1.0)


@pytest.mark.parametrize("value", [0, 1, 64, 128, 135, 200, 254, 255])
def test_gray_magnitude_is_channel_fraction(value):
    assert calculate_magnitude((value, value, value)) == pytest.approx(value / 255)


def test_pure_red_magnitude():
    assert calculate_magnitude((255, 0, 0)) == pytest.approx(1 / 3 ** 0.5)


def test_alpha_channel_is_ignored():
    assert calculate_magnitude((10, 20, 30, 0)) == calculate_magnitude((10, 20, 30))


def test_mixed_color_stays_normalized():
    magnitude = calculate_magnitude((100, 150, 200))

    assert magnitude == pytest.approx((100 ** 2 + 150 ** 2 + 200 ** 2) ** 0.5 / (3 * 255 ** 2) ** 0.5)
    assert 0.0 <= magnitude <= 1.0
