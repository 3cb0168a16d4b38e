import pytest

from minirt.image import Image


def test_new_image_is_black_and_transparent():
    image = Image(3, 2)
    assert len(image.pixels) == 3 * 2 * 4
    assert all(image.pixel(x, y) == 0 for y in range(2) for x in range(3))


def test_put_pixel_round_trips():
    image = Image(4, 4)
    image.put_pixel(2, 3, 0x11223344)
    assert image.pixel(2, 3) == 0x11223344
    assert image.pixel(3, 2) == 0


def test_put_pixel_byte_layout_is_rgba():
    image = Image(2, 2)
    image.put_pixel(1, 1, 0xAABBCCDD)
    offset = (1 * 2 + 1) * 4
    assert bytes(image.pixels[offset : offset + 4]) == bytes([0xAA, 0xBB, 0xCC, 0xDD])


def test_blend_with_same_colour_is_stable():
    image = Image(1, 1)
    image.put_pixel(0, 0, 0x80402010)
    image.blend_pixel(0, 0, 0x80402010)
    assert image.pixel(0, 0) == 0x80402010


def test_blend_averages_channels():
    image = Image(1, 1)
    image.put_pixel(0, 0, 0x10203040)
    image.blend_pixel(0, 0, 0x30405060)
    assert image.pixel(0, 0) == 0x20304050


def test_blend_onto_black_halves():
    image = Image(1, 1)
    image.blend_pixel(0, 0, 0xFFFFFFFF)
    assert image.pixel(0, 0) == 0x7F7F7F7F


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (2, 0), (0, 2)])
def test_out_of_bounds_raises(x, y):
    image = Image(2, 2)
    with pytest.raises(IndexError):
        image.put_pixel(x, y, 0)
    with pytest.raises(IndexError):
        image.pixel(x, y)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Image(-1, 3)


def test_ppm_header_and_rows():
    image = Image(2, 1)
    image.put_pixel(0, 0, 0xFF0000FF)
    image.put_pixel(1, 0, 0x00FF00FF)
    text = image.to_ppm()
    lines = text.split("\n")
    assert lines[:3] == ["P3", "2 1", "255"]
    assert lines[3] == "255 0 0 0 255 0 "


def test_ppm_has_one_line_per_row():
    image = Image(3, 5)
    lines = image.to_ppm().rstrip("\n").split("\n")
    assert len(lines) == 3 + 5


def test_save_ppm_writes_same_text(tmp_path):
    image = Image(2, 2)
    image.put_pixel(1, 0, 0x01020304)
    target = tmp_path / "out.ppm"
    image.save_ppm(target)
    assert target.read_text(encoding="ascii") == image.to_ppm()