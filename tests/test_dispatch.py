from io import BytesIO

import pytest
from PIL import Image

from imageconvert.errors import (
    DecodeError,
    EncodeError,
    EncodeUnsupportedError,
    ImageIOError,
    UnsupportedFormatError,
)
from imageconvert.formats import (
    AVIF_AVAILABLE,
    HEIF_AVAILABLE,
    JXL_AVAILABLE,
    decode,
    encode,
    resolve_output_format,
)

from conftest import solid_image


# ---------------------------------------------------------------------------
# decode
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('name, format, size', [
    ('a.png', 'PNG', (64, 48)),
    ('a.jpg', 'JPEG', (64, 48)),
    ('a.jpeg', 'JPEG', (64, 48)),
    ('a.gif', 'GIF', (64, 48)),
    ('a.bmp', 'BMP', (64, 48)),
    ('a.tif', 'TIFF', (64, 48)),
    ('a.webp', 'WEBP', (64, 48)),
    # Pillow's default ICO sizes are square
    ('a.ico', 'ICO', (64, 64)),
])
def test_decode_returns_rgba(make_image, name, format, size):
    path = make_image(name, size, format=format)
    image = decode(path)
    assert image.mode == 'RGBA'
    assert image.size == size


def test_decode_extension_is_case_insensitive(make_image):
    path = make_image('UPPER.PNG', (10, 20), format='PNG')
    assert decode(path).size == (10, 20)


def test_decode_sniffs_standard_formats(make_image):
    # JPEG data behind a .png name still decodes
    path = make_image('really_a_jpeg.png', (30, 30), format='JPEG')
    assert decode(path).size == (30, 30)


@pytest.mark.parametrize('mode, name', [
    ('I;16', 'gray16.png'),
    ('I', 'gray32.png'),
    ('I;16', 'gray16.tif'),
    ('F', 'float.tif'),
])
@pytest.mark.parametrize('value, expected', [
    (0x8080, 128),
    (1000, 4),
    (0, 0),
    (65535, 255),
])
def test_decode_scales_wide_grayscale(tmp_path, mode, name, value, expected):
    path = tmp_path / name
    Image.new(mode, (20, 10), value).save(path)

    red, green, blue, alpha = decode(path).getpixel((5, 5))
    assert red == green == blue
    assert abs(red - expected) <= 1
    assert alpha == 255


def test_decode_unknown_extension(tmp_path):
    path = tmp_path / 'drawing.svg'
    path.write_text('<svg/>', encoding='utf-8')
    with pytest.raises(UnsupportedFormatError) as excinfo:
        decode(path)
    assert excinfo.value.format == 'svg'


def test_decode_without_extension(tmp_path):
    path = tmp_path / 'noext'
    path.write_bytes(b'')
    with pytest.raises(UnsupportedFormatError):
        decode(path)


def test_decode_jp2_always_unsupported(tmp_path):
    path = tmp_path / 'photo.jp2'
    path.write_bytes(b'\x00\x00\x00\x0cjP  \r\n\x87\n')
    with pytest.raises(UnsupportedFormatError, match='JPEG 2000'):
        decode(path)


def test_decode_jp2_checked_before_opening(tmp_path):
    with pytest.raises(UnsupportedFormatError):
        decode(tmp_path / 'missing.jp2')


def test_decode_missing_file(tmp_path):
    with pytest.raises(ImageIOError) as excinfo:
        decode(tmp_path / 'missing.png')
    assert isinstance(excinfo.value, OSError)
    assert excinfo.value.path == tmp_path / 'missing.png'


@pytest.mark.parametrize('name', ['broken.png', 'broken.webp', 'broken.ico'])
def test_decode_corrupt_data(tmp_path, name):
    path = tmp_path / name
    path.write_bytes(b'this is not an image')
    with pytest.raises(DecodeError) as excinfo:
        decode(path)
    assert excinfo.value.format == path.suffix[1:]
    assert excinfo.value.__cause__ is excinfo.value.cause


def test_decode_wrong_container_for_strict_format(make_image, tmp_path):
    png = make_image('image.png', (8, 8), format='PNG')
    fake_webp = tmp_path / 'image.webp'
    fake_webp.write_bytes(png.read_bytes())
    with pytest.raises(DecodeError):
        decode(fake_webp)


@pytest.mark.skipif(HEIF_AVAILABLE, reason="pillow-heif installed")
def test_decode_heif_without_plugin(tmp_path):
    path = tmp_path / 'photo.heic'
    path.write_bytes(b'\x00' * 32)
    with pytest.raises(DecodeError, match='pillow-heif'):
        decode(path)


@pytest.mark.skipif(JXL_AVAILABLE, reason="pillow-jxl-plugin installed")
def test_decode_jxl_without_plugin(tmp_path):
    path = tmp_path / 'photo.jxl'
    path.write_bytes(b'\xff\x0a' + b'\x00' * 32)
    with pytest.raises(DecodeError, match='pillow-jxl-plugin'):
        decode(path)


@pytest.mark.skipif(not HEIF_AVAILABLE, reason="pillow-heif not installed")
@pytest.mark.parametrize('name', ['photo.heic', 'photo.heif'])
def test_decode_heif(tmp_path, name):
    path = tmp_path / name
    solid_image((64, 32)).convert('RGB').save(path, format='HEIF')
    image = decode(path)
    assert image.size == (64, 32)
    assert image.mode == 'RGBA'


# ---------------------------------------------------------------------------
# encode
# ---------------------------------------------------------------------------

ROUND_TRIP = ['jpg', 'jpeg', 'png', 'gif', 'bmp', 'tif', 'tiff', 'webp', 'ico']


@pytest.mark.parametrize('format_name', ROUND_TRIP)
def test_encode_round_trip_keeps_dimensions(format_name, tmp_path):
    result = encode(solid_image((64, 48)), format_name, 85)
    assert result.dimensions == (64, 48)

    path = tmp_path / f'out.{format_name}'
    path.write_bytes(result.encoded_bytes)
    assert decode(path).size == (64, 48)


@pytest.mark.skipif(not AVIF_AVAILABLE, reason="no AVIF codec installed")
def test_encode_avif_round_trip(tmp_path):
    result = encode(solid_image((64, 48)), 'avif', 60)
    assert result.format_used == 'AVIF'
    path = tmp_path / 'out.avif'
    path.write_bytes(result.encoded_bytes)
    assert decode(path).size == (64, 48)


def test_encode_icns_produces_icon():
    result = encode(solid_image((128, 128)), 'icns', 85)
    assert result.format_used == 'ICNS'
    assert result.encoded_bytes[:4] == b'icns'


def test_encode_reports_format_and_quality():
    jpeg = encode(solid_image((10, 10)), '.JPG', 70)
    assert jpeg.format_used == 'JPEG'
    assert jpeg.quality_used == 70
    assert jpeg.size_bytes == len(jpeg.encoded_bytes)

    png = encode(solid_image((10, 10)), 'png', 70)
    assert png.format_used == 'PNG'
    assert png.quality_used is None


def test_encode_quality_changes_lossy_output():
    image = Image.effect_noise((64, 64), 64).convert('RGBA')
    low = encode(image, 'jpg', 10)
    high = encode(image, 'jpg', 95)
    assert low.size_bytes < high.size_bytes


def test_encode_jpeg_flattens_alpha_on_white():
    transparent = Image.new('RGBA', (16, 16), (255, 0, 0, 0))
    result = encode(transparent, 'jpg', 95)
    pixel = Image.open(BytesIO(result.encoded_bytes)).getpixel((8, 8))
    assert all(channel > 240 for channel in pixel)


@pytest.mark.parametrize('format_name', ['heic', 'heif', 'jxl', 'jp2', 'HEIC', '.jxl'])
def test_encode_decode_only_formats_fail_explicitly(format_name):
    with pytest.raises(EncodeUnsupportedError) as excinfo:
        encode(solid_image((10, 10)), format_name, 85)
    assert excinfo.value.reason
    assert 'not supported' in str(excinfo.value)
    assert isinstance(excinfo.value, UnsupportedFormatError)


def test_encode_unknown_format():
    with pytest.raises(UnsupportedFormatError) as excinfo:
        encode(solid_image((10, 10)), 'psd', 85)
    assert not isinstance(excinfo.value, EncodeUnsupportedError)
    assert excinfo.value.format == 'psd'


def test_encode_ico_too_large():
    with pytest.raises(EncodeError) as excinfo:
        encode(solid_image((300, 300)), 'ico', 85)
    assert excinfo.value.format == 'ico'
    assert isinstance(excinfo.value.cause, ValueError)


# ---------------------------------------------------------------------------
# output format resolution
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('output_path, explicit, expected', [
    ('out.png', None, 'png'),
    ('dir/out.WEBP', None, 'webp'),
    ('out', None, 'jpg'),
    ('out.png', 'gif', 'gif'),
    ('out.png', '.TIFF', 'tiff'),
    ('out', '', 'jpg'),
])
def test_resolve_output_format(output_path, explicit, expected):
    assert resolve_output_format(output_path, explicit) == expected
