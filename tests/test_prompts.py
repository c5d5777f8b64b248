import pytest

from quadpress.compression import ErrorMethod
from quadpress.prompts import Prompter, is_valid_photo, threshold_in_range


def scripted(lines):
    it = iter(lines)

    def read_line():
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    out = []
    return Prompter(read_line, out.append), out


@pytest.mark.parametrize(
    "path, expected",
    [
        ("photo.png", True),
        ("dir.v2/photo.jpeg", True),
        ("photo.jp2", True),
        ("photo.PNG", False),
        ("photo.txt", False),
        ("png", True),
        ("photo.", False),
    ],
)
def test_is_valid_photo(path, expected):
    assert is_valid_photo(path) is expected


@pytest.mark.parametrize(
    "method, value, expected",
    [
        (ErrorMethod.VARIANCE, 1e9, True),
        (ErrorMethod.VARIANCE, -1, False),
        (ErrorMethod.MEAN_ABSOLUTE_DEVIATION, 255, True),
        (ErrorMethod.MEAN_ABSOLUTE_DEVIATION, 256, False),
        (ErrorMethod.MAX_PIXEL_DIFFERENCE, 765, True),
        (ErrorMethod.MAX_PIXEL_DIFFERENCE, 766, False),
        (ErrorMethod.ENTROPY, 24, True),
        (ErrorMethod.ENTROPY, 24.5, False),
        (5, 1, False),
        (ErrorMethod.ENTROPY, float("nan"), False),
    ],
)
def test_threshold_in_range(method, value, expected):
    assert threshold_in_range(method, value) is expected


def test_home_retries_until_valid():
    prompter, out = scripted(["abc", "5", "1"])
    assert prompter.home() == 1
    text = "".join(out)
    assert text.count("Input tidak sesuai.") == 2
    assert text.count("Selamat datang!") == 3


def test_home_accepts_zero():
    prompter, _ = scripted(["0"])
    assert prompter.home() == 0


def test_numbers_read_as_words_on_one_line():
    prompter, _ = scripted(["2 10 4 0"])
    method = prompter.error_method()
    assert method is ErrorMethod.MEAN_ABSOLUTE_DEVIATION
    assert prompter.threshold(method) == 10.0
    assert prompter.min_block_size() == 4
    assert prompter.compression_percentage() == 0.0


def test_integer_uses_leading_digits():
    prompter, _ = scripted(["12abc"])
    assert prompter.min_block_size() == 12


def test_min_block_size_rejects_zero():
    prompter, out = scripted(["0", "3"])
    assert prompter.min_block_size() == 3
    assert "Input tidak sesuai." in "".join(out)


def test_error_method_out_of_range():
    prompter, out = scripted(["7", "4"])
    assert prompter.error_method() is ErrorMethod.ENTROPY
    assert "Input tidak sesuai." in "".join(out)


def test_threshold_unsupported_value():
    prompter, out = scripted(["300", "10"])
    assert prompter.threshold(ErrorMethod.MEAN_ABSOLUTE_DEVIATION) == 10.0
    assert "tidak men-support nilai threshold" in "".join(out)


def test_threshold_not_a_number():
    prompter, out = scripted(["x", "1e2"])
    assert prompter.threshold(ErrorMethod.VARIANCE) == 100.0
    assert "Input tidak sesuai." in "".join(out)


def test_compression_percentage_bounds():
    prompter, out = scripted(["1.5", "0.5"])
    assert prompter.compression_percentage() == 0.5
    assert "Input tidak sesuai." in "".join(out)


def test_import_address_retries_until_file_exists(tmp_path):
    image = tmp_path / "in.png"
    image.write_bytes(b"data")
    prompter, out = scripted(["1", str(tmp_path / "missing.png"), str(image)])
    assert prompter.home() == 1
    assert prompter.import_address() == str(image)
    assert "Gambar tidak ditemukan." in "".join(out)


def test_import_address_rejects_unsupported_extension(tmp_path):
    text_file = tmp_path / "notes.txt"
    text_file.write_text("hello")
    image = tmp_path / "in.bmp"
    image.write_bytes(b"data")
    prompter, out = scripted(["1", str(text_file), str(image)])
    prompter.home()
    assert prompter.import_address() == str(image)
    assert "".join(out).count("Gambar tidak ditemukan.") == 1


def test_import_address_takes_rest_of_line(tmp_path):
    image = tmp_path / "in.png"
    image.write_bytes(b"data")
    prompter, _ = scripted(["1 " + str(image)])
    assert prompter.home() == 1
    assert prompter.import_address() == str(image)


def test_export_address_retries():
    prompter, out = scripted(["0", "result", "result.webp"])
    prompter.compression_percentage()
    assert prompter.export_address() == "result.webp"
    assert "Tolong input alamat lengkap gambar baru dengan benar." in "".join(out)


def test_end_of_input_raises():
    prompter, _ = scripted(["abc"])
    with pytest.raises(EOFError):
        prompter.home()