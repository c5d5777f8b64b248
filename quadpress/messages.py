"""Texts shown to the user by the interactive compressor."""

from __future__ import annotations

import math
import os

from quadpress.compression import TreeStats


def home_prompt() -> str:
    """Welcome screen asking whether to compress an image."""
    return (
        "\n"
        "Selamat datang!\n"
        "Program ini dapat membantu mengkompresi gambar. Ingin mencoba?\n"
        "1. Iya\n"
        "0. Keluar\n"
        "> "
    )


def image_address_prompt() -> str:
    """Request for the full path of an image file."""
    return "\nMasukkan alamat lengkap file: "


def error_method_prompt() -> str:
    """Menu of the error measurement methods."""
    return (
        "\n"
        "Silakan pilih metode pengukuran error berikut!\n"
        "1. Variance\n"
        "2. Mean Absolute Deviation\n"
        "3. Max Pixel Difference\n"
        "4. Entropy\n"
        "> "
    )


def threshold_prompt() -> str:
    """Request for the error threshold."""
    return "\nSilakan masukkan nilai ambang batas!\n> "


def min_block_size_prompt() -> str:
    """Request for the minimum block size."""
    return "\nSilakan masukkan nilai minimum dari ukuran blok!\n> "


def compression_percentage_prompt() -> str:
    """Request for the target compression ratio."""
    return "\nSilakan masukkan nilai compression dari 0 sampai 1.0 (0% - 100%)\n> "


def goodbye() -> str:
    """Farewell shown when the user leaves."""
    return "\nSampai jumpa!\nTerima kasih telah menggunakan layanan kami.\n"


def image_not_found() -> str:
    """Notice that the given path is not an acceptable image."""
    return (
        "\n"
        "Gambar tidak ditemukan.\n"
        "Catatan: Kami hanya menerima file dengan format .jpg, .jpeg, .png, .bmp, "
        ".tiff, .tif, .webp, .gif, dan .jp2.\n"
    )


def compression_succeeded() -> str:
    """Notice that compression finished, asking where to save."""
    return "\nGambar berhasil dikompresi!\nDi mana Anda ingin menyimpannya?\n"


def save_succeeded() -> str:
    """Notice that the compressed image was saved."""
    return "\nGambar berhasil disimpan!\n"


def _compression_percent(old_size: int, new_size: int) -> float:
    if old_size:
        ratio = new_size / old_size
    else:
        ratio = math.inf if new_size else math.nan
    return (1.0 - ratio) * 100.0


def process_information(
    duration_ms: int,
    old_path: str | os.PathLike[str],
    new_path: str | os.PathLike[str],
    stats: TreeStats,
) -> str:
    """Summary of a finished compression: time, file sizes, ratio and tree shape."""
    old_size = os.path.getsize(old_path)
    new_size = os.path.getsize(new_path)
    percent = _compression_percent(old_size, new_size)
    return (
        "\n"
        f"Waktu eksekusi kompresi\t: {duration_ms} ms\n"
        f"Ukuran gambar sebelum\t: {old_size} bytes\n"
        f"Ukuran gambar sesudah\t: {new_size} bytes\n"
        f"Persentase kompresi\t: {percent:g}%\n"
        f"Kedalaman simpul\t: {stats.depth}\n"
        f"Banyak simpul pada pohon: {stats.vertices}\n"
    )