"""Interactive command that compresses images with a quadtree."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Callable

import numpy as np
from PIL import Image

from quadpress import messages
from quadpress.compression import compress_image
from quadpress.prompts import Prompter


def _load_image(path: str) -> np.ndarray:
    with Image.open(path) as img:
        return np.asarray(img.convert("RGB")).copy()


def run(prompter: Prompter, write: Callable[[str], object]) -> int:
    """Compress images until the user chooses to quit; return how many were saved."""
    saved = 0
    while True:
        if prompter.home() == 0:
            write(messages.goodbye())
            return saved

        old_path = prompter.import_address()
        method = prompter.error_method()
        threshold = prompter.threshold(method)
        min_block_size = prompter.min_block_size()
        percentage = prompter.compression_percentage()

        image = _load_image(old_path)

        write("\nMengkompresi...\n")
        start = time.perf_counter()
        result = compress_image(image, old_path, method, threshold, min_block_size, percentage)
        duration_ms = int((time.perf_counter() - start) * 1000)

        write(messages.compression_succeeded())

        new_path = prompter.export_address()
        Image.fromarray(result.image).save(new_path)
        saved += 1

        write(messages.save_succeeded())
        write(messages.process_information(duration_ms, old_path, new_path, result.stats))


def main(argv: list[str] | None = None) -> int:
    """Run the interactive compressor on standard input and output."""
    parser = argparse.ArgumentParser(
        prog="quadpress", description="Compress images interactively with a quadtree."
    )
    parser.parse_args(argv)

    def write(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    try:
        run(Prompter(write=write), write)
    except EOFError:
        return 1
    except (OSError, ValueError) as exc:
        print(f"quadpress: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())