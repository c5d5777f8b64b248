# quadpress

quadpress compresses images by splitting them into a quadtree. The tree is built breadth first. A block is split into four smaller blocks when two things hold: half its width times half its height is at least the minimum block size, and its error under the chosen measure reaches the threshold. Every leaf block is then filled with its average colour, with each channel truncated to an integer.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## Interactive use

```
quadpress
```

The program asks for the following, in this order:

1. Whether to continue. Enter `1` to compress an image or `0` to quit.
2. The full path of an existing source image. The extension must be one of jpg, jpeg, png, bmp, tiff, tif, webp, gif or jp2.
3. The error measurement method:
   - `1` Variance. The threshold must be 0 or greater.
   - `2` Mean Absolute Deviation. The threshold must be between 0 and 255.
   - `3` Max Pixel Difference. The threshold must be between 0 and 765.
   - `4` Entropy. The threshold must be between 0 and 24.
4. The threshold.
5. The minimum block size, as an area in pixels, 1 or greater.
6. A target compression ratio from 0 to 1.
   - `0` uses the threshold as given.
   - Any other value runs a binary search over the threshold, from 0 up to the method's upper bound, with at most 20 attempts. Each attempt is measured by the size of the result encoded as PNG, compared with the size of the source file. The search stops early once the result is within half a percent of the target. If all 20 attempts run, the closest result is kept.
7. The path where the compressed image is saved. The extension must be one of the formats listed above. Pillow picks the output format from that extension.

Invalid answers are reported and the question is asked again. The image is read as RGB.

After saving, quadpress reports:

- the compression time in milliseconds
- the file sizes before and after
- the compression percentage
- the depth of the quadtree
- the number of nodes in the quadtree

It then returns to the first question. The prompts and messages are in Indonesian.

`quadpress` exits with status 0 when the user quits. It exits with status 1 when input runs out, or when a file cannot be read or written; in that case the error goes to standard error.

## Library use

```python
import numpy as np
from PIL import Image

from quadpress.compression import ErrorMethod, compress_image

image = np.asarray(Image.open("photo.png").convert("RGB")).copy()
result = compress_image(image, "photo.png", ErrorMethod.VARIANCE, 50.0, 16, 0.0)
Image.fromarray(result.image).save("photo_compressed.png")
print(result.stats.depth, result.stats.vertices)
```

`quadpress.compression` provides the following:

- `ErrorMethod`. The four error measures: `VARIANCE`, `MEAN_ABSOLUTE_DEVIATION`, `MAX_PIXEL_DIFFERENCE` and `ENTROPY`. `max_threshold()` gives the upper bound of the threshold search for each measure: 10000, 255, 765 and 24.
- `quadtree(image, method, threshold, min_block_size)`. Works on a copy of an array of shape `(height, width, 3)`. Returns a `CompressionResult` holding the compressed `image` and a `TreeStats` with the tree's `depth` and number of `vertices`. The input array is not changed.
- `compress_image(image, address, method, threshold, min_block_size, compression_percentage)`. Calls `quadtree` directly when `compression_percentage` is 0. Otherwise it runs the threshold search, taking `address` as the file whose size is the reference.
- `average_color(image, x, y, width, height)` and `is_uniform(image, x, y, width, height, method, threshold, average)`. The per-block building blocks.
- `encoded_size(image, suffix)`. The number of bytes the image takes when encoded in the format for a file extension such as `".png"`.

Each attempt of the threshold search is logged at INFO level on the `quadpress.compression` logger.

`quadpress.prompts.Prompter` asks the interactive questions. It takes any line reader and writer. `quadpress.cli.run(prompter, write)` drives one interactive session with them and returns the number of images saved.