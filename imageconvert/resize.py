"""Resize policies: fit (letterbox), fill (center crop) and stretch"""

from typing import Callable, Dict, Tuple

from PIL import Image, ImageOps

from .options import ProcessOptions, ResizeMode, RGB


# Fixed resampling filter for every mode
RESAMPLE = Image.Resampling.LANCZOS


def contained_size(
    current_w: int,
    current_h: int,
    target_w: int,
    target_h: int
) -> Tuple[int, int]:
    """
    Calculate the largest size with the current aspect ratio inside the target box.

    Args:
        current_w: Current width
        current_h: Current height
        target_w: Box width
        target_h: Box height

    Returns:
        Tuple of (width, height); one side matches the box, the other is <= box
    """
    # Compare ratios with integers to avoid float ties
    if current_w * target_h >= current_h * target_w:
        # Width is the constraint
        final_w = target_w
        final_h = round(current_h * target_w / current_w)
    else:
        # Height is the constraint
        final_h = target_h
        final_w = round(current_w * target_h / current_h)

    return (max(1, min(final_w, target_w)), max(1, min(final_h, target_h)))


def pad_to_box(image: Image.Image, width: int, height: int, color: RGB) -> Image.Image:
    """
    Center image on an opaque canvas of exactly width x height.

    Args:
        image: PIL Image no larger than the box
        width: Canvas width
        height: Canvas height
        color: RGB color of the uncovered bands

    Returns:
        RGBA PIL Image of the requested size
    """
    if image.size == (width, height):
        return image

    canvas = Image.new('RGBA', (width, height), (*color, 255))
    offset = ((width - image.width) // 2, (height - image.height) // 2)
    # No mask: the image's own pixels replace the canvas, alpha included
    canvas.paste(image.convert('RGBA'), offset)
    return canvas


def fit_image(image: Image.Image, width: int, height: int, pad_color: RGB) -> Image.Image:
    """Scale to fit inside the box, then letterbox to the exact box size."""
    scaled = image.resize(contained_size(image.width, image.height, width, height), RESAMPLE)
    return pad_to_box(scaled, width, height, pad_color)


def fill_image(image: Image.Image, width: int, height: int) -> Image.Image:
    """Scale to cover the box and crop the excess around the center."""
    return ImageOps.fit(image, (width, height), method=RESAMPLE, centering=(0.5, 0.5))


def stretch_image(image: Image.Image, width: int, height: int) -> Image.Image:
    """Scale each axis independently to the exact box size."""
    return image.resize((width, height), RESAMPLE)


_POLICIES: Dict[ResizeMode, Callable[[Image.Image, ProcessOptions], Image.Image]] = {
    ResizeMode.FIT: lambda image, o: fit_image(image, o.width, o.height, o.pad_color),
    ResizeMode.FILL: lambda image, o: fill_image(image, o.width, o.height),
    ResizeMode.STRETCH: lambda image, o: stretch_image(image, o.width, o.height),
}


def resize(image: Image.Image, options: ProcessOptions) -> Image.Image:
    """
    Apply the resize policy selected in options.

    Args:
        image: Decoded PIL Image
        options: ProcessOptions with the target box, mode and pad color

    Returns:
        New PIL Image of exactly options.width x options.height

    Raises:
        ValueError: If options.mode is not a known ResizeMode
    """
    try:
        policy = _POLICIES[options.mode]
    except KeyError:
        raise ValueError(f"Unknown resize mode: {options.mode!r}") from None
    return policy(image, options)
