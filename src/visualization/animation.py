"""
Turn a sequence of exported frames into an animation.

Frames are named prefix + iteration + extension, so a plain lexical sort
would put Output1000 before Output200. `collect_frames` orders them by the
numeric label instead.
"""

import re
from pathlib import Path
from typing import List, Union

from PIL import Image


def frame_label(path: Union[str, Path], prefix: str = "Output", extension: str = ".bmp"):
    """Iteration label of a frame file, or None if the name does not match."""
    pattern = re.escape(prefix) + r"(\d+)" + re.escape(extension) + "$"
    match = re.match(pattern, Path(path).name)
    return int(match.group(1)) if match else None


def collect_frames(directory: Union[str, Path],
                   prefix: str = "Output",
                   extension: str = ".bmp") -> List[Path]:
    """Frame files in `directory`, sorted by iteration label."""
    labelled = []
    for path in Path(directory).glob(f"{prefix}*{extension}"):
        label = frame_label(path, prefix, extension)
        if label is not None:
            labelled.append((label, path))
    return [path for _, path in sorted(labelled)]


def frames_to_gif(paths: List[Union[str, Path]],
                  output_path: Union[str, Path],
                  duration_ms: int = 100,
                  loop: int = 0) -> Path:
    """
    Write frames as an animated GIF.

    Args:
        paths: Frame files in display order
        output_path: Destination .gif file
        duration_ms: Display time per frame
        loop: Number of loops, 0 for infinite

    Returns:
        Path of the written GIF
    """
    if not paths:
        raise ValueError("No frames to animate")

    frames = []
    for path in paths:
        with Image.open(path) as img:
            frames.append(img.convert('RGB'))

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frames[0].save(output_path, save_all=True, append_images=frames[1:],
                   duration=duration_ms, loop=loop)
    return output_path
