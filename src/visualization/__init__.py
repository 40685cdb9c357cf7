from .frames import FrameExporter, to_color, render_frame, frame_filename, load_template
from .animation import collect_frames, frames_to_gif, frame_label

__all__ = [
    # Frame export
    'FrameExporter',
    'to_color',
    'render_frame',
    'frame_filename',
    'load_template',
    # Frame sequences
    'collect_frames',
    'frames_to_gif',
    'frame_label',
]
