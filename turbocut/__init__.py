"""
TurboCut - timeline export for silence-removed recordings.

Takes the clip intervals kept by the silence remover and writes them out as
an EDL or an FCPXML bundle that DaVinci Resolve and Final Cut Pro rebuild
frame for frame against the original source media.
"""

__version__ = "0.1.0"
