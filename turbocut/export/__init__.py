"""
turbocut.export - Timeline export.

Generates timeline files from retained clips:
- EDL (CMX 3600 style) - DaVinci Resolve, Premiere Pro
- FCPXML (1.10) - Final Cut Pro, DaVinci Resolve
"""

from __future__ import annotations
