"""
Core: float widths, result models, width-specific arithmetic and RMSSD reduction.

Nothing here touches the filesystem or the command line.
"""
